"""Pydantic schemas for Job model and its listing projections."""

from datetime import datetime
from typing import Generic, Literal, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from builderboard.services.validation import normalize_url

Commitment = Literal["< 5 hrs/week", "5-10 hrs/week", "10-20 hrs/week", "20-40 hrs/week"]
JobStatus = Literal["active", "inactive"]

T = TypeVar("T")


class ResourceLink(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    url: str

    @field_validator("url")
    @classmethod
    def _normalize(cls, value: str) -> str:
        return normalize_url(value)


class JobBase(BaseModel):
    """Fields a job owner can write."""

    title: str = Field(min_length=3, max_length=100)
    description: str = Field(min_length=50, max_length=2000)
    skills_needed: list[str] = Field(min_length=1, max_length=8)
    commitment: Commitment
    location: str | None = Field(default=None, max_length=255)
    resource_links: list[ResourceLink] = Field(default_factory=list)


class JobCreate(JobBase):
    """Body of POST /jobs and full-edit PATCH /projects/{id}."""


class JobStatusUpdate(BaseModel):
    """Body of a status-only PATCH /projects/{id}."""

    model_config = ConfigDict(extra="forbid")

    status: JobStatus


class CreatorSummary(BaseModel):
    """Creator projection embedded in job cards."""

    id: UUID | None = None
    full_name: str
    avatar_url: str | None = None


class JobRead(BaseModel):
    """Full job output."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_profile_id: UUID
    title: str
    description: str
    location: str | None = None
    skills_needed: list[str]
    commitment: str
    resource_links: list[ResourceLink]
    status: str
    created_at: datetime
    updated_at: datetime


class JobCard(BaseModel):
    """Job info for list views."""

    id: UUID
    title: str
    description: str
    location: str | None = None
    created_at: datetime
    skills_needed: list[str]
    commitment: str
    status: str
    creator: CreatorSummary


class JobDetail(JobRead):
    """Job with embedded creator info."""

    creator: CreatorSummary


class SentConnectionCard(JobCard):
    """A job the caller applied to, with the state of that application."""

    application_id: UUID
    application_status: str
    application_date: datetime


class MyProjectCard(JobRead):
    """An owned job with engagement counts."""

    creator: CreatorSummary
    shortlist_count: int
    connection_count: int


class Page(BaseModel, Generic[T]):
    """One page of a listing."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[T]
    has_more: bool = Field(alias="hasMore")
    total: int
    page: int


class MyProjectsPage(Page[MyProjectCard]):
    total_pages: int = Field(alias="totalPages")
    items_per_page: int = Field(alias="itemsPerPage")
