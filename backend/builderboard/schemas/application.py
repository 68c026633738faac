"""Pydantic schemas for Application model."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from builderboard.services.validation import normalize_url, validate_phone_number


class ApplicationCreate(BaseModel):
    """Body of POST /jobs/{job_id}/apply.

    The applicant's identity always comes from the authenticated caller;
    identity fields in the body (``applicant_user_id``) are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    applicant_email: EmailStr
    applicant_name: str = Field(min_length=2, max_length=100)
    application_message: str = Field(min_length=1, max_length=500)
    profile_links: list[str] = Field(default_factory=list, max_length=10)
    phone_country_code: str | None = Field(default=None, max_length=8)
    phone_number: str | None = Field(default=None, max_length=32)

    @field_validator("applicant_name", mode="before")
    @classmethod
    def _strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("profile_links")
    @classmethod
    def _normalize_links(cls, links: list[str]) -> list[str]:
        return [normalize_url(link) for link in links]

    @field_validator("phone_number")
    @classmethod
    def _check_phone(cls, value: str | None) -> str | None:
        return validate_phone_number(value)


class ApplicationRead(BaseModel):
    """Full application output."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    job_id: UUID
    applicant_user_id: UUID
    applicant_email: str
    applicant_name: str
    profile_links: list[str]
    application_message: str
    phone_country_code: str | None = None
    phone_number: str | None = None
    status: str
    created_at: datetime
    updated_at: datetime


class ApplicationSubmitted(BaseModel):
    """Response to a successful submission."""

    success: bool = True
    application_id: UUID
    status: str
    creator_name: str
    applicant_email: str


class DecisionResult(BaseModel):
    """Response to an accept/reject call."""

    success: bool = True
    application_id: UUID
    status: str
