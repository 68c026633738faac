"""Pydantic schemas for Profile model."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from builderboard.services.validation import normalize_url, validate_phone_number


class ProfileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    full_name: str
    avatar_url: str | None = None
    bio: str | None = None
    portfolio_url: list[str]
    skills: list[str]
    phone_number: str | None = None
    created_at: datetime
    updated_at: datetime


class ProfileUpdate(BaseModel):
    full_name: str = Field(min_length=2, max_length=100)
    bio: str | None = Field(default=None, max_length=500)
    avatar_url: str | None = None
    portfolio_url: list[str] = Field(default_factory=list, max_length=10)
    skills: list[str] = Field(default_factory=list, max_length=20)
    phone_number: str | None = Field(default=None, max_length=32)

    @field_validator("full_name", mode="before")
    @classmethod
    def _strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("avatar_url")
    @classmethod
    def _normalize_avatar(cls, value: str | None) -> str | None:
        return normalize_url(value) if value else None

    @field_validator("portfolio_url")
    @classmethod
    def _normalize_portfolio(cls, links: list[str]) -> list[str]:
        return [normalize_url(link) for link in links]

    @field_validator("phone_number")
    @classmethod
    def _check_phone(cls, value: str | None) -> str | None:
        return validate_phone_number(value)
