"""Pydantic schemas for Shortlist model."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ShortlistRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    job_id: UUID
    user_profile_id: UUID
    created_at: datetime


class ShortlistStatus(BaseModel):
    shortlisted: bool
    data: ShortlistRead | None = None
