"""Pydantic schemas package."""

from builderboard.schemas.application import (
    ApplicationCreate,
    ApplicationRead,
    ApplicationSubmitted,
    DecisionResult,
)
from builderboard.schemas.job import (
    CreatorSummary,
    JobCard,
    JobCreate,
    JobDetail,
    JobRead,
    JobStatusUpdate,
    MyProjectCard,
    MyProjectsPage,
    Page,
    ResourceLink,
    SentConnectionCard,
)
from builderboard.schemas.profile import ProfileRead, ProfileUpdate
from builderboard.schemas.shortlist import ShortlistRead, ShortlistStatus

__all__ = [
    # Application
    "ApplicationCreate",
    "ApplicationRead",
    "ApplicationSubmitted",
    "DecisionResult",
    # Job
    "CreatorSummary",
    "JobCard",
    "JobCreate",
    "JobDetail",
    "JobRead",
    "JobStatusUpdate",
    "MyProjectCard",
    "MyProjectsPage",
    "Page",
    "ResourceLink",
    "SentConnectionCard",
    # Profile
    "ProfileRead",
    "ProfileUpdate",
    # Shortlist
    "ShortlistRead",
    "ShortlistStatus",
]
