"""SQLAlchemy models. Importing this package registers every mapper."""

from builderboard.models.base import Base
from builderboard.models.profile import Profile
from builderboard.models.job import Job
from builderboard.models.application import Application
from builderboard.models.application_token import ApplicationToken
from builderboard.models.shortlist import Shortlist

__all__ = [
    "Base",
    "Profile",
    "Job",
    "Application",
    "ApplicationToken",
    "Shortlist",
]
