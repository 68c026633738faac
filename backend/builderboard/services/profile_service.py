"""Profile reads and owner edits."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from builderboard.models.profile import Profile
from builderboard.schemas.profile import ProfileUpdate
from builderboard.services.auth_service import CallerIdentity, get_or_create_profile

logger = logging.getLogger(__name__)


async def get_profile(db: AsyncSession, caller: CallerIdentity) -> Profile:
    return await get_or_create_profile(db, caller)


async def update_profile(db: AsyncSession, caller: CallerIdentity, changes: ProfileUpdate) -> Profile:
    """Overwrite the caller's editable profile fields. Email and id stay with the auth provider."""
    profile = await get_or_create_profile(db, caller)

    for field, value in changes.model_dump().items():
        setattr(profile, field, value)

    await db.flush()
    await db.refresh(profile, ["updated_at"])
    logger.info(f"Profile {profile.id} updated")
    return profile
