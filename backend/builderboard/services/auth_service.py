"""Authentication helpers: provider access tokens and caller profiles.

Sign-in itself happens at the hosted auth provider. The provider issues HS256
access tokens signed with the project's JWT secret; this module verifies them
and maps the identity onto a local ``profiles`` row.
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from builderboard.config import get_settings
from builderboard.exceptions import AuthenticationException
from builderboard.models.profile import Profile

logger = logging.getLogger(__name__)
settings = get_settings()

ACCESS_TOKEN_ALGORITHM = "HS256"


@dataclass(frozen=True)
class CallerIdentity:
    """The verified user behind a request."""

    user_id: UUID
    email: str
    full_name: str | None = None


def verify_access_token(token: str) -> CallerIdentity:
    """Verify a provider access token and return the identity it names."""
    try:
        payload = jwt.decode(
            token,
            settings.auth_jwt_secret,
            algorithms=[ACCESS_TOKEN_ALGORITHM],
            audience=settings.auth_jwt_audience,
        )
    except JWTError as e:
        logger.warning(f"Access token verification failed: {e}")
        raise AuthenticationException("Invalid or expired token")

    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError:
        raise AuthenticationException("Invalid or expired token")

    email = payload.get("email")
    if not email:
        raise AuthenticationException("Invalid or expired token")

    metadata = payload.get("user_metadata") or {}
    return CallerIdentity(
        user_id=user_id,
        email=email.strip().lower(),
        full_name=metadata.get("full_name"),
    )


def _default_full_name(identity: CallerIdentity) -> str:
    name = (identity.full_name or "").strip()
    if len(name) >= 2:
        return name[:100]
    return identity.email.split("@", 1)[0][:100] or "Builder"


async def get_or_create_profile(db: AsyncSession, identity: CallerIdentity) -> Profile:
    """Return the caller's profile, provisioning it on first sight."""
    result = await db.execute(select(Profile).where(Profile.id == identity.user_id))
    profile = result.scalar_one_or_none()
    if profile:
        return profile

    profile = Profile(
        id=identity.user_id,
        email=identity.email,
        full_name=_default_full_name(identity),
        portfolio_url=[],
        skills=[],
    )
    db.add(profile)
    try:
        await db.flush()
    except IntegrityError:
        # A concurrent first request created it
        await db.rollback()
        result = await db.execute(select(Profile).where(Profile.id == identity.user_id))
        return result.scalar_one()

    logger.info(f"Provisioned profile {profile.id} for {identity.email}")
    return profile
