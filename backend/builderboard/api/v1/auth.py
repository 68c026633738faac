"""Session endpoints.

Sign-in happens at the hosted auth provider; these endpoints turn its access
token into a server session for browser clients.
"""

import logging

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from builderboard.dependencies.auth import ensure_csrf_token
from builderboard.models.base import get_db
from builderboard.services.auth_service import get_or_create_profile, verify_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class SessionCreate(BaseModel):
    access_token: str


@router.post("/session")
async def create_session(
    payload: SessionCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """Exchange a provider access token for a session cookie."""
    identity = verify_access_token(payload.access_token)
    profile = await get_or_create_profile(db, identity)

    request.session.clear()
    request.session["user_id"] = str(identity.user_id)
    request.session["email"] = identity.email
    if identity.full_name:
        request.session["full_name"] = identity.full_name
    csrf_token = ensure_csrf_token(request)

    logger.info(f"Session started for {identity.user_id}")
    return {
        "user_id": str(profile.id),
        "email": profile.email,
        "full_name": profile.full_name,
        "csrf_token": csrf_token,
    }


@router.post("/logout")
async def logout(request: Request):
    request.session.clear()
    return {"success": True}


@router.get("/csrf")
async def csrf_token(request: Request):
    return {"csrf_token": ensure_csrf_token(request)}
