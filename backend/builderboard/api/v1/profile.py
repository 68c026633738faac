"""Caller profile endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from builderboard.dependencies.auth import require_caller
from builderboard.models.base import get_db
from builderboard.schemas.profile import ProfileRead, ProfileUpdate
from builderboard.services.auth_service import CallerIdentity
from builderboard.services.profile_service import get_profile, update_profile

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/me", response_model=ProfileRead)
async def read_my_profile(
    caller: CallerIdentity = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    return await get_profile(db, caller)


@router.put("/me", response_model=ProfileRead)
async def update_my_profile(
    changes: ProfileUpdate,
    caller: CallerIdentity = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    return await update_profile(db, caller, changes)
