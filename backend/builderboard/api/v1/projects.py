"""Owner-side project endpoints."""

from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from builderboard.dependencies.auth import require_caller
from builderboard.exceptions import ValidationException
from builderboard.models.base import get_db
from builderboard.schemas.job import JobCreate, JobRead, JobStatusUpdate, MyProjectsPage
from builderboard.services import listing_service
from builderboard.services.auth_service import CallerIdentity
from builderboard.services.job_service import get_owned_job, update_job

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("/my-projects", response_model=MyProjectsPage)
async def my_projects(
    page: int = Query(1, ge=1, description="1-based page number"),
    caller: CallerIdentity = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    """The caller's jobs with shortlist and connection counts."""
    return await listing_service.list_my_projects(db, caller, page=page)


@router.get("/{project_id}", response_model=JobRead)
async def get_project(
    project_id: UUID,
    caller: CallerIdentity = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    return await get_owned_job(db, caller, project_id)


@router.patch("/{project_id}", response_model=JobRead)
async def patch_project(
    project_id: UUID,
    body: dict = Body(...),
    caller: CallerIdentity = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    """Toggle the status (``{"status": ...}`` alone) or replace the editable fields."""
    if "status" in body and set(body) != {"status"}:
        raise ValidationException("status", "Status must be updated on its own")

    schema = JobStatusUpdate if set(body) == {"status"} else JobCreate
    try:
        changes = schema.model_validate(body)
    except ValidationError as e:
        raise RequestValidationError(e.errors(), body=body)

    return await update_job(db, caller, project_id, changes)
