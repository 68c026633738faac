"""Job (project) writes and owner-scoped reads."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from builderboard.exceptions import AuthorizationException, ResourceNotFoundException
from builderboard.models.job import Job
from builderboard.schemas.job import JobCreate, JobStatusUpdate
from builderboard.services.auth_service import CallerIdentity

logger = logging.getLogger(__name__)


async def create_job(db: AsyncSession, caller: CallerIdentity, payload: JobCreate) -> Job:
    job = Job(
        owner_profile_id=caller.user_id,
        status="active",
        **payload.model_dump(mode="json"),
    )
    db.add(job)
    await db.flush()
    logger.info(f"Job {job.id} created by {caller.user_id}")
    return job


async def get_job(db: AsyncSession, job_id: UUID) -> Job:
    """Load a job with its creator, or raise 404."""
    result = await db.execute(
        select(Job).options(selectinload(Job.owner)).where(Job.id == job_id)
    )
    job = result.scalar_one_or_none()
    if not job:
        raise ResourceNotFoundException("Job", job_id)
    return job


async def get_owned_job(db: AsyncSession, caller: CallerIdentity, job_id: UUID) -> Job:
    job = await get_job(db, job_id)
    if job.owner_profile_id != caller.user_id:
        raise AuthorizationException("Unauthorized - You do not own this project")
    return job


async def update_job(
    db: AsyncSession,
    caller: CallerIdentity,
    job_id: UUID,
    changes: JobCreate | JobStatusUpdate,
) -> Job:
    """Apply a status toggle or a full field edit. The owner never changes."""
    job = await get_owned_job(db, caller, job_id)

    for field, value in changes.model_dump(mode="json").items():
        setattr(job, field, value)

    await db.flush()
    await db.refresh(job, ["updated_at"])
    logger.info(f"Job {job.id} updated by owner ({', '.join(changes.model_fields_set) or 'no fields'})")
    return job
