"""Shortlists: one bookmark row per (job, user)."""

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from builderboard.exceptions import ResourceNotFoundException
from builderboard.models.job import Job
from builderboard.models.shortlist import Shortlist
from builderboard.services.auth_service import CallerIdentity

logger = logging.getLogger(__name__)


async def get_shortlist(db: AsyncSession, caller: CallerIdentity, job_id: UUID) -> Shortlist | None:
    result = await db.execute(
        select(Shortlist).where(Shortlist.job_id == job_id, Shortlist.user_profile_id == caller.user_id)
    )
    return result.scalar_one_or_none()


async def add_shortlist(db: AsyncSession, caller: CallerIdentity, job_id: UUID) -> Shortlist:
    """Bookmark a job. Bookmarking twice returns the existing row."""
    existing = await get_shortlist(db, caller, job_id)
    if existing:
        return existing

    job_exists = await db.execute(select(Job.id).where(Job.id == job_id))
    if job_exists.scalar_one_or_none() is None:
        raise ResourceNotFoundException("Job", job_id)

    shortlist = Shortlist(job_id=job_id, user_profile_id=caller.user_id)
    db.add(shortlist)
    try:
        await db.flush()
    except IntegrityError:
        # Concurrent bookmark of the same job by the same user
        await db.rollback()
        existing = await get_shortlist(db, caller, job_id)
        if existing is None:
            raise
        return existing

    logger.info(f"Job {job_id} shortlisted by {caller.user_id}")
    return shortlist


async def remove_shortlist(db: AsyncSession, caller: CallerIdentity, job_id: UUID) -> bool:
    result = await db.execute(
        delete(Shortlist).where(Shortlist.job_id == job_id, Shortlist.user_profile_id == caller.user_id)
    )
    return result.rowcount > 0
