"""Read-side listings for dashboards.

Each listing builds its projection (JobCard, SentConnectionCard, ...) here,
once, so routers return these types unchanged.
"""

import math
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from builderboard.models.application import Application, ACCEPTED
from builderboard.models.job import Job
from builderboard.models.profile import Profile
from builderboard.models.shortlist import Shortlist
from builderboard.schemas.application import ApplicationRead
from builderboard.schemas.job import (
    CreatorSummary,
    JobCard,
    JobRead,
    MyProjectCard,
    MyProjectsPage,
    Page,
    SentConnectionCard,
)
from builderboard.services.auth_service import CallerIdentity
from builderboard.services.job_service import get_owned_job

JOBS_PAGE_SIZE = 10
RECOMMENDED_PAGE_SIZE = 20
MY_PROJECTS_PAGE_SIZE = 10
APPLICATIONS_PAGE_SIZE = 10

ANONYMOUS_CREATOR = "Anonymous Builder"


def creator_summary(profile: Profile | None) -> CreatorSummary:
    if profile is None:
        return CreatorSummary(full_name=ANONYMOUS_CREATOR)
    return CreatorSummary(
        id=profile.id,
        full_name=profile.full_name or ANONYMOUS_CREATOR,
        avatar_url=profile.avatar_url,
    )


def job_card(job: Job) -> JobCard:
    return JobCard(
        id=job.id,
        title=job.title,
        description=job.description,
        location=job.location,
        created_at=job.created_at,
        skills_needed=job.skills_needed or [],
        commitment=job.commitment,
        status=job.status,
        creator=creator_summary(job.owner),
    )


def _has_more(total: int, page_index: int, size: int) -> bool:
    return total > (page_index + 1) * size


async def _count(db: AsyncSession, query) -> int:
    result = await db.execute(select(func.count()).select_from(query.subquery()))
    return result.scalar() or 0


async def list_jobs(db: AsyncSession, page: int = 0, active_only: bool = False, size: int = JOBS_PAGE_SIZE) -> Page[JobCard]:
    """All jobs (or only active ones), newest first. ``page`` is 0-based."""
    base = select(Job.id)
    query = select(Job).options(selectinload(Job.owner))
    if active_only:
        base = base.where(Job.status == "active")
        query = query.where(Job.status == "active")

    total = await _count(db, base)
    result = await db.execute(
        query.order_by(Job.created_at.desc(), Job.id).offset(page * size).limit(size)
    )
    items = [job_card(job) for job in result.scalars().all()]
    return Page[JobCard](items=items, has_more=_has_more(total, page, size), total=total, page=page)


async def list_recommended_jobs(db: AsyncSession, page: int = 0) -> Page[JobCard]:
    return await list_jobs(db, page=page, active_only=True, size=RECOMMENDED_PAGE_SIZE)


async def list_shortlisted_jobs(db: AsyncSession, caller: CallerIdentity, page: int = 0) -> Page[JobCard]:
    """Jobs the caller bookmarked, most recently bookmarked first."""
    size = JOBS_PAGE_SIZE
    total = await _count(db, select(Shortlist.id).where(Shortlist.user_profile_id == caller.user_id))
    result = await db.execute(
        select(Shortlist)
        .options(selectinload(Shortlist.job).selectinload(Job.owner))
        .where(Shortlist.user_profile_id == caller.user_id)
        .order_by(Shortlist.created_at.desc(), Shortlist.id)
        .offset(page * size)
        .limit(size)
    )
    items = [job_card(row.job) for row in result.scalars().all()]
    return Page[JobCard](items=items, has_more=_has_more(total, page, size), total=total, page=page)


async def list_sent_connections(db: AsyncSession, caller: CallerIdentity, page: int = 0) -> Page[SentConnectionCard]:
    """Jobs the caller applied to, with each application's status."""
    size = JOBS_PAGE_SIZE
    total = await _count(db, select(Application.id).where(Application.applicant_user_id == caller.user_id))
    result = await db.execute(
        select(Application)
        .options(selectinload(Application.job).selectinload(Job.owner))
        .where(Application.applicant_user_id == caller.user_id)
        .order_by(Application.created_at.desc(), Application.id)
        .offset(page * size)
        .limit(size)
    )
    items = [
        SentConnectionCard(
            **job_card(application.job).model_dump(),
            application_id=application.id,
            application_status=application.status,
            application_date=application.created_at,
        )
        for application in result.scalars().all()
    ]
    return Page[SentConnectionCard](items=items, has_more=_has_more(total, page, size), total=total, page=page)


async def list_my_projects(db: AsyncSession, caller: CallerIdentity, page: int = 1) -> MyProjectsPage:
    """The caller's own jobs with shortlist and connection counts. ``page`` is 1-based."""
    size = MY_PROJECTS_PAGE_SIZE
    page_index = page - 1

    shortlist_count = (
        select(func.count(Shortlist.id))
        .where(Shortlist.job_id == Job.id)
        .correlate(Job)
        .scalar_subquery()
    )
    connection_count = (
        select(func.count(Application.id))
        .where(Application.job_id == Job.id, Application.status == ACCEPTED)
        .correlate(Job)
        .scalar_subquery()
    )

    total = await _count(db, select(Job.id).where(Job.owner_profile_id == caller.user_id))
    result = await db.execute(
        select(Job, shortlist_count.label("shortlist_count"), connection_count.label("connection_count"))
        .options(selectinload(Job.owner))
        .where(Job.owner_profile_id == caller.user_id)
        .order_by(Job.created_at.desc(), Job.id)
        .offset(page_index * size)
        .limit(size)
    )
    items = [
        MyProjectCard(
            **JobRead.model_validate(job).model_dump(),
            creator=creator_summary(job.owner),
            shortlist_count=shortlists or 0,
            connection_count=connections or 0,
        )
        for job, shortlists, connections in result.all()
    ]
    return MyProjectsPage(
        items=items,
        has_more=_has_more(total, page_index, size),
        total=total,
        page=page,
        total_pages=math.ceil(total / size),
        items_per_page=size,
    )


async def list_job_applications(
    db: AsyncSession,
    caller: CallerIdentity,
    job_id: UUID,
    page: int = 0,
) -> Page[ApplicationRead]:
    """Applications received for one of the caller's jobs, newest first."""
    await get_owned_job(db, caller, job_id)

    size = APPLICATIONS_PAGE_SIZE
    total = await _count(db, select(Application.id).where(Application.job_id == job_id))
    result = await db.execute(
        select(Application)
        .where(Application.job_id == job_id)
        .order_by(Application.created_at.desc(), Application.id)
        .offset(page * size)
        .limit(size)
    )
    items = [ApplicationRead.model_validate(application) for application in result.scalars().all()]
    return Page[ApplicationRead](items=items, has_more=_has_more(total, page, size), total=total, page=page)
