"""Job API endpoints: listings, creation, shortlists and applying."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from builderboard.dependencies.auth import require_caller
from builderboard.models.base import get_db
from builderboard.schemas.application import ApplicationCreate, ApplicationRead, ApplicationSubmitted
from builderboard.schemas.job import JobCard, JobCreate, JobDetail, JobRead, Page, SentConnectionCard
from builderboard.schemas.shortlist import ShortlistRead, ShortlistStatus
from builderboard.services import application_service, listing_service, shortlist_service
from builderboard.services.auth_service import CallerIdentity
from builderboard.services.email_service import EmailSender, get_email_sender
from builderboard.services.job_service import create_job, get_job

router = APIRouter(prefix="/jobs", tags=["jobs"])


# Static paths first so they are not captured by /{job_id}

@router.get("", response_model=Page[JobCard])
async def list_jobs(
    page: int = Query(0, ge=0, description="0-based page index"),
    caller: CallerIdentity = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    """All jobs, newest first."""
    return await listing_service.list_jobs(db, page=page)


@router.get("/recommended", response_model=Page[JobCard])
async def list_recommended(
    page: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    """Active jobs, newest first."""
    return await listing_service.list_recommended_jobs(db, page=page)


@router.get("/shortlisted", response_model=Page[JobCard])
async def list_shortlisted(
    page: int = Query(0, ge=0),
    caller: CallerIdentity = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    return await listing_service.list_shortlisted_jobs(db, caller, page=page)


@router.get("/connections/sent", response_model=Page[SentConnectionCard])
async def list_sent_connections(
    page: int = Query(0, ge=0),
    caller: CallerIdentity = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    """Jobs the caller has applied to."""
    return await listing_service.list_sent_connections(db, caller, page=page)


@router.post("", response_model=JobRead, status_code=status.HTTP_201_CREATED)
async def create(
    payload: JobCreate,
    caller: CallerIdentity = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    return await create_job(db, caller, payload)


@router.get("/{job_id}", response_model=JobDetail)
async def get_job_detail(job_id: UUID, db: AsyncSession = Depends(get_db)):
    job = await get_job(db, job_id)
    return JobDetail(
        **JobRead.model_validate(job).model_dump(),
        creator=listing_service.creator_summary(job.owner),
    )


@router.post("/{job_id}/apply", response_model=ApplicationSubmitted, status_code=status.HTTP_201_CREATED)
async def apply(
    job_id: UUID,
    payload: ApplicationCreate,
    caller: CallerIdentity = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
    mailer: EmailSender = Depends(get_email_sender),
):
    """Submit an application; the job owner is emailed accept/reject links."""
    application, job = await application_service.submit_application(db, caller, job_id, payload, mailer)
    return ApplicationSubmitted(
        application_id=application.id,
        status=application.status,
        creator_name=listing_service.creator_summary(job.owner).full_name,
        applicant_email=application.applicant_email,
    )


@router.get("/{job_id}/applications", response_model=Page[ApplicationRead])
async def list_applications(
    job_id: UUID,
    page: int = Query(0, ge=0),
    caller: CallerIdentity = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    """Applications received for one of the caller's jobs."""
    return await listing_service.list_job_applications(db, caller, job_id, page=page)


@router.get("/{job_id}/shortlist", response_model=ShortlistStatus)
async def shortlist_status(
    job_id: UUID,
    caller: CallerIdentity = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    shortlist = await shortlist_service.get_shortlist(db, caller, job_id)
    return ShortlistStatus(
        shortlisted=shortlist is not None,
        data=ShortlistRead.model_validate(shortlist) if shortlist else None,
    )


@router.post("/{job_id}/shortlist", response_model=ShortlistRead)
async def add_to_shortlist(
    job_id: UUID,
    caller: CallerIdentity = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    return await shortlist_service.add_shortlist(db, caller, job_id)


@router.delete("/{job_id}/shortlist")
async def remove_from_shortlist(
    job_id: UUID,
    caller: CallerIdentity = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    await shortlist_service.remove_shortlist(db, caller, job_id)
    return {"success": True}
