"""Application workflow: submission, deduplication and decisions.

An application is created ``pending`` and moves exactly once, to
``accepted`` or ``rejected``. Decisions come either from the authenticated
job owner or from a consumed single-use decision token. Notifications are
sent after the state change is committed and never roll it back.
"""

import logging
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from builderboard.config import get_settings
from builderboard.exceptions import (
    ApplicationAlreadyDecidedException,
    AuthenticationException,
    AuthorizationException,
    DuplicateApplicationException,
    InvalidTokenException,
    ResourceNotFoundException,
    ValidationException,
)
from builderboard.models.application import Application, PENDING, ACCEPTED, REJECTED
from builderboard.models.application_token import ApplicationToken, ACCEPT, REJECT
from builderboard.models.job import Job
from builderboard.schemas.application import ApplicationCreate
from builderboard.services.auth_service import CallerIdentity
from builderboard.services.decision_token_service import issue_decision_tokens, verify_and_consume_token
from builderboard.services.email_service import EmailSender
from builderboard.services.job_service import get_job
from builderboard.services import notification_service

logger = logging.getLogger(__name__)
settings = get_settings()

ACTION_TO_STATUS = {ACCEPT: ACCEPTED, REJECT: REJECTED}


async def _load_application(db: AsyncSession, application_id: UUID) -> Application:
    result = await db.execute(
        select(Application)
        .options(selectinload(Application.job).selectinload(Job.owner))
        .where(Application.id == application_id)
    )
    application = result.scalar_one_or_none()
    if not application:
        raise ResourceNotFoundException("Application", application_id)
    return application


async def submit_application(
    db: AsyncSession,
    caller: CallerIdentity,
    job_id: UUID,
    payload: ApplicationCreate,
    mailer: EmailSender,
) -> tuple[Application, Job]:
    """Create a pending application and email the job owner.

    The pre-insert lookup gives a friendly fast path; the unique constraint
    on (job_id, applicant_user_id) is what actually rules out duplicates
    under concurrent submissions.
    """
    job = await get_job(db, job_id)

    existing = await db.execute(
        select(Application.id).where(
            Application.job_id == job.id,
            Application.applicant_user_id == caller.user_id,
        )
    )
    if existing.scalar_one_or_none():
        logger.info(f"Duplicate application rejected: job={job.id} applicant={caller.user_id}")
        raise DuplicateApplicationException()

    application = Application(
        job_id=job.id,
        applicant_user_id=caller.user_id,
        applicant_email=str(payload.applicant_email),
        applicant_name=payload.applicant_name,
        profile_links=payload.profile_links,
        application_message=payload.application_message,
        phone_country_code=payload.phone_country_code,
        phone_number=payload.phone_number,
        status=PENDING,
    )
    db.add(application)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        logger.info(f"Duplicate application lost insert race: job={job_id} applicant={caller.user_id}")
        raise DuplicateApplicationException()

    tokens = await issue_decision_tokens(db, application.id, job.owner_profile_id)

    # Token records must be durable before their links are emailed
    await db.commit()
    logger.info(f"Application {application.id} created for job {job.id} by {caller.user_id}")

    await notification_service.notify_owner_of_application(
        mailer,
        job=job,
        owner=job.owner,
        application=application,
        tokens=tokens,
    )
    return application, job


async def transition_application_status(
    db: AsyncSession,
    application_id: UUID,
    new_status: str,
    actor: CallerIdentity | ApplicationToken,
    mailer: EmailSender,
) -> Application:
    """Move a pending application to ``accepted`` or ``rejected``.

    ``actor`` is the authenticated owner or an already consumed decision
    token for this application and action.
    """
    if new_status not in (ACCEPTED, REJECTED):
        raise ValidationException("status", f"Unsupported application status: {new_status}")

    application = await _load_application(db, application_id)
    job = application.job
    owner = job.owner

    if isinstance(actor, ApplicationToken):
        if actor.application_id != application.id or ACTION_TO_STATUS.get(actor.action) != new_status or not actor.used:
            raise InvalidTokenException()
    elif isinstance(actor, CallerIdentity):
        if job.owner_profile_id != actor.user_id:
            logger.warning(f"User {actor.user_id} tried to decide application {application.id} they do not own")
            raise AuthorizationException("Unauthorized to decide this application")
    else:
        raise TypeError(f"Unsupported actor: {actor!r}")

    if application.status != PENDING:
        raise ApplicationAlreadyDecidedException(application.status)

    result = await db.execute(
        update(Application)
        .where(Application.id == application.id, Application.status == PENDING)
        .values(status=new_status, updated_at=func.now())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        await db.refresh(application, ["status"])
        raise ApplicationAlreadyDecidedException(application.status)

    await db.refresh(application, ["status", "updated_at"])
    await db.commit()
    logger.info(f"Application {application.id} {new_status} (job {job.id})")

    if new_status == ACCEPTED:
        await notification_service.notify_connection_established(
            mailer, job=job, owner=owner, application=application,
        )
    elif settings.notify_applicant_on_reject:
        await notification_service.notify_applicant_declined(mailer, job=job, application=application)

    return application


async def decide_application(
    db: AsyncSession,
    application_id: UUID,
    action: str,
    mailer: EmailSender,
    *,
    raw_token: str | None = None,
    caller: CallerIdentity | None = None,
) -> Application:
    """Accept or reject through an emailed token, or as the signed-in owner.

    A token, when present, takes precedence over the session.
    """
    new_status = ACTION_TO_STATUS.get(action)
    if new_status is None:
        raise ValidationException("action", f"Unsupported decision action: {action}")

    if raw_token:
        actor = await verify_and_consume_token(db, raw_token, application_id, action)
    elif caller is not None:
        actor = caller
    else:
        raise AuthenticationException("Authorization required")

    return await transition_application_status(db, application_id, new_status, actor, mailer)


async def get_application(db: AsyncSession, caller: CallerIdentity, application_id: UUID) -> Application:
    """Read one application as its job owner or its applicant."""
    application = await _load_application(db, application_id)
    if caller.user_id not in (application.applicant_user_id, application.job.owner_profile_id):
        raise AuthorizationException("Unauthorized to view this application")
    return application
