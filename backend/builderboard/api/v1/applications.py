"""Application decision and read endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Header, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from builderboard.dependencies.auth import check_csrf, get_current_identity, require_caller
from builderboard.models.application_token import ACCEPT, REJECT
from builderboard.models.base import get_db
from builderboard.schemas.application import ApplicationRead, DecisionResult
from builderboard.services import application_service
from builderboard.services.auth_service import CallerIdentity
from builderboard.services.email_service import EmailSender, get_email_sender

router = APIRouter(prefix="/applications", tags=["applications"])


async def _decide(
    request: Request,
    db: AsyncSession,
    mailer: EmailSender,
    application_id: UUID,
    action: str,
    token: str | None,
) -> DecisionResult:
    caller = None
    if not token:
        caller = get_current_identity(request)
        if caller is not None:
            check_csrf(request)

    application = await application_service.decide_application(
        db, application_id, action, mailer, raw_token=token, caller=caller,
    )
    return DecisionResult(application_id=application.id, status=application.status)


@router.post("/{application_id}/accept", response_model=DecisionResult)
async def accept_application(
    application_id: UUID,
    request: Request,
    token: str | None = Query(None, description="Emailed decision token"),
    x_decision_token: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
    mailer: EmailSender = Depends(get_email_sender),
):
    """Accept with an emailed token or as the signed-in job owner."""
    return await _decide(request, db, mailer, application_id, ACCEPT, token or x_decision_token)


@router.post("/{application_id}/reject", response_model=DecisionResult)
async def reject_application(
    application_id: UUID,
    request: Request,
    token: str | None = Query(None, description="Emailed decision token"),
    x_decision_token: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
    mailer: EmailSender = Depends(get_email_sender),
):
    """Reject with an emailed token or as the signed-in job owner."""
    return await _decide(request, db, mailer, application_id, REJECT, token or x_decision_token)


@router.get("/{application_id}", response_model=ApplicationRead)
async def read_application(
    application_id: UUID,
    caller: CallerIdentity = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    return await application_service.get_application(db, caller, application_id)
