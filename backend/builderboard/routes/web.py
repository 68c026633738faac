"""Server-rendered pages behind the emailed accept/reject links.

Following a link only shows a confirmation form. Mail clients prefetch links,
so the token is consumed by the form's POST, never by the GET.
"""

import logging
from pathlib import Path
from uuid import UUID

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from builderboard.config import get_settings
from builderboard.exceptions import DomainException
from builderboard.models.application_token import DECISION_ACTIONS
from builderboard.models.base import get_db
from builderboard.services import application_service
from builderboard.services.email_service import EmailSender, get_email_sender

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(tags=["web"])
templates = Jinja2Templates(directory=Path(__file__).resolve().parent.parent / "templates")

INVALID_LINK_MESSAGE = "This link is invalid or has expired"


def _invalid_link(request: Request, status_code: int):
    return templates.TemplateResponse(
        request,
        "decisions/result.html",
        {"app_name": settings.app_name, "outcome": None, "message": INVALID_LINK_MESSAGE},
        status_code=status_code,
    )


@router.get("/applications/{application_id}/{action}", response_class=HTMLResponse)
async def confirm_decision(
    request: Request,
    application_id: UUID,
    action: str,
    token: str = "",
):
    if action not in DECISION_ACTIONS:
        return _invalid_link(request, 404)
    if not token:
        return _invalid_link(request, 401)
    return templates.TemplateResponse(
        request,
        "decisions/confirm.html",
        {"app_name": settings.app_name, "application_id": application_id, "action": action, "token": token},
    )


@router.post("/applications/{application_id}/{action}", response_class=HTMLResponse)
async def submit_decision(
    request: Request,
    application_id: UUID,
    action: str,
    db: AsyncSession = Depends(get_db),
    mailer: EmailSender = Depends(get_email_sender),
):
    if action not in DECISION_ACTIONS:
        return _invalid_link(request, 404)

    form = await request.form()
    token = str(form.get("token", "")) or request.query_params.get("token", "")

    try:
        application = await application_service.decide_application(
            db, application_id, action, mailer, raw_token=token or None,
        )
    except DomainException as e:
        # Undo a consumed token when the transition itself failed
        await db.rollback()
        logger.info(f"Decision link for application {application_id} refused: {e.code}")
        return templates.TemplateResponse(
            request,
            "decisions/result.html",
            {"app_name": settings.app_name, "outcome": None, "message": e.message},
            status_code=e.status_code,
        )

    return templates.TemplateResponse(
        request,
        "decisions/result.html",
        {"app_name": settings.app_name, "outcome": application.status, "message": None},
    )
