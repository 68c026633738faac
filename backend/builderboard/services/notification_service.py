"""Workflow notifications.

Every function here is best effort. A failed send is logged and alerted,
then reported to the caller as ``False``; it never undoes the state change
that triggered it.
"""

import logging
from uuid import UUID

from jinja2 import Environment, PackageLoader, select_autoescape

from builderboard.config import get_settings
from builderboard.exceptions import NotificationDeliveryException
from builderboard.models.application import Application
from builderboard.models.job import Job
from builderboard.models.profile import Profile
from builderboard.services import alert_service
from builderboard.services.email_service import EmailSender

logger = logging.getLogger(__name__)
settings = get_settings()

templates = Environment(
    loader=PackageLoader("builderboard", "templates"),
    autoescape=select_autoescape(["html"]),
)


def decision_link(application_id: UUID, action: str, token: str) -> str:
    """Public URL of the confirmation page for an emailed decision."""
    base = settings.public_app_url.rstrip("/")
    return f"{base}/applications/{application_id}/{action}?token={token}"


async def _deliver(
    mailer: EmailSender,
    to: str | list[str],
    subject: str,
    template: str,
    context: dict,
    failure_message: str,
) -> bool:
    html = templates.get_template(template).render(app_name=settings.app_name, **context)
    try:
        await mailer.send(to, subject, html)
    except NotificationDeliveryException as e:
        logger.error(f"{failure_message}: {e}")
        await alert_service.send_alert(failure_message, e)
        return False
    return True


async def notify_owner_of_application(
    mailer: EmailSender,
    *,
    job: Job,
    owner: Profile,
    application: Application,
    tokens: dict[str, str],
) -> bool:
    """Email the job owner the application with accept/reject links."""
    return await _deliver(
        mailer,
        owner.email,
        f"New Application for {job.title}",
        "email/application_received.html",
        {
            "job": job,
            "owner": owner,
            "application": application,
            "accept_url": decision_link(application.id, "accept", tokens["accept"]),
            "reject_url": decision_link(application.id, "reject", tokens["reject"]),
        },
        f"Failed to send job application email for job {job.id}",
    )


async def notify_connection_established(
    mailer: EmailSender,
    *,
    job: Job,
    owner: Profile,
    application: Application,
) -> bool:
    """Email both parties each other's contact address."""
    return await _deliver(
        mailer,
        [owner.email, application.applicant_email],
        f"Connection Established for {job.title}",
        "email/connection_established.html",
        {"job": job, "owner": owner, "application": application},
        f"Failed to send connection email for application {application.id}",
    )


async def notify_applicant_declined(
    mailer: EmailSender,
    *,
    job: Job,
    application: Application,
) -> bool:
    """Tell the applicant the owner passed on their request."""
    return await _deliver(
        mailer,
        application.applicant_email,
        f"Update on your application for {job.title}",
        "email/application_declined.html",
        {"job": job, "application": application},
        f"Failed to send rejection email for application {application.id}",
    )
