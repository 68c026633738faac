"""Maintenance tasks: decision token housekeeping."""

import logging
from datetime import datetime, timezone, timedelta

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from builderboard.config import get_settings
from builderboard.tasks.celery_app import celery_app
from builderboard.models.base import SyncSessionLocal
from builderboard.models.application_token import ApplicationToken

logger = logging.getLogger(__name__)
settings = get_settings()


def purge_tokens(db: Session, retention_days: int, now: datetime | None = None) -> int:
    """Delete token rows used, or expired, more than ``retention_days`` ago."""
    cutoff = (now or datetime.now(timezone.utc)) - timedelta(days=retention_days)
    deleted = db.query(ApplicationToken).filter(
        or_(
            and_(ApplicationToken.used == True, ApplicationToken.used_at < cutoff),  # noqa: E712
            ApplicationToken.expires_at < cutoff,
        )
    ).delete(synchronize_session=False)
    db.commit()
    return deleted


@celery_app.task(name="builderboard.tasks.maintenance_tasks.purge_spent_decision_tokens")
def purge_spent_decision_tokens():
    """Daily cleanup of decision tokens that can no longer be redeemed."""
    db = SyncSessionLocal()
    try:
        deleted = purge_tokens(db, settings.token_retention_days)
        logger.info(f"Purged {deleted} spent decision tokens")
        return {"deleted": deleted}
    finally:
        db.close()
