"""Operational alerts posted to a Slack incoming webhook."""

import logging

import httpx

from builderboard.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


async def send_alert(message: str, error: Exception | None = None) -> bool:
    """Post an alert. Best effort: failures are logged, never raised."""
    text = f":rotating_light: {message}"
    if error is not None:
        text += f"\nError: {type(error).__name__}: {error}"

    if not settings.slack_webhook_url:
        logger.warning(f"Alert (no Slack webhook configured): {message}")
        return False

    try:
        async with httpx.AsyncClient(timeout=10) as client:
            response = await client.post(
                settings.slack_webhook_url,
                json={"text": text},
            )
            response.raise_for_status()
    except httpx.HTTPError as e:
        logger.error(f"Slack alert failed: {e}")
        return False
    return True
