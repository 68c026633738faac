"""Single-use decision tokens for the accept/reject links in owner emails.

Each emailed link carries a signed JWT naming the application, the action and
a random token id (``jti``). The signature only proves the link was minted
here; the ``application_tokens`` row is what makes it single-use. Verification
walks these steps in order and stops at the first failure:

1. signature and expiry
2. action and application id match the endpoint that was hit
3. a persisted row exists for (jti, application, action)
4. the row is not already used
5. an atomic ``UPDATE ... WHERE used = false`` flips it, so two concurrent
   clicks cannot both succeed

The caller performs the status transition in the same transaction, after
consumption. If the transition fails the rollback restores the token.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import JWTError, jwt
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from builderboard.config import get_settings
from builderboard.exceptions import InvalidTokenException, TokenAlreadyUsedException
from builderboard.models.application_token import ApplicationToken, DECISION_ACTIONS

logger = logging.getLogger(__name__)
settings = get_settings()

DECISION_TOKEN_ALGORITHM = "HS256"


def _encode(payload: dict) -> str:
    return jwt.encode(payload, settings.decision_token_secret, algorithm=DECISION_TOKEN_ALGORITHM)


def decode_decision_token(raw_token: str) -> dict:
    """Verify signature and expiry. Raises InvalidTokenException."""
    try:
        payload = jwt.decode(
            raw_token,
            settings.decision_token_secret,
            algorithms=[DECISION_TOKEN_ALGORITHM],
        )
    except JWTError as e:
        logger.warning(f"Decision token rejected: {e}")
        raise InvalidTokenException()

    if not isinstance(payload.get("jti"), str) or payload.get("action") not in DECISION_ACTIONS:
        raise InvalidTokenException()
    return payload


async def issue_decision_tokens(
    db: AsyncSession,
    application_id: UUID,
    owner_user_id: UUID,
) -> dict[str, str]:
    """Mint one accept and one reject token and persist their records.

    Rows are flushed before returning; the caller commits before the links
    leave in an email.
    """
    now = datetime.now(timezone.utc)
    expires_at = now + timedelta(days=settings.decision_token_ttl_days)

    tokens = {}
    for action in DECISION_ACTIONS:
        token_id = secrets.token_urlsafe(32)
        db.add(
            ApplicationToken(
                token_id=token_id,
                application_id=application_id,
                action=action,
                used=False,
                expires_at=expires_at,
            )
        )
        tokens[action] = _encode({
            "jti": token_id,
            "action": action,
            "application_id": str(application_id),
            "owner_user_id": str(owner_user_id),
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
        })

    await db.flush()
    logger.info(f"Issued decision tokens for application {application_id}")
    return tokens


async def verify_and_consume_token(
    db: AsyncSession,
    raw_token: str,
    application_id: UUID,
    expected_action: str,
) -> ApplicationToken:
    """Verify a decision token and mark it used. See module docstring."""
    payload = decode_decision_token(raw_token)

    if payload["action"] != expected_action or payload.get("application_id") != str(application_id):
        logger.warning(
            f"Decision token mismatch: token for {payload.get('action')}/{payload.get('application_id')} "
            f"presented to {expected_action}/{application_id}"
        )
        raise InvalidTokenException()

    token_id = payload["jti"]
    result = await db.execute(
        select(ApplicationToken).where(
            ApplicationToken.token_id == token_id,
            ApplicationToken.application_id == application_id,
            ApplicationToken.action == expected_action,
        )
    )
    record = result.scalar_one_or_none()
    if record is None:
        logger.warning(f"Decision token {token_id[:8]}... has no record")
        raise InvalidTokenException()

    if record.used:
        raise TokenAlreadyUsedException()

    used_at = datetime.now(timezone.utc)
    consumed = await db.execute(
        update(ApplicationToken)
        .where(ApplicationToken.token_id == token_id, ApplicationToken.used == False)  # noqa: E712
        .values(used=True, used_at=used_at)
        .execution_options(synchronize_session=False)
    )
    if consumed.rowcount != 1:
        # Another request consumed it between the read and the update
        raise TokenAlreadyUsedException()

    await db.refresh(record)
    logger.info(f"Consumed {expected_action} token for application {application_id}")
    return record
