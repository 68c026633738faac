"""Authentication dependencies for FastAPI routes."""

import secrets
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from builderboard.exceptions import AuthenticationException, AuthorizationException
from builderboard.models.base import get_db
from builderboard.services.auth_service import (
    CallerIdentity,
    get_or_create_profile,
    verify_access_token,
)

SAFE_METHODS = ("GET", "HEAD", "OPTIONS")


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header[len("Bearer "):].strip() or None
    return None


def _session(request: Request) -> dict:
    return request.session if "session" in request.scope else {}


def get_current_identity(request: Request) -> CallerIdentity | None:
    """Resolve the caller from a bearer token, falling back to the session cookie."""
    token = _bearer_token(request)
    if token:
        try:
            return verify_access_token(token)
        except AuthenticationException:
            return None

    session = _session(request)
    user_id = session.get("user_id")
    email = session.get("email")
    if not user_id or not email:
        return None
    try:
        return CallerIdentity(user_id=UUID(user_id), email=email, full_name=session.get("full_name"))
    except ValueError:
        return None


def check_csrf(request: Request) -> None:
    """Cookie-authenticated writes must echo the session CSRF token."""
    if request.method in SAFE_METHODS or _bearer_token(request):
        return
    token = request.headers.get("X-CSRF-Token", "")
    if not validate_csrf_token(request, token):
        raise AuthorizationException("Invalid CSRF token")


async def require_caller(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> CallerIdentity:
    """Return the caller or raise 401 (for API endpoints)."""
    identity = get_current_identity(request)
    if identity is None:
        raise AuthenticationException("Login required")
    check_csrf(request)
    await get_or_create_profile(db, identity)
    return identity


def ensure_csrf_token(request: Request) -> str:
    """Get or create a CSRF token in the session."""
    token = request.session.get("csrf_token")
    if not token:
        token = secrets.token_urlsafe(32)
        request.session["csrf_token"] = token
    return token


def validate_csrf_token(request: Request, token: str) -> bool:
    """Validate a submitted CSRF token against the session token."""
    session_token = _session(request).get("csrf_token")
    if not session_token or not token:
        return False
    return secrets.compare_digest(session_token, token)
