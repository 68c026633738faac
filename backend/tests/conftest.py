"""Shared fixtures: in-memory database, ASGI client, callers and a recording mailer."""

import os

os.environ.setdefault("AUTH_JWT_SECRET", "test-auth-secret")
os.environ.setdefault("DECISION_TOKEN_SECRET", "test-decision-secret")
os.environ.setdefault("SECRET_KEY", "test-session-secret")
os.environ.setdefault("PUBLIC_APP_URL", "https://builderboard.test")
os.environ.pop("RESEND_API_KEY", None)
os.environ.pop("SLACK_WEBHOOK_URL", None)

import re
import time
from dataclasses import dataclass, field
from uuid import UUID, uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from builderboard.config import get_settings
from builderboard.exceptions import NotificationDeliveryException
from builderboard.main import app
from builderboard.models import Base
from builderboard.models.base import get_db
from builderboard.services.auth_service import CallerIdentity
from builderboard.services.email_service import get_email_sender

settings = get_settings()

JOB_PAYLOAD = {
    "title": "Open source CAD plugin",
    "description": "Looking for a co-builder to help ship a parametric CAD plugin for makers and hobbyists.",
    "skills_needed": ["python", "geometry"],
    "commitment": "5-10 hrs/week",
    "location": "Remote",
    "resource_links": [{"name": "Repo", "url": "github.com/example/cad"}],
}

APPLICATION_PAYLOAD = {
    "applicant_email": "ada@example.com",
    "applicant_name": "Ada Lovelace",
    "application_message": "I have built two CAD kernels and would love to help.",
    "profile_links": ["github.com/ada"],
    "phone_country_code": "+44",
    "phone_number": "+447700900123",
}

_LINK_PATTERN = re.compile(r"/applications/[0-9a-f-]+/(accept|reject)\?token=([\w\-\.]+)")


def make_access_token(
    user_id: UUID,
    email: str,
    full_name: str | None = None,
    expires_in: int = 3600,
    secret: str | None = None,
) -> str:
    now = int(time.time())
    claims = {
        "sub": str(user_id),
        "email": email,
        "aud": settings.auth_jwt_audience,
        "iat": now,
        "exp": now + expires_in,
        "user_metadata": {"full_name": full_name} if full_name else {},
    }
    return jwt.encode(claims, secret or settings.auth_jwt_secret, algorithm="HS256")


@dataclass
class TestUser:
    __test__ = False

    email: str
    full_name: str
    id: UUID = field(default_factory=uuid4)

    @property
    def identity(self) -> CallerIdentity:
        return CallerIdentity(user_id=self.id, email=self.email, full_name=self.full_name)

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {make_access_token(self.id, self.email, self.full_name)}"}


class RecordingSender:
    """Stands in for the Resend client; records what would have been sent."""

    def __init__(self):
        self.sent = []
        self.fail = False

    async def send(self, to, subject, html):
        recipients = [to] if isinstance(to, str) else list(to)
        if self.fail:
            raise NotificationDeliveryException(f"Email '{subject}' failed")
        self.sent.append({"to": recipients, "subject": subject, "html": html})
        return f"msg-{len(self.sent)}"

    def decision_tokens(self, index: int = -1) -> dict[str, str]:
        """Tokens from the accept/reject links of a sent owner email."""
        return dict(_LINK_PATTERN.findall(self.sent[index]["html"]))


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def mailer():
    return RecordingSender()


@pytest.fixture
async def client(session_factory, mailer):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: mailer
    # https base URL: the session cookie is marked Secure
    async with AsyncClient(transport=ASGITransport(app=app), base_url="https://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def owner():
    return TestUser(email="owner@example.com", full_name="Grace Hopper")


@pytest.fixture
def applicant():
    return TestUser(email="ada@example.com", full_name="Ada Lovelace")


@pytest.fixture
def other_user():
    return TestUser(email="linus@example.com", full_name="Linus Builder")


@pytest.fixture
async def job(client, owner):
    response = await client.post("/api/v1/jobs", json=JOB_PAYLOAD, headers=owner.headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
async def application(client, job, applicant, mailer):
    """A pending application plus the decision tokens emailed to the owner."""
    response = await client.post(
        f"/api/v1/jobs/{job['id']}/apply",
        json=APPLICATION_PAYLOAD,
        headers=applicant.headers,
    )
    assert response.status_code == 201, response.text
    body = response.json()
    return {"id": body["application_id"], "tokens": mailer.decision_tokens(), **body}
