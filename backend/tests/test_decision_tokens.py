"""
Tests for single-use decision tokens
"""
import time
from uuid import uuid4

import pytest
from jose import jwt
from sqlalchemy import select, update

from builderboard.config import get_settings
from builderboard.exceptions import InvalidTokenException, TokenAlreadyUsedException
from builderboard.models import Application, ApplicationToken, Job, Profile
from builderboard.services.decision_token_service import (
    decode_decision_token,
    issue_decision_tokens,
    verify_and_consume_token,
)

from conftest import JOB_PAYLOAD

settings = get_settings()


@pytest.fixture
async def pending_application(db):
    owner = Profile(id=uuid4(), email="owner@example.com", full_name="Grace Hopper", portfolio_url=[], skills=[])
    applicant = Profile(id=uuid4(), email="ada@example.com", full_name="Ada Lovelace", portfolio_url=[], skills=[])
    db.add_all([owner, applicant])
    await db.flush()

    fields = {k: v for k, v in JOB_PAYLOAD.items() if k != "resource_links"}
    job = Job(owner_profile_id=owner.id, status="active", resource_links=[], **fields)
    db.add(job)
    await db.flush()

    application = Application(
        job_id=job.id,
        applicant_user_id=applicant.id,
        applicant_email=applicant.email,
        applicant_name=applicant.full_name,
        profile_links=[],
        application_message="Let me help",
        status="pending",
    )
    db.add(application)
    await db.flush()
    await db.commit()
    return application, owner


async def _token_rows(db, application_id):
    result = await db.execute(
        select(ApplicationToken).where(ApplicationToken.application_id == application_id)
    )
    return {row.action: row for row in result.scalars().all()}


class TestIssueDecisionTokens:
    """Minting tokens"""

    async def test_issues_one_unused_record_per_action(self, db, pending_application):
        application, owner = pending_application
        tokens = await issue_decision_tokens(db, application.id, owner.id)

        assert set(tokens) == {"accept", "reject"}
        assert tokens["accept"] != tokens["reject"]

        rows = await _token_rows(db, application.id)
        assert set(rows) == {"accept", "reject"}
        assert not any(row.used for row in rows.values())

    async def test_payload_names_application_and_action(self, db, pending_application):
        application, owner = pending_application
        tokens = await issue_decision_tokens(db, application.id, owner.id)

        payload = decode_decision_token(tokens["accept"])
        assert payload["action"] == "accept"
        assert payload["application_id"] == str(application.id)
        assert payload["owner_user_id"] == str(owner.id)
        assert payload["exp"] > payload["iat"]

        rows = await _token_rows(db, application.id)
        assert rows["accept"].token_id == payload["jti"]


class TestVerifyAndConsumeToken:
    """Verification order and single use"""

    async def test_consumes_valid_token(self, db, pending_application):
        application, owner = pending_application
        tokens = await issue_decision_tokens(db, application.id, owner.id)

        record = await verify_and_consume_token(db, tokens["accept"], application.id, "accept")

        assert record.used is True
        assert record.used_at is not None
        rows = await _token_rows(db, application.id)
        assert rows["reject"].used is False

    async def test_second_use_is_rejected(self, db, pending_application):
        application, owner = pending_application
        tokens = await issue_decision_tokens(db, application.id, owner.id)
        await verify_and_consume_token(db, tokens["reject"], application.id, "reject")

        with pytest.raises(TokenAlreadyUsedException, match="already been used"):
            await verify_and_consume_token(db, tokens["reject"], application.id, "reject")

    async def test_wrong_action_is_invalid(self, db, pending_application):
        application, owner = pending_application
        tokens = await issue_decision_tokens(db, application.id, owner.id)

        with pytest.raises(InvalidTokenException):
            await verify_and_consume_token(db, tokens["accept"], application.id, "reject")

        rows = await _token_rows(db, application.id)
        assert rows["accept"].used is False

    async def test_wrong_application_is_invalid(self, db, pending_application):
        application, owner = pending_application
        tokens = await issue_decision_tokens(db, application.id, owner.id)

        with pytest.raises(InvalidTokenException):
            await verify_and_consume_token(db, tokens["accept"], uuid4(), "accept")

    async def test_tampered_signature_is_invalid(self, db, pending_application):
        application, owner = pending_application
        tokens = await issue_decision_tokens(db, application.id, owner.id)
        header, payload, signature = tokens["accept"].split(".")
        forged = ".".join([header, payload, signature[::-1]])

        with pytest.raises(InvalidTokenException):
            await verify_and_consume_token(db, forged, application.id, "accept")

    async def test_token_signed_with_other_secret_is_invalid(self, db, pending_application):
        application, _ = pending_application
        forged = jwt.encode(
            {"jti": "x" * 43, "action": "accept", "application_id": str(application.id)},
            "some-other-secret",
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenException):
            await verify_and_consume_token(db, forged, application.id, "accept")

    async def test_expired_token_is_invalid(self, db, pending_application):
        application, owner = pending_application
        tokens = await issue_decision_tokens(db, application.id, owner.id)
        jti = decode_decision_token(tokens["accept"])["jti"]
        expired = jwt.encode(
            {
                "jti": jti,
                "action": "accept",
                "application_id": str(application.id),
                "iat": int(time.time()) - 7200,
                "exp": int(time.time()) - 3600,
            },
            settings.decision_token_secret,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenException):
            await verify_and_consume_token(db, expired, application.id, "accept")

    async def test_signed_token_without_record_is_invalid(self, db, pending_application):
        application, _ = pending_application
        orphan = jwt.encode(
            {"jti": "no-such-token", "action": "accept", "application_id": str(application.id)},
            settings.decision_token_secret,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenException):
            await verify_and_consume_token(db, orphan, application.id, "accept")

    async def test_concurrent_consumer_wins_race(self, db, pending_application):
        """The conditional update refuses a row another request flipped after our read"""
        application, owner = pending_application
        tokens = await issue_decision_tokens(db, application.id, owner.id)
        rows = await _token_rows(db, application.id)
        assert rows["accept"].used is False

        # Flip the row behind the session's back; the loaded object still says unused
        await db.execute(
            update(ApplicationToken)
            .where(ApplicationToken.token_id == rows["accept"].token_id)
            .values(used=True)
            .execution_options(synchronize_session=False)
        )

        with pytest.raises(TokenAlreadyUsedException):
            await verify_and_consume_token(db, tokens["accept"], application.id, "accept")
