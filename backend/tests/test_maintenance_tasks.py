"""
Tests for decision token housekeeping
"""
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

from builderboard.models import ApplicationToken, Base
from builderboard.tasks.maintenance_tasks import purge_tokens

NOW = datetime(2026, 6, 1, tzinfo=timezone.utc)


@pytest.fixture
def sync_db():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine)()
    yield session
    session.close()
    engine.dispose()


def _token(name, *, used=False, used_days_ago=None, expires_in_days=30):
    return ApplicationToken(
        token_id=name,
        application_id=uuid4(),
        action="accept",
        used=used,
        used_at=NOW - timedelta(days=used_days_ago) if used_days_ago is not None else None,
        expires_at=NOW + timedelta(days=expires_in_days),
    )


class TestPurgeTokens:
    def test_removes_only_long_spent_tokens(self, sync_db):
        sync_db.add_all([
            _token("fresh"),
            _token("recently-used", used=True, used_days_ago=2),
            _token("long-used", used=True, used_days_ago=45),
            _token("recently-expired", expires_in_days=-3),
            _token("long-expired", expires_in_days=-40),
        ])
        sync_db.commit()

        deleted = purge_tokens(sync_db, retention_days=30, now=NOW)

        remaining = set(sync_db.execute(select(ApplicationToken.token_id)).scalars())
        assert deleted == 2
        assert remaining == {"fresh", "recently-used", "recently-expired"}
