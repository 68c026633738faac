"""
Tests for shortlists
"""
from uuid import uuid4

from sqlalchemy import func, select

from builderboard.models import Shortlist


class TestShortlists:
    """GET/POST/DELETE /jobs/{job_id}/shortlist"""

    async def test_not_shortlisted_initially(self, client, job, applicant):
        response = await client.get(f"/api/v1/jobs/{job['id']}/shortlist", headers=applicant.headers)
        assert response.json() == {"shortlisted": False, "data": None}

    async def test_add_then_status(self, client, job, applicant):
        added = await client.post(f"/api/v1/jobs/{job['id']}/shortlist", headers=applicant.headers)
        assert added.status_code == 200
        assert added.json()["job_id"] == job["id"]
        assert added.json()["user_profile_id"] == str(applicant.id)

        status = await client.get(f"/api/v1/jobs/{job['id']}/shortlist", headers=applicant.headers)
        assert status.json()["shortlisted"] is True
        assert status.json()["data"]["id"] == added.json()["id"]

    async def test_add_is_idempotent(self, client, job, applicant, session_factory):
        first = await client.post(f"/api/v1/jobs/{job['id']}/shortlist", headers=applicant.headers)
        second = await client.post(f"/api/v1/jobs/{job['id']}/shortlist", headers=applicant.headers)

        assert first.json()["id"] == second.json()["id"]
        async with session_factory() as session:
            count = (await session.execute(select(func.count(Shortlist.id)))).scalar()
        assert count == 1

    async def test_shortlists_are_per_user(self, client, job, applicant, other_user):
        await client.post(f"/api/v1/jobs/{job['id']}/shortlist", headers=applicant.headers)

        response = await client.get(f"/api/v1/jobs/{job['id']}/shortlist", headers=other_user.headers)
        assert response.json()["shortlisted"] is False

    async def test_remove(self, client, job, applicant):
        await client.post(f"/api/v1/jobs/{job['id']}/shortlist", headers=applicant.headers)

        removed = await client.delete(f"/api/v1/jobs/{job['id']}/shortlist", headers=applicant.headers)
        assert removed.json() == {"success": True}

        status = await client.get(f"/api/v1/jobs/{job['id']}/shortlist", headers=applicant.headers)
        assert status.json()["shortlisted"] is False

    async def test_remove_when_absent_succeeds(self, client, job, applicant):
        response = await client.delete(f"/api/v1/jobs/{job['id']}/shortlist", headers=applicant.headers)
        assert response.status_code == 200

    async def test_unknown_job_is_404(self, client, applicant):
        response = await client.post(f"/api/v1/jobs/{uuid4()}/shortlist", headers=applicant.headers)
        assert response.status_code == 404

    async def test_requires_authentication(self, client, job):
        response = await client.get(f"/api/v1/jobs/{job['id']}/shortlist")
        assert response.status_code == 401
