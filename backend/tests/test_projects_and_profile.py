"""
Tests for job creation, owner project edits and profiles
"""
from uuid import uuid4

from conftest import JOB_PAYLOAD


class TestJobs:
    """POST /jobs and GET /jobs/{id}"""

    async def test_create_job(self, client, owner):
        response = await client.post("/api/v1/jobs", json=JOB_PAYLOAD, headers=owner.headers)

        assert response.status_code == 201
        body = response.json()
        assert body["owner_profile_id"] == str(owner.id)
        assert body["status"] == "active"
        assert body["resource_links"] == [{"name": "Repo", "url": "https://github.com/example/cad"}]

    async def test_create_job_validation(self, client, owner):
        response = await client.post(
            "/api/v1/jobs",
            json={**JOB_PAYLOAD, "title": "ab", "commitment": "forever"},
            headers=owner.headers,
        )
        assert response.status_code == 400
        fields = {detail["field"] for detail in response.json()["details"]}
        assert {"title", "commitment"} <= fields

    async def test_public_detail_with_creator(self, client, job, owner):
        response = await client.get(f"/api/v1/jobs/{job['id']}")

        assert response.status_code == 200
        assert response.json()["creator"]["full_name"] == owner.full_name

    async def test_unknown_job(self, client):
        response = await client.get(f"/api/v1/jobs/{uuid4()}")
        assert response.status_code == 404


class TestProjects:
    """GET/PATCH /projects/{id}"""

    async def test_owner_reads_project(self, client, job, owner):
        response = await client.get(f"/api/v1/projects/{job['id']}", headers=owner.headers)
        assert response.status_code == 200
        assert response.json()["id"] == job["id"]

    async def test_non_owner_is_forbidden(self, client, job, other_user):
        response = await client.get(f"/api/v1/projects/{job['id']}", headers=other_user.headers)
        assert response.status_code == 403
        assert response.json()["message"] == "Unauthorized - You do not own this project"

    async def test_status_toggle(self, client, job, owner):
        response = await client.patch(
            f"/api/v1/projects/{job['id']}",
            json={"status": "inactive"},
            headers=owner.headers,
        )
        assert response.status_code == 200
        assert response.json()["status"] == "inactive"
        assert response.json()["title"] == job["title"]

    async def test_invalid_status(self, client, job, owner):
        response = await client.patch(
            f"/api/v1/projects/{job['id']}",
            json={"status": "archived"},
            headers=owner.headers,
        )
        assert response.status_code == 400

    async def test_full_edit_keeps_owner(self, client, job, owner, other_user):
        response = await client.patch(
            f"/api/v1/projects/{job['id']}",
            json={**JOB_PAYLOAD, "title": "Renamed project", "owner_profile_id": str(other_user.id)},
            headers=owner.headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Renamed project"
        assert body["owner_profile_id"] == str(owner.id)

    async def test_full_edit_is_validated(self, client, job, owner):
        response = await client.patch(
            f"/api/v1/projects/{job['id']}",
            json={**JOB_PAYLOAD, "description": "short"},
            headers=owner.headers,
        )
        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "description"

    async def test_status_mixed_with_edit_is_rejected(self, client, job, owner):
        response = await client.patch(
            f"/api/v1/projects/{job['id']}",
            json={**JOB_PAYLOAD, "title": "Renamed project", "status": "inactive"},
            headers=owner.headers,
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "status"

        stored = await client.get(f"/api/v1/projects/{job['id']}", headers=owner.headers)
        assert stored.json()["status"] == "active"
        assert stored.json()["title"] == job["title"]

    async def test_non_owner_cannot_edit(self, client, job, other_user):
        response = await client.patch(
            f"/api/v1/projects/{job['id']}",
            json={"status": "inactive"},
            headers=other_user.headers,
        )
        assert response.status_code == 403


class TestProfile:
    """GET/PUT /profile/me"""

    async def test_first_request_provisions_profile(self, client, applicant):
        response = await client.get("/api/v1/profile/me", headers=applicant.headers)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == str(applicant.id)
        assert body["full_name"] == applicant.full_name
        assert body["skills"] == []

    async def test_update_profile(self, client, applicant):
        response = await client.put(
            "/api/v1/profile/me",
            json={
                "full_name": "Ada King",
                "bio": "Analyst",
                "portfolio_url": ["ada.dev"],
                "skills": ["math"],
                "phone_number": "+441234",
            },
            headers=applicant.headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["full_name"] == "Ada King"
        assert body["portfolio_url"] == ["https://ada.dev"]
        assert body["email"] == applicant.email

    async def test_update_profile_validation(self, client, applicant):
        response = await client.put(
            "/api/v1/profile/me",
            json={"full_name": "Ada", "phone_number": "call me"},
            headers=applicant.headers,
        )
        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "phone_number"
