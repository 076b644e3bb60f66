"""HTTP tests against the FastAPI app on the in-memory store."""

import pytest

from reportit.models import Role
from tests.conftest import auth_headers

REPORT_FORM = {
    "title": "Broken street light",
    "description": "Light out for a week",
    "category": "street-light",
    "address": "5 Elm St",
    "neighborhood": "Northside",
    "latitude": "51.5074",
    "longitude": "-0.1278",
}


async def create_report(client, headers, files=None, **overrides):
    form = {**REPORT_FORM, **overrides}
    return await client.post("/api/reports", data=form, files=files, headers=headers)


class TestHealth:

    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestAuth:

    async def test_register_and_login(self, client):
        response = await client.post(
            "/api/register",
            json={"username": "carol", "password": "hunter22", "name": "Carol",
                  "email": "carol@example.com"},
        )
        assert response.status_code == 201
        assert response.json()["user"]["role"] == "user"

        response = await client.post(
            "/api/login", data={"username": "carol", "password": "hunter22"}
        )
        assert response.status_code == 200
        token = response.json()["access_token"]

        me = await client.get("/api/user", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["username"] == "carol"
        assert me.json()["badges"] == []

    async def test_duplicate_username_conflicts(self, client):
        payload = {"username": "carol", "password": "hunter22", "name": "Carol",
                   "email": "carol@example.com"}
        await client.post("/api/register", json=payload)

        response = await client.post("/api/register", json=payload)

        assert response.status_code == 409

    async def test_wrong_password(self, client, api_storage):
        await auth_headers(api_storage, "dave")

        response = await client.post("/api/login", data={"username": "dave", "password": "nope"})

        assert response.status_code == 401

    async def test_requires_token(self, client):
        assert (await client.get("/api/reports")).status_code == 401
        bad = {"Authorization": "Bearer not-a-token"}
        assert (await client.get("/api/reports", headers=bad)).status_code == 401


class TestReportsApi:

    async def test_create_report_ignores_status_field(self, client, api_storage):
        headers = await auth_headers(api_storage, "alice")

        response = await create_report(client, headers, status="completed")

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "pending"
        assert body["category"] == "street-light"

    async def test_create_report_with_photos(self, client, api_storage):
        headers = await auth_headers(api_storage, "alice")
        files = [
            ("photos", ("one.jpg", b"\xff\xd8fake-jpeg", "image/jpeg")),
            ("photos", ("two.png", b"\x89PNGfake", "image/png")),
        ]

        response = await create_report(client, headers, files=files)

        assert response.status_code == 201
        photos = response.json()["photos"]
        assert len(photos) == 2
        assert all(url.startswith("/uploads/") for url in photos)
        assert photos[0].endswith(".jpg") and photos[1].endswith(".png")

    async def test_non_image_upload_rejected(self, client, api_storage):
        headers = await auth_headers(api_storage, "alice")
        files = [("photos", ("notes.txt", b"hello", "text/plain"))]

        response = await create_report(client, headers, files=files)

        assert response.status_code == 400
        assert await api_storage.get_all_reports() == []

    async def test_invalid_category_rejected(self, client, api_storage):
        headers = await auth_headers(api_storage, "alice")

        response = await create_report(client, headers, category="potholes")

        assert response.status_code == 400

    async def test_owner_reads_stranger_forbidden(self, client, api_storage):
        owner = await auth_headers(api_storage, "alice")
        stranger = await auth_headers(api_storage, "bob")
        admin = await auth_headers(api_storage, "root", role=Role.ADMIN)
        report_id = (await create_report(client, owner)).json()["id"]

        assert (await client.get(f"/api/reports/{report_id}", headers=owner)).status_code == 200
        assert (await client.get(f"/api/reports/{report_id}", headers=admin)).status_code == 200
        assert (await client.get(f"/api/reports/{report_id}", headers=stranger)).status_code == 403
        assert (await client.get(f"/api/reports/{report_id}/updates", headers=stranger)).status_code == 403
        assert (await client.get("/api/reports/999", headers=admin)).status_code == 404

    async def test_admin_workflow(self, client, api_storage):
        owner = await auth_headers(api_storage, "alice")
        admin = await auth_headers(api_storage, "root", role=Role.ADMIN)
        report_id = (await create_report(client, owner, category="garbage")).json()["id"]

        response = await client.patch(
            f"/api/reports/{report_id}/status", json={"status": "assigned"}, headers=admin
        )
        assert response.status_code == 200
        response = await client.patch(
            f"/api/reports/{report_id}/assign", json={"assigned_to": "Sanitation Dept"},
            headers=admin,
        )
        assert response.json()["assigned_to"] == "Sanitation Dept"
        response = await client.patch(
            f"/api/reports/{report_id}/status", json={"status": "completed"}, headers=admin
        )
        assert response.json()["status"] == "completed"

        updates = (await client.get(f"/api/reports/{report_id}/updates", headers=owner)).json()
        assert [u["content"] for u in updates] == [
            "Status updated to completed",
            "Issue assigned to Sanitation Dept",
            "Status updated to assigned",
            "Report submitted",
        ]

        me = (await client.get("/api/user", headers=owner)).json()
        assert me["completed_count"] == 1
        assert "first-completed" in me["badges"]

    async def test_citizen_cannot_change_status(self, client, api_storage):
        owner = await auth_headers(api_storage, "alice")
        report_id = (await create_report(client, owner)).json()["id"]

        response = await client.patch(
            f"/api/reports/{report_id}/status", json={"status": "completed"}, headers=owner
        )

        assert response.status_code == 403

    @pytest.mark.parametrize(
        "path, payload",
        [
            ("status", {"status": "finished"}),
            ("status", {}),
            ("assign", {"assigned_to": "  "}),
            ("assign", {}),
        ],
    )
    async def test_invalid_admin_input(self, client, api_storage, path, payload):
        owner = await auth_headers(api_storage, "alice")
        admin = await auth_headers(api_storage, "root", role=Role.ADMIN)
        report_id = (await create_report(client, owner)).json()["id"]

        response = await client.patch(
            f"/api/reports/{report_id}/{path}", json=payload, headers=admin
        )

        assert response.status_code == 400

    async def test_comments(self, client, api_storage):
        owner = await auth_headers(api_storage, "alice")
        report_id = (await create_report(client, owner)).json()["id"]

        response = await client.post(
            f"/api/reports/{report_id}/updates", json={"content": "Any news?"}, headers=owner
        )
        assert response.status_code == 201
        assert response.json()["content"] == "Any news?"

        response = await client.post(
            f"/api/reports/{report_id}/updates", json={"content": "   "}, headers=owner
        )
        assert response.status_code == 400

    async def test_list_and_stats(self, client, api_storage):
        owner = await auth_headers(api_storage, "alice")
        other = await auth_headers(api_storage, "bob")
        admin = await auth_headers(api_storage, "root", role=Role.ADMIN)
        await create_report(client, owner)
        await create_report(client, other, category="garbage")

        assert len((await client.get("/api/reports", headers=owner)).json()) == 1
        assert len((await client.get("/api/reports/user", headers=owner)).json()) == 1
        assert len((await client.get("/api/reports", headers=admin)).json()) == 2
        filtered = await client.get("/api/reports", params={"category": "garbage"}, headers=admin)
        assert [r["category"] for r in filtered.json()] == ["garbage"]

        stats = await client.get("/api/reports/stats", headers=admin)
        assert stats.json() == {
            "total": 2,
            "by_status": {"pending": 2, "in-progress": 0, "assigned": 0, "completed": 0},
        }
        assert (await client.get("/api/reports/stats", headers=owner)).status_code == 403

    async def test_admin_adds_photo(self, client, api_storage):
        owner = await auth_headers(api_storage, "alice")
        admin = await auth_headers(api_storage, "root", role=Role.ADMIN)
        report_id = (await create_report(client, owner)).json()["id"]
        photo = {"photo": ("after.jpg", b"\xff\xd8fixed", "image/jpeg")}

        forbidden = await client.post(f"/api/reports/{report_id}/photos", files=photo, headers=owner)
        response = await client.post(f"/api/reports/{report_id}/photos", files=photo, headers=admin)

        assert forbidden.status_code == 403
        assert response.status_code == 200
        assert len(response.json()["photos"]) == 1


class TestBadgesApi:

    async def test_list_badges(self, client):
        response = await client.get("/api/badges")

        assert response.status_code == 200
        assert len(response.json()) == 7
        assert response.json()[0]["criteria"] == {"type": "reports", "count": 1}

    async def test_progress(self, client, api_storage):
        owner = await auth_headers(api_storage, "alice")
        await create_report(client, owner)

        progress = (await client.get("/api/badges/progress", headers=owner)).json()
        first_report = next(p for p in progress if p["badge"]["id"] == "first-report")

        assert first_report["earned"] is True
        assert first_report["current"] == 1
