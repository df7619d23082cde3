"""
Unit tests for zone, department and question endpoints.
"""

from typing import Any

import pytest
from httpx import AsyncClient

from pmo_reviews.api.deps import ServiceContainer


@pytest.mark.asyncio
async def test_unauthenticated_read_never_touches_storage(
    async_client: AsyncClient,
    container: ServiceContainer,
) -> None:
    response = await async_client.get("/api/v1/zones")

    assert response.status_code == 401
    assert container._initialized is False


@pytest.mark.asyncio
async def test_garbage_token_is_rejected(async_client: AsyncClient) -> None:
    response = await async_client.get(
        "/api/v1/zones", headers={"Authorization": "Bearer not-a-token"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_zone_crud(async_client: AsyncClient, admin_headers: dict[str, str]) -> None:
    created = await async_client.post(
        "/api/v1/zones",
        json={"name": "  East  ", "description": "Eastern halls"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    zone = created.json()
    assert zone["name"] == "East"
    assert zone["id"].startswith("zone_")
    assert "createdAt" in zone

    updated = await async_client.put(
        f"/api/v1/zones/{zone['id']}", json={"name": "East Wing"}, headers=admin_headers
    )
    assert updated.status_code == 200
    assert updated.json()["name"] == "East Wing"
    assert updated.json()["description"] == "Eastern halls"

    deleted = await async_client.delete(f"/api/v1/zones/{zone['id']}", headers=admin_headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Zone deleted successfully"}

    missing = await async_client.get(f"/api/v1/zones/{zone['id']}", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["error"] == "Zone not found"


@pytest.mark.asyncio
async def test_zones_listed_by_name(
    async_client: AsyncClient,
    viewer_headers: dict[str, str],
    seeded: dict[str, Any],
) -> None:
    response = await async_client.get("/api/v1/zones", headers=viewer_headers)

    assert response.status_code == 200
    assert [z["name"] for z in response.json()] == ["North", "South"]


@pytest.mark.asyncio
async def test_duplicate_zone_name_conflicts(
    async_client: AsyncClient,
    admin_headers: dict[str, str],
    seeded: dict[str, Any],
) -> None:
    response = await async_client.post("/api/v1/zones", json={"name": "North"}, headers=admin_headers)

    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"


@pytest.mark.asyncio
async def test_rename_to_existing_name_conflicts(
    async_client: AsyncClient,
    admin_headers: dict[str, str],
    seeded: dict[str, Any],
) -> None:
    south = seeded["zones"]["South"]

    response = await async_client.put(
        f"/api/v1/zones/{south.id}", json={"name": "North"}, headers=admin_headers
    )

    assert response.status_code == 409


@pytest.mark.asyncio
@pytest.mark.parametrize("headers_fixture", ["viewer_headers", "reviewer_headers"])
async def test_reference_writes_require_admin(
    async_client: AsyncClient,
    headers_fixture: str,
    request: pytest.FixtureRequest,
) -> None:
    headers = request.getfixturevalue(headers_fixture)

    response = await async_client.post("/api/v1/departments", json={"name": "Kitchen"}, headers=headers)

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_blank_name_is_rejected(async_client: AsyncClient, admin_headers: dict[str, str]) -> None:
    response = await async_client.post("/api/v1/departments", json={"name": "   "}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_department_crud(async_client: AsyncClient, admin_headers: dict[str, str]) -> None:
    created = await async_client.post(
        "/api/v1/departments", json={"name": "Security"}, headers=admin_headers
    )
    assert created.status_code == 201
    department_id = created.json()["id"]
    assert department_id.startswith("dept_")

    listed = await async_client.get("/api/v1/departments", headers=admin_headers)
    assert [d["name"] for d in listed.json()] == ["Security"]

    deleted = await async_client.delete(f"/api/v1/departments/{department_id}", headers=admin_headers)
    assert deleted.json() == {"message": "Department deleted successfully"}

    again = await async_client.delete(f"/api/v1/departments/{department_id}", headers=admin_headers)
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_questions_filtered_and_ordered(
    async_client: AsyncClient,
    admin_headers: dict[str, str],
    viewer_headers: dict[str, str],
    seeded: dict[str, Any],
) -> None:
    department_id = seeded["department"].id
    for text, order, active in (
        ("Was food served on time?", 2, True),
        ("Was the hall clean?", 1, True),
        ("Retired question", 0, False),
    ):
        response = await async_client.post(
            "/api/v1/questions",
            json={"text": text, "departmentId": department_id, "order": order, "isActive": active},
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert response.json()["departmentName"] == "Kitchen"

    active = await async_client.get(
        "/api/v1/questions", params={"departmentId": department_id}, headers=viewer_headers
    )
    assert [q["text"] for q in active.json()] == ["Was the hall clean?", "Was food served on time?"]

    everything = await async_client.get(
        "/api/v1/questions", params={"includeInactive": "true"}, headers=admin_headers
    )
    assert [q["text"] for q in everything.json()][0] == "Retired question"
    assert len(everything.json()) == 3

    other = await async_client.get(
        "/api/v1/questions", params={"departmentId": "dept_missing"}, headers=viewer_headers
    )
    assert other.json() == []


@pytest.mark.asyncio
async def test_inactive_questions_hidden_from_non_admins(
    async_client: AsyncClient,
    viewer_headers: dict[str, str],
) -> None:
    response = await async_client.get(
        "/api/v1/questions", params={"includeInactive": "true"}, headers=viewer_headers
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_question_for_unknown_department(
    async_client: AsyncClient,
    admin_headers: dict[str, str],
) -> None:
    response = await async_client.post(
        "/api/v1/questions",
        json={"text": "Anything?", "departmentId": "dept_missing"},
        headers=admin_headers,
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Department not found"


@pytest.mark.asyncio
async def test_question_keeps_department_name_after_rename(
    async_client: AsyncClient,
    admin_headers: dict[str, str],
    seeded: dict[str, Any],
) -> None:
    department_id = seeded["department"].id
    created = await async_client.post(
        "/api/v1/questions",
        json={"text": "Was the hall clean?", "departmentId": department_id},
        headers=admin_headers,
    )
    question_id = created.json()["id"]

    await async_client.put(
        f"/api/v1/departments/{department_id}", json={"name": "Catering"}, headers=admin_headers
    )

    fetched = await async_client.get(f"/api/v1/questions/{question_id}", headers=admin_headers)
    assert fetched.json()["departmentName"] == "Kitchen"

    deactivated = await async_client.put(
        f"/api/v1/questions/{question_id}", json={"isActive": False}, headers=admin_headers
    )
    assert deactivated.json()["isActive"] is False
    assert deactivated.json()["text"] == "Was the hall clean?"
