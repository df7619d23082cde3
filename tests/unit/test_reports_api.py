"""
Unit tests for report endpoints.
"""

import json
from typing import Any

import pytest
from httpx import AsyncClient

from tests.conftest import FakeGemini

SUMMARIZE = "/api/v1/reports/summarize"
EXPORT = "/api/v1/reports/export"


@pytest.mark.asyncio
async def test_summarize_requires_session(async_client: AsyncClient, fake_gemini: FakeGemini) -> None:
    response = await async_client.post(SUMMARIZE, json={"scope": "zone"})

    assert response.status_code == 401
    assert response.json()["error"] == "Unauthorized"
    assert fake_gemini.requests == []


@pytest.mark.asyncio
async def test_summarize_requires_admin(
    async_client: AsyncClient,
    reviewer_headers: dict[str, str],
) -> None:
    response = await async_client.post(SUMMARIZE, json={"scope": "zone"}, headers=reviewer_headers)

    assert response.status_code == 403
    assert response.json()["error"] == "Forbidden"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"scope": "region"}, {"scope": None}, {}])
async def test_summarize_rejects_invalid_scope(
    async_client: AsyncClient,
    admin_headers: dict[str, str],
    body: dict[str, Any],
) -> None:
    response = await async_client.post(SUMMARIZE, json=body, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid scope"


@pytest.mark.asyncio
async def test_summarize_without_api_key(
    async_client: AsyncClient,
    admin_headers: dict[str, str],
    fake_gemini: FakeGemini,
    seeded: dict[str, Any],
) -> None:
    fake_gemini.api_key = None

    response = await async_client.post(SUMMARIZE, json={"scope": "zone"}, headers=admin_headers)

    assert response.status_code == 500
    assert response.json()["error"] == "Gemini API key not configured"
    assert fake_gemini.requests == []


@pytest.mark.asyncio
async def test_summarize_empty_store(
    async_client: AsyncClient,
    admin_headers: dict[str, str],
    fake_gemini: FakeGemini,
) -> None:
    response = await async_client.post(SUMMARIZE, json={"scope": "department"}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {
        "scope": "department",
        "groups": [],
        "highlights": ["No reviews found in the database"],
    }
    assert fake_gemini.requests == []


@pytest.mark.asyncio
async def test_summarize_returns_structured_summary(
    async_client: AsyncClient,
    admin_headers: dict[str, str],
    fake_gemini: FakeGemini,
    seeded: dict[str, Any],
) -> None:
    summary = {
        "scope": "zone",
        "groups": [
            {
                "name": "North",
                "metrics": {"totalReviews": 2, "completed": 1, "draft": 1},
                "keyThemes": ["Orderly seating"],
                "issues": [],
                "actionItems": ["Add signage"],
            },
            {
                "name": "South",
                "metrics": {"totalReviews": 1, "completed": 1, "draft": 0},
                "keyThemes": [],
                "issues": ["Late start"],
                "actionItems": [],
            },
        ],
        "highlights": ["North has a pending draft"],
    }
    fake_gemini.text = f"```json\n{json.dumps(summary)}\n```"

    response = await async_client.post(SUMMARIZE, json={"scope": "zone"}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == summary
    assert len(fake_gemini.requests) == 1


@pytest.mark.asyncio
async def test_summarize_degrades_on_invalid_json(
    async_client: AsyncClient,
    admin_headers: dict[str, str],
    fake_gemini: FakeGemini,
    seeded: dict[str, Any],
) -> None:
    fake_gemini.text = "```\nThe reviews look fine overall.\n```"

    response = await async_client.post(SUMMARIZE, json={"scope": "zone"}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {
        "scope": "zone",
        "error": "Invalid JSON from model",
        "raw": "The reviews look fine overall.",
    }


@pytest.mark.asyncio
async def test_summarize_upstream_failure(
    async_client: AsyncClient,
    admin_headers: dict[str, str],
    fake_gemini: FakeGemini,
    seeded: dict[str, Any],
) -> None:
    fake_gemini.status_code = 429
    fake_gemini.body = {"error": {"code": 429, "message": "Resource has been exhausted"}}

    response = await async_client.post(SUMMARIZE, json={"scope": "zone"}, headers=admin_headers)

    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to generate report",
        "code": "SUMMARIZATION_ERROR",
        "details": "Resource has been exhausted",
        "statusCode": 429,
    }


@pytest.mark.asyncio
async def test_export_returns_pdf_attachment(
    async_client: AsyncClient,
    admin_headers: dict[str, str],
) -> None:
    summary = {
        "scope": "zone",
        "groups": [{"name": "North", "metrics": {"totalReviews": 1}, "keyThemes": ["Calm"]}],
        "highlights": ["All good"],
    }

    response = await async_client.post(EXPORT, json=summary, headers=admin_headers)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="zone-summary-' in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_export_requires_admin(
    async_client: AsyncClient,
    viewer_headers: dict[str, str],
) -> None:
    response = await async_client.post(EXPORT, json={"scope": "zone"}, headers=viewer_headers)

    assert response.status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"scope": "zone", "groups": ["North"]},
        {"scope": "zone", "groups": [{"metrics": {"totalReviews": 1}}]},
        {"groups": []},
    ],
)
async def test_export_rejects_malformed_summary(
    async_client: AsyncClient,
    admin_headers: dict[str, str],
    body: dict[str, Any],
) -> None:
    response = await async_client.post(EXPORT, json=body, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
@pytest.mark.parametrize("scope", ["区域", 'x"; filename="evil.exe', "region"])
async def test_export_rejects_summary_with_unknown_scope(
    async_client: AsyncClient,
    admin_headers: dict[str, str],
    scope: str,
) -> None:
    response = await async_client.post(
        EXPORT, json={"scope": scope, "groups": [], "highlights": []}, headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid scope"


@pytest.mark.asyncio
@pytest.mark.parametrize("scope", ["区域", 'x"; filename="evil.exe'])
async def test_degraded_export_with_unknown_scope_uses_generic_name(
    async_client: AsyncClient,
    admin_headers: dict[str, str],
    scope: str,
) -> None:
    body = {"scope": scope, "error": "Invalid JSON from model", "raw": "not json"}

    response = await async_client.post(EXPORT, json=body, headers=admin_headers)

    assert response.status_code == 200
    disposition = response.headers["content-disposition"]
    assert disposition.startswith('attachment; filename="report-summary-')
    assert disposition.count('"') == 2
    assert "evil" not in disposition
    assert response.content.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_degraded_export_keeps_known_scope(
    async_client: AsyncClient,
    admin_headers: dict[str, str],
) -> None:
    body = {"scope": "department", "error": "Invalid JSON from model", "raw": "oops"}

    response = await async_client.post(EXPORT, json=body, headers=admin_headers)

    assert response.status_code == 200
    assert 'filename="department-summary-' in response.headers["content-disposition"]
