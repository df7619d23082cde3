"""
Pytest configuration and fixtures.
"""

from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Optional

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from pmo_reviews.api.deps import ServiceContainer
from pmo_reviews.core.config import DatabaseSettings, GeminiSettings, Settings
from pmo_reviews.core.security import create_session_token
from pmo_reviews.domain.user import CurrentUser
from pmo_reviews.main import create_app


class FakeGemini:
    """
    Stand-in for the generateContent endpoint.

    Records every request and answers with ``text`` wrapped in a candidate
    envelope, or with ``body`` verbatim when set.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.text = '{"scope": "zone", "groups": [], "highlights": []}'
        self.body: Optional[dict[str, Any]] = None
        self.api_key: Optional[str] = "test-key"

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.body is not None:
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(
            self.status_code,
            json={"candidates": [{"content": {"parts": [{"text": self.text}]}}]},
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def load_settings(self) -> GeminiSettings:
        return GeminiSettings(api_key=self.api_key, base_url="https://gemini.test/v1")


def make_token(role: str) -> str:
    return create_session_token(
        {
            "sub": f"usr_{role}",
            "email": f"{role}@example.com",
            "name": f"{role.title()} User",
            "role": role,
        }
    )


@pytest.fixture
def fake_gemini() -> FakeGemini:
    """Fake summarization endpoint with a configured API key."""
    return FakeGemini()


@pytest.fixture
def container(fake_gemini: FakeGemini) -> ServiceContainer:
    """In-memory service container wired to the fake endpoint."""
    return ServiceContainer(
        Settings(database=DatabaseSettings(backend="memory")),
        gemini_transport=fake_gemini.transport,
        gemini_settings_loader=fake_gemini.load_settings,
    )


@pytest.fixture
async def async_client(container: ServiceContainer) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    app = create_app(container)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token('admin')}"}


@pytest.fixture
def reviewer_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token('reviewer')}"}


@pytest.fixture
def viewer_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token('viewer')}"}


@pytest.fixture
def reviewer() -> CurrentUser:
    return CurrentUser(
        id="usr_reviewer",
        email="reviewer@example.com",
        name="Reviewer User",
        role="reviewer",
    )


@pytest.fixture
async def seeded(container: ServiceContainer, reviewer: CurrentUser) -> dict[str, Any]:
    """
    Two zones, one department and three reviews:
    North (completed, draft) and South (completed).
    """
    reference = container.reference_service
    north = await reference.create_zone("North")
    south = await reference.create_zone("South")
    kitchen = await reference.create_department("Kitchen")

    reviews = container.review_service
    created = []
    for zone, status, day in (
        (north, "completed", 10),
        (north, "draft", 11),
        (south, "completed", 12),
    ):
        created.append(
            await reviews.create_review(
                {
                    "zone_id": zone.id,
                    "department_id": kitchen.id,
                    "review_date": datetime(2025, 1, day, 9, 0, tzinfo=timezone.utc),
                    "day": "Friday",
                    "venue": f"{zone.name} Hall",
                    "status": status,
                    "overall_notes": f"{zone.name} visit notes",
                },
                reviewer=reviewer,
            )
        )

    return {"zones": {"North": north, "South": south}, "department": kitchen, "reviews": created}
