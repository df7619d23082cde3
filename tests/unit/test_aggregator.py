"""
Unit tests for review grouping.
"""

from datetime import datetime, timezone
from typing import Any

import pytest

from pmo_reviews.core.constants import ReportScope
from pmo_reviews.core.exceptions import InvalidRequestError
from pmo_reviews.domain.review import Review, ReviewAnswer
from pmo_reviews.reporting.aggregator import aggregate_reviews, build_payload, parse_scope


def make_review(n: int, zone: str, department: str = "Kitchen", **overrides: Any) -> Review:
    data: dict[str, Any] = {
        "id": f"rev_{n}",
        "zone_id": f"zone_{zone.lower()}",
        "zone_name": zone,
        "department_id": f"dept_{department.lower()}",
        "department_name": department,
        "review_date": datetime(2025, 1, n, 18, 30, tzinfo=timezone.utc),
        "day": "Friday",
        "venue": "Main Hall",
        "reviewed_by": "usr_1",
        "reviewer_name": "Reviewer",
        "status": "completed",
    }
    data.update(overrides)
    return Review(**data)


def test_parse_scope_accepts_zone_and_department() -> None:
    assert parse_scope("zone") is ReportScope.ZONE
    assert parse_scope("department") is ReportScope.DEPARTMENT
    assert parse_scope(ReportScope.ZONE) is ReportScope.ZONE


@pytest.mark.parametrize("scope", ["region", "Zone", "", None, 3])
def test_parse_scope_rejects_anything_else(scope: Any) -> None:
    with pytest.raises(InvalidRequestError) as exc_info:
        parse_scope(scope)
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Invalid scope"


def test_groups_by_zone_snapshot_name() -> None:
    reviews = [
        make_review(1, "North", status="completed"),
        make_review(2, "South", status="completed"),
        make_review(3, "North", status="draft"),
    ]

    groups = aggregate_reviews(reviews, "zone")

    assert list(groups) == ["North", "South"]
    assert [item.status for item in groups["North"]] == ["completed", "draft"]
    assert len(groups["South"]) == 1
    assert sum(len(items) for items in groups.values()) == len(reviews)


def test_groups_by_department_snapshot_name() -> None:
    reviews = [
        make_review(1, "North", department="Kitchen"),
        make_review(2, "South", department="Security"),
        make_review(3, "South", department="Kitchen"),
    ]

    groups = aggregate_reviews(reviews, ReportScope.DEPARTMENT)

    assert list(groups) == ["Kitchen", "Security"]
    assert [item.venue for item in groups["Kitchen"]] == ["Main Hall", "Main Hall"]


def test_groups_use_snapshot_not_live_name() -> None:
    old = make_review(1, "North", zone_id="zone_1")
    renamed = make_review(2, "Northern", zone_id="zone_1")

    groups = aggregate_reviews([old, renamed], "zone")

    assert set(groups) == {"North", "Northern"}


def test_empty_input_gives_empty_grouping() -> None:
    assert aggregate_reviews([], "zone") == {}


def test_digest_truncates_notes_and_answers() -> None:
    answers = [
        ReviewAnswer(question_id=f"q_{i}", question_text=f"Q{i}", answer=str(i) * 600)
        for i in range(5)
    ]
    review = make_review(1, "North", overall_notes="n" * 1500, answers=answers)

    digest = aggregate_reviews([review], "zone")["North"][0]

    assert len(digest.notes) == 1000
    assert len(digest.answers) == 3
    assert all(len(answer) == 500 for answer in digest.answers)
    assert digest.answers[0].startswith("0")


def test_digest_defaults_missing_notes_to_empty() -> None:
    digest = aggregate_reviews([make_review(1, "North")], "zone")["North"][0]

    assert digest.notes == ""
    assert digest.answers == []
    assert digest.date == "2025-01-01"
    assert digest.reviewer_name == "Reviewer"


def test_build_payload_counts_items() -> None:
    groups = aggregate_reviews(
        [make_review(1, "North"), make_review(2, "North"), make_review(3, "South")],
        "zone",
    )

    payload = build_payload("zone", groups)

    assert payload["scope"] == "zone"
    assert [(g["name"], g["totalReviews"]) for g in payload["groups"]] == [
        ("North", 2),
        ("South", 1),
    ]
    assert set(payload["groups"][0]["items"][0]) == {
        "day", "date", "venue", "reviewerName", "status", "notes", "answers",
    }
