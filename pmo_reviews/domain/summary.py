"""
Derived report models. None of these are persisted.
"""

from __future__ import annotations

from typing import Annotated, Any, Optional, Union

from pydantic import ConfigDict, Discriminator, Field, Tag, TypeAdapter

from pmo_reviews.core.constants import INVALID_MODEL_JSON, SummaryKind
from pmo_reviews.domain.base import CamelModel


class ReviewDigest(CamelModel):
    """Bounded projection of one review, as handed to the summarizer."""

    day: str
    date: str
    venue: str
    reviewer_name: str
    status: str
    notes: str = ""
    answers: list[str] = Field(default_factory=list)


class SummaryMetrics(CamelModel):
    """Review counts for one group."""

    total_reviews: int = 0
    completed: int = 0
    draft: int = 0


class SummaryGroup(CamelModel):
    """Narrative summary of one zone or department."""

    model_config = ConfigDict(extra="ignore")

    name: str
    metrics: SummaryMetrics = Field(default_factory=SummaryMetrics)
    key_themes: list[str] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)
    action_items: list[str] = Field(default_factory=list)


class StructuredSummary(CamelModel):
    """The report shape the model is instructed to return."""

    model_config = ConfigDict(extra="ignore")

    scope: str
    groups: list[SummaryGroup] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)


class DegradedSummary(CamelModel):
    """Model output that could not be read as a summary, kept as cleaned text."""

    scope: str
    error: str = INVALID_MODEL_JSON
    raw: str = ""


def _summary_tag(value: Any) -> str:
    if isinstance(value, dict):
        return "degraded" if "error" in value else "ok"
    return "degraded" if isinstance(value, DegradedSummary) else "ok"


# Either shape returned by summarization, as posted back for export
ExportableSummary = Annotated[
    Union[
        Annotated[StructuredSummary, Tag("ok")],
        Annotated[DegradedSummary, Tag("degraded")],
    ],
    Discriminator(_summary_tag),
]

exportable_summary_adapter = TypeAdapter(ExportableSummary)


class SummaryResult(CamelModel):
    """
    Outcome of one summarization call.

    ``kind`` is ``ok`` with a validated ``summary``, or ``degraded`` with the
    model's cleaned ``raw`` text when it could not be read as a summary.
    Transport and HTTP failures are raised, not returned.
    """

    kind: SummaryKind
    scope: str
    summary: Optional[StructuredSummary] = None
    raw: Optional[str] = None

    @classmethod
    def ok(cls, summary: StructuredSummary) -> SummaryResult:
        return cls(kind=SummaryKind.OK, scope=summary.scope, summary=summary)

    @classmethod
    def degraded(cls, scope: str, raw: str) -> SummaryResult:
        return cls(kind=SummaryKind.DEGRADED, scope=scope, raw=raw)

    @property
    def is_degraded(self) -> bool:
        return self.kind == SummaryKind.DEGRADED

    def to_payload(self) -> dict[str, Any]:
        """Response body for the caller."""
        if self.is_degraded or self.summary is None:
            return DegradedSummary(scope=self.scope, raw=self.raw or "").model_dump(by_alias=True)
        return self.summary.model_dump(by_alias=True)
