"""
Report service: summarizes reviews by zone or department.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import httpx

from pmo_reviews.core.config import GeminiSettings, load_gemini_settings
from pmo_reviews.core.constants import NO_REVIEWS_HIGHLIGHT, ReportScope
from pmo_reviews.core.exceptions import ConfigurationError, InvalidRequestError
from pmo_reviews.core.logging import get_logger
from pmo_reviews.domain.summary import DegradedSummary, exportable_summary_adapter
from pmo_reviews.reporting.aggregator import aggregate_reviews, parse_scope
from pmo_reviews.reporting.exporter import render_summary_pdf, report_filename
from pmo_reviews.reporting.gemini_client import GeminiClient
from pmo_reviews.reporting.prompt_builder import build_prompt
from pmo_reviews.services.review_service import ReviewService

logger = get_logger(__name__)


class ReportService:
    """
    Orchestrates one summarization request.

    Each call is a fresh computation: nothing is cached and nothing is retried.
    """

    def __init__(
        self,
        review_service: ReviewService,
        settings_loader: Callable[[], GeminiSettings] = load_gemini_settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        font_path: Optional[str] = None,
    ) -> None:
        """
        Initialize the report service.

        Args:
            review_service: Source of reviews
            settings_loader: Called per request so the API key is read at request time
            transport: Optional httpx transport handed to the Gemini client
            font_path: Optional TrueType font for PDF export
        """
        self.review_service = review_service
        self.settings_loader = settings_loader
        self.transport = transport
        self.font_path = font_path

    async def summarize(self, scope: ReportScope | str) -> dict[str, Any]:
        """
        Summarize all reviews grouped by ``scope``.

        Returns:
            ``{scope, groups, highlights}`` on success, the fixed no-data result
            when there are no reviews, or ``{scope, error, raw}`` when the model
            output could not be read as a summary.

        Raises:
            InvalidRequestError: Unknown scope
            ConfigurationError: No API key configured
            SummarizationServiceError: The model endpoint failed
        """
        scope = parse_scope(scope)

        settings = self.settings_loader()
        if not settings.api_key:
            logger.error("GEMINI_API_KEY not configured")
            raise ConfigurationError("Gemini API key not configured")

        reviews = await self.review_service.all_reviews()
        logger.info("Reviews loaded for report", scope=scope.value, count=len(reviews))

        if not reviews:
            return {"scope": scope.value, "groups": [], "highlights": [NO_REVIEWS_HIGHLIGHT]}

        groups = aggregate_reviews(reviews, scope)
        prompt = build_prompt(scope, groups)
        logger.info(
            "Prompt built",
            scope=scope.value,
            groups=len(groups),
            prompt_chars=len(prompt),
        )

        client = GeminiClient(settings, transport=self.transport)
        try:
            result = await client.summarize(prompt, scope)
        finally:
            await client.close()

        logger.info("Report generated", scope=scope.value, kind=result.kind)
        return result.to_payload()

    def export_pdf(self, payload: dict[str, Any]) -> tuple[str, bytes]:
        """
        Render a summary posted back by the caller as a PDF.

        The file name only ever carries a known scope. A degraded result with an
        unknown scope is exported as ``report``.

        Returns:
            Tuple of (file name, PDF bytes)

        Raises:
            pydantic.ValidationError: Payload is neither a summary nor a degraded result
            InvalidRequestError: Summary with an unknown scope
        """
        summary = exportable_summary_adapter.validate_python(payload)
        try:
            scope = parse_scope(summary.scope).value
        except InvalidRequestError:
            if not isinstance(summary, DegradedSummary):
                raise
            scope = "report"

        document = {**summary.model_dump(by_alias=True), "scope": scope}
        return report_filename(scope), render_summary_pdf(document, font_path=self.font_path)
