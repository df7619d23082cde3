"""
Client for the Gemini ``generateContent`` endpoint.

One request per call and no retries. Model output that is not the requested
JSON degrades to a raw-text result instead of failing the request.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from pmo_reviews.core.config import GeminiSettings
from pmo_reviews.core.constants import ReportScope
from pmo_reviews.core.exceptions import ConfigurationError, SummarizationServiceError
from pmo_reviews.core.logging import get_logger
from pmo_reviews.domain.summary import StructuredSummary, SummaryResult

logger = get_logger(__name__)

_JSON_FENCE_OPEN = re.compile(r"^```json\s*")
_FENCE_OPEN = re.compile(r"^```\s*")
_FENCE_CLOSE = re.compile(r"\s*```$")


def strip_code_fence(content: str) -> str:
    """
    Remove a markdown code fence wrapped around model output.

    Handles a ```` ```json ```` tagged fence and a bare ```` ``` ```` fence.
    Text without a leading fence is only trimmed.
    """
    cleaned = content.strip()
    if cleaned.startswith("```json"):
        cleaned = _FENCE_CLOSE.sub("", _JSON_FENCE_OPEN.sub("", cleaned))
    elif cleaned.startswith("```"):
        cleaned = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", cleaned))
    return cleaned


def extract_candidate_text(data: Any) -> str:
    """Text of the first candidate's first part, or ``"{}"`` when absent."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return "{}"
    return text or "{}"


def extract_error_message(body: str) -> str:
    """Vendor error message from an error envelope, else the raw body."""
    try:
        message = json.loads(body)["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return body
    return message if isinstance(message, str) and message else body


def parse_summary(content: str, scope: ReportScope | str) -> SummaryResult:
    """
    Decode cleaned model text into a summary result.

    Returns a degraded result when the text is not JSON or not a summary object.
    """
    scope_value = scope.value if isinstance(scope, ReportScope) else scope
    try:
        data = json.loads(content)
    except ValueError as e:
        logger.warning("Model returned invalid JSON", error=str(e), length=len(content))
        return SummaryResult.degraded(scope_value, content)

    if not isinstance(data, dict):
        logger.warning("Model JSON is not an object", json_type=type(data).__name__)
        return SummaryResult.degraded(scope_value, content)

    data.setdefault("scope", scope_value)
    try:
        summary = StructuredSummary.model_validate(data)
    except PydanticValidationError as e:
        logger.warning("Model JSON does not match summary shape", errors=e.error_count())
        return SummaryResult.degraded(scope_value, content)

    return SummaryResult.ok(summary)


class GeminiClient:
    """
    Summarization client for Google's Generative Language API.
    """

    def __init__(
        self,
        settings: GeminiSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Gemini settings (API key, model, generation parameters)
            transport: Optional httpx transport, used to fake the endpoint in tests
        """
        self.settings = settings
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def endpoint(self) -> str:
        return f"{self.settings.base_url.rstrip('/')}/models/{self.settings.model}:generateContent"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.timeout),
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _request_body(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.settings.temperature,
                "maxOutputTokens": self.settings.max_output_tokens,
            },
        }

    async def generate(self, prompt: str) -> str:
        """
        Send a prompt and return the first candidate's raw text.

        Raises:
            ConfigurationError: If no API key is configured (no request is made)
            SummarizationServiceError: On transport failure or a non-2xx response
        """
        if not self.settings.api_key:
            raise ConfigurationError("Gemini API key not configured")

        client = await self._get_client()
        try:
            response = await client.post(
                self.endpoint,
                params={"key": self.settings.api_key},
                json=self._request_body(prompt),
            )
        except httpx.RequestError as e:
            logger.error("Gemini request error", model=self.settings.model, error=str(e))
            raise SummarizationServiceError(f"Request failed: {e}") from e

        logger.info("Gemini response received", status_code=response.status_code)

        if not response.is_success:
            message = extract_error_message(response.text)
            logger.error(
                "Gemini request failed",
                status_code=response.status_code,
                message=message,
            )
            raise SummarizationServiceError(message, upstream_status=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise SummarizationServiceError(
                "Malformed response envelope", upstream_status=response.status_code
            ) from e

        return extract_candidate_text(data)

    async def summarize(self, prompt: str, scope: ReportScope | str) -> SummaryResult:
        """
        Generate a structured summary for an already-built prompt.
        """
        content = await self.generate(prompt)
        cleaned = strip_code_fence(content)
        logger.debug("Model content cleaned", raw_length=len(content), clean_length=len(cleaned))
        return parse_summary(cleaned, scope)
