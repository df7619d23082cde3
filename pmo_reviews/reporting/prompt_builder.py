"""
Prompt template for review summarization.
"""

from __future__ import annotations

import json

from pmo_reviews.core.constants import ReportScope
from pmo_reviews.domain.summary import ReviewDigest
from pmo_reviews.reporting.aggregator import build_payload, parse_scope

SYSTEM_PROMPT = (
    "You are a reporting assistant. Generate concise, structured summaries "
    "suitable for a PMO report. Use clear, actionable language."
)

USER_PROMPT_TEMPLATE = """
Summarize the following {scope}-grouped review data into strict JSON with:
{{
  "scope": "{scope}",
  "groups": [
    {{
      "name": "string",
      "metrics": {{ "totalReviews": number, "completed": number, "draft": number }},
      "keyThemes": ["string"],
      "issues": ["string"],
      "actionItems": ["string"]
    }}
  ],
  "highlights": ["string"]
}}

Notes:
- Derive metrics from status fields.
- Key themes: recurring observations.
- Issues: problems or risks.
- Action items: specific, actionable steps.
- Be concise; avoid duplications; no free-form paragraphs.
- Output must be valid JSON only.

DATA:
{data}
"""


def build_prompt(
    scope: ReportScope | str,
    groups: dict[str, list[ReviewDigest]],
) -> str:
    """
    Render the full prompt: system line, instructions, then the grouped data
    as compact JSON.
    """
    scope = parse_scope(scope)
    payload = build_payload(scope, groups)
    user_prompt = USER_PROMPT_TEMPLATE.format(
        scope=scope.value,
        data=json.dumps(payload, ensure_ascii=False, separators=(",", ":")),
    ).strip()
    return f"{SYSTEM_PROMPT}\n\n{user_prompt}"
