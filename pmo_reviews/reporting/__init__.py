"""
Review summarization pipeline: aggregation, prompt, model call, export.
"""

from pmo_reviews.reporting.aggregator import aggregate_reviews, build_payload, parse_scope
from pmo_reviews.reporting.exporter import render_summary_pdf, report_filename
from pmo_reviews.reporting.gemini_client import GeminiClient, parse_summary, strip_code_fence
from pmo_reviews.reporting.prompt_builder import build_prompt

__all__ = [
    "aggregate_reviews",
    "build_payload",
    "build_prompt",
    "parse_scope",
    "parse_summary",
    "strip_code_fence",
    "GeminiClient",
    "render_summary_pdf",
    "report_filename",
]
