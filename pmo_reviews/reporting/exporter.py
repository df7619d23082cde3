"""
PDF rendering of summary reports.
"""

from __future__ import annotations

import io
from datetime import date
from typing import Any, Iterable, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from pmo_reviews.core.constants import INVALID_MODEL_JSON

BODY_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
CUSTOM_FONT = "ReportSans"


def report_filename(scope: str, today: Optional[date] = None) -> str:
    """File name for an exported report, e.g. ``zone-summary-2025-01-31.pdf``."""
    today = today or date.today()
    return f"{scope}-summary-{today.isoformat()}.pdf"


def register_font(font_path: Optional[str]) -> tuple[str, str]:
    """
    Resolve the (body, bold) font names for a report.

    Helvetica only has glyphs for Latin-1. A TrueType font at ``font_path`` is
    registered once and used for both weights so other scripts render.
    """
    if not font_path:
        return BODY_FONT, BOLD_FONT
    if CUSTOM_FONT not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(CUSTOM_FONT, font_path))
    return CUSTOM_FONT, CUSTOM_FONT


class PDFReportWriter:
    """
    Writes lines top to bottom, starting a new page whenever the remaining
    vertical space cannot hold the next line.
    """

    def __init__(
        self,
        buffer: io.BytesIO,
        title: str,
        page_size=A4,
        margin: float = 2 * cm,
        body_font: str = BODY_FONT,
        bold_font: str = BOLD_FONT,
    ):
        self.canvas = canvas.Canvas(buffer, pagesize=page_size)
        self.canvas.setTitle(title)
        self.width, self.height = page_size
        self.margin = margin
        self.y = self.height - margin
        self.pages = 1
        self.body_font = body_font
        self.bold_font = bold_font

    @property
    def text_width(self) -> float:
        return self.width - 2 * self.margin

    def new_page(self) -> None:
        self.canvas.showPage()
        self.pages += 1
        self.y = self.height - self.margin

    def ensure_space(self, needed: float) -> None:
        if self.y - needed < self.margin:
            self.new_page()

    def write(
        self,
        text: str,
        font: Optional[str] = None,
        size: float = 10,
        indent: float = 0,
        color=colors.black,
        spacing: float = 1.35,
    ) -> None:
        font = font or self.body_font
        leading = size * spacing
        for line in simpleSplit(text, font, size, self.text_width - indent) or [""]:
            self.ensure_space(leading)
            self.y -= leading
            self.canvas.setFont(font, size)
            self.canvas.setFillColor(color)
            self.canvas.drawString(self.margin + indent, self.y, line)

    def gap(self, height: float = 6) -> None:
        self.y -= height

    def bullets(self, items: Iterable[str], size: float = 10) -> None:
        for item in items:
            self.write(f"• {item}", size=size, indent=12)

    def finish(self) -> None:
        self.canvas.save()


def _write_group(writer: PDFReportWriter, group: dict[str, Any]) -> None:
    writer.ensure_space(60)
    writer.write(str(group.get("name", "")), font=writer.bold_font, size=13, color=colors.darkblue)

    metrics = group.get("metrics") or {}
    writer.write(
        f"Total reviews: {metrics.get('totalReviews', 0)}   "
        f"Completed: {metrics.get('completed', 0)}   "
        f"Draft: {metrics.get('draft', 0)}",
        size=9,
        color=colors.grey,
    )

    for heading, key in (
        ("Key Themes", "keyThemes"),
        ("Issues", "issues"),
        ("Action Items", "actionItems"),
    ):
        items = group.get(key) or []
        if not items:
            continue
        writer.gap(4)
        writer.write(heading, font=writer.bold_font, size=11)
        writer.bullets(items)
    writer.gap(12)


def render_summary_pdf(
    summary: dict[str, Any],
    generated_on: Optional[date] = None,
    font_path: Optional[str] = None,
) -> bytes:
    """
    Render a summary (or degraded result) as a PDF document.

    Args:
        summary: ``{scope, groups, highlights}`` or ``{scope, error, raw}``
        generated_on: Date printed under the title (defaults to today)
        font_path: Optional TrueType font for non-Latin-1 text

    Returns:
        PDF bytes
    """
    scope = str(summary.get("scope", "report"))
    generated_on = generated_on or date.today()

    buffer = io.BytesIO()
    body_font, bold_font = register_font(font_path)
    writer = PDFReportWriter(
        buffer,
        title=f"{scope.title()} Summary Report",
        body_font=body_font,
        bold_font=bold_font,
    )

    writer.write(f"{scope.title()} Summary Report", font=writer.bold_font, size=18)
    writer.write(f"Generated on {generated_on.isoformat()}", size=9, color=colors.grey)
    writer.gap(14)

    if summary.get("error"):
        writer.write(str(summary.get("error") or INVALID_MODEL_JSON), font=writer.bold_font, size=12, color=colors.red)
        writer.gap(6)
        for paragraph in str(summary.get("raw") or "").splitlines():
            writer.write(paragraph, size=9)
    else:
        for group in summary.get("groups") or []:
            _write_group(writer, group)

        highlights = summary.get("highlights") or []
        if highlights:
            writer.ensure_space(40)
            writer.write("Highlights", font=writer.bold_font, size=13, color=colors.darkblue)
            writer.bullets(highlights)

    writer.finish()
    return buffer.getvalue()
