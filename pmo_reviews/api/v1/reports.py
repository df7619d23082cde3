"""
Report endpoints: AI summary of reviews and PDF export.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse, Response

from pmo_reviews.api.deps import get_report_service, require_admin
from pmo_reviews.core.constants import REPORT_FAILED
from pmo_reviews.core.exceptions import PMOReviewError
from pmo_reviews.core.logging import LogContext, get_logger
from pmo_reviews.domain.base import CamelModel
from pmo_reviews.domain.user import CurrentUser
from pmo_reviews.services.report_service import ReportService

logger = get_logger(__name__)

router = APIRouter()


class SummarizeRequest(CamelModel):
    """Scope is validated by the service so bad values map to a 400."""

    scope: Optional[Any] = None


@router.post("/reports/summarize")
async def summarize_reviews(
    request: SummarizeRequest,
    admin: CurrentUser = Depends(require_admin),
    report_service: ReportService = Depends(get_report_service),
) -> Any:
    """
    Summarize all reviews grouped by zone or department.

    Returns 200 with the structured summary, with the fixed no-data result, or
    with ``{scope, error, raw}`` when the model's output was not valid JSON.
    """
    with LogContext(report_scope=str(request.scope), user_id=admin.id):
        logger.info("Report generation started")
        try:
            return await report_service.summarize(request.scope)
        except PMOReviewError:
            raise
        except Exception as e:
            logger.exception("Report generation failed", error=str(e))
            return JSONResponse(
                status_code=500,
                content={"error": REPORT_FAILED, "details": str(e)},
            )


@router.post("/reports/export")
async def export_report(
    summary: dict[str, Any] = Body(...),
    _: CurrentUser = Depends(require_admin),
    report_service: ReportService = Depends(get_report_service),
) -> Response:
    """
    Render a summary (as returned by ``/reports/summarize``) as a PDF download.

    A body that is neither a summary nor a degraded result is a 400.
    """
    filename, content = report_service.export_pdf(summary)
    logger.info("Report exported", filename=filename, size=len(content))
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
