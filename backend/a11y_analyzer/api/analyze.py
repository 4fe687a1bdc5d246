"""Analyze endpoint — turn a prompt carrying scan data into a report."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

import structlog

from a11y_analyzer.api.dependencies import get_analysis_service
from a11y_analyzer.models.errors import InvalidScanDataError
from a11y_analyzer.models.requests import AnalyzeRequest
from a11y_analyzer.services.analysis import AnalysisService

logger = structlog.get_logger()

router = APIRouter()


@router.post("/analyze")
async def analyze(
    request_body: AnalyzeRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    """Return ``{"report": "<JSON string>"}`` with summary, recommendations, severity and score."""
    if not request_body.prompt or not request_body.prompt.strip():
        return JSONResponse(status_code=400, content={"error": "Prompt is required"})

    try:
        report, source = await service.analyze(request_body.prompt)
    except InvalidScanDataError as e:
        cause = e.__cause__
        logger.error("analysis_failed", error=str(e), cause=str(cause) if cause else None)
        return JSONResponse(
            status_code=500,
            content={
                "error": f"Analysis failed: {e}",
                "details": f"{type(cause).__name__}: {cause}" if cause else type(e).__name__,
            },
        )

    logger.info("analysis_served", source=source.value, severity=report.severity, score=report.score)
    return {"report": report.model_dump_json()}
