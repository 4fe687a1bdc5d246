"""Reports endpoint — full scan + analysis for one URL."""

from fastapi import APIRouter, Depends, HTTPException, Request

from a11y_analyzer.api.dependencies import enforce_scan_rate_limit, get_report_builder
from a11y_analyzer.models.errors import InvalidUrlError
from a11y_analyzer.models.requests import CreateReportRequest
from a11y_analyzer.services.report_builder import ReportBuilder, validate_url

router = APIRouter()


@router.post("/reports")
async def create_report(
    request_body: CreateReportRequest,
    request: Request,
    builder: ReportBuilder = Depends(get_report_builder),
):
    """Scan the page, analyze the violations and return the combined report.

    A failed scan still yields a report; its ``error`` field carries the reason.
    """
    try:
        url = validate_url(request_body.url)
    except InvalidUrlError as e:
        raise HTTPException(status_code=400, detail=str(e))

    enforce_scan_rate_limit(request)

    report = await builder.build(url)
    return report.to_wire()
