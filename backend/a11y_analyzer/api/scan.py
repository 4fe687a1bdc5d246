"""Scan endpoint — fetch a page and return raw axe-core results."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

import structlog

from a11y_analyzer.api.dependencies import enforce_scan_rate_limit, get_scanner
from a11y_analyzer.models.errors import InvalidUrlError, ScanError
from a11y_analyzer.scanner import AccessibilityScanner
from a11y_analyzer.services.report_builder import validate_url

logger = structlog.get_logger()

router = APIRouter()


@router.get("/scan")
async def scan_page(
    request: Request,
    url: Optional[str] = Query(default=None, description="Page URL to scan"),
    scanner: AccessibilityScanner = Depends(get_scanner),
):
    """Run axe-core against a page and return its violations and passes.

    Requests rejected for a missing or invalid URL do not consume a scan token.
    """
    if not url:
        return JSONResponse(status_code=400, content={"error": "URL parameter is required"})

    try:
        url = validate_url(url)
    except InvalidUrlError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    enforce_scan_rate_limit(request)

    try:
        result = await scanner.scan(url)
    except ScanError as e:
        logger.error("scan_failed", url=url, error=str(e), error_type=type(e).__name__)
        return JSONResponse(status_code=500, content={"error": f"Failed to analyze website: {e}"})

    return result.to_wire()
