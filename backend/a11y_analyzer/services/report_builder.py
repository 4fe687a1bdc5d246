"""Report builder — the full scan → analyze → combine flow for one URL."""

import re
from datetime import datetime, timezone
from typing import Optional

import structlog

from a11y_analyzer.models.errors import InvalidUrlError, ScanError
from a11y_analyzer.models.responses import AccessibilityReport
from a11y_analyzer.scanner import AccessibilityScanner
from a11y_analyzer.scoring import ScanResult, score_band
from a11y_analyzer.services.analysis import AnalysisService

logger = structlog.get_logger()

URL_PATTERN = re.compile(r"^https?://.+")


def validate_url(url: Optional[str]) -> str:
    """Return the stripped URL or raise InvalidUrlError."""
    candidate = (url or "").strip()
    if not URL_PATTERN.match(candidate):
        raise InvalidUrlError(candidate)
    return candidate


class ReportBuilder:
    """Builds an AccessibilityReport.

    A failed scan does not fail the report: the error message is recorded
    and the analysis runs over an empty result.
    """

    def __init__(self, scanner: AccessibilityScanner, analysis: AnalysisService):
        self.scanner = scanner
        self.analysis = analysis

    async def build(self, url: str) -> AccessibilityReport:
        url = validate_url(url)

        error = None
        try:
            scan = await self.scanner.scan(url)
        except ScanError as e:
            logger.warning("report_scan_failed", url=url, error=str(e), error_type=type(e).__name__)
            scan = ScanResult()
            error = str(e)

        analysis, source = await self.analysis.analyze_scan(url, scan)

        report = AccessibilityReport(
            url=url,
            timestamp=datetime.now(timezone.utc),
            scan=scan,
            analysis=analysis,
            analysis_source=source.value,
            total_issues=scan.total_affected_elements,
            passed_tests=len(scan.passes),
            score_band=score_band(analysis.score),
            error=error,
        )

        logger.info(
            "report_built",
            url=url,
            source=source.value,
            score=analysis.score,
            severity=analysis.severity,
            total_issues=report.total_issues,
            scan_failed=error is not None,
        )
        return report
