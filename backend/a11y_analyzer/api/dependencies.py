"""Request-scoped accessors for the services built in the app lifespan."""

from fastapi import HTTPException, Request

from a11y_analyzer.scanner import AccessibilityScanner
from a11y_analyzer.services.analysis import AnalysisService
from a11y_analyzer.services.rate_limiter import TokenBucketRateLimiter
from a11y_analyzer.services.report_builder import ReportBuilder


def get_scanner(request: Request) -> AccessibilityScanner:
    return request.app.state.scanner


def get_analysis_service(request: Request) -> AnalysisService:
    return request.app.state.analysis_service


def get_report_builder(request: Request) -> ReportBuilder:
    return request.app.state.report_builder


def get_rate_limiter(request: Request) -> TokenBucketRateLimiter:
    return request.app.state.rate_limiter


def enforce_scan_rate_limit(request: Request) -> None:
    """Consume one scan token for the calling client or raise 429."""
    limiter = get_rate_limiter(request)
    client_ip = request.client.host if request.client else "unknown"
    if not limiter.allow_request(client_ip):
        raise HTTPException(
            status_code=429,
            detail={
                "error": "Rate limit exceeded",
                "message": f"Maximum {limiter.max_tokens} scans per {limiter.refill_seconds} seconds. Try again later.",
                "remaining": limiter.remaining_tokens(client_ip),
                "retry_after_seconds": int(limiter.reset_time(client_ip)),
            },
        )
