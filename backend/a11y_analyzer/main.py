"""Accessibility Analyzer — axe-core page scanning with scored reports.

Main FastAPI application with lifespan management, CORS, and global error handling.
"""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from a11y_analyzer import __version__
from a11y_analyzer.config import get_settings
from a11y_analyzer.api.router import api_router
from a11y_analyzer.scanner import AccessibilityScanner, AxeSource, PageFetcher, PlaywrightAxeRunner
from a11y_analyzer.services.analysis import AnalysisService
from a11y_analyzer.services.rate_limiter import TokenBucketRateLimiter
from a11y_analyzer.services.report_builder import ReportBuilder

# Configure structured logging
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if get_settings().DEBUG else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(get_settings().LOG_LEVEL.upper())
    ),
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    settings = get_settings()

    # ── Startup ──
    logger.info("app_starting", debug=settings.DEBUG, llm_enabled=settings.llm_enabled)

    app.state.axe_source = AxeSource()
    app.state.scanner = AccessibilityScanner(
        fetcher=PageFetcher(),
        runner=PlaywrightAxeRunner(axe_source=app.state.axe_source),
    )
    app.state.analysis_service = AnalysisService()
    app.state.report_builder = ReportBuilder(app.state.scanner, app.state.analysis_service)
    app.state.rate_limiter = TokenBucketRateLimiter()

    logger.info("app_started", model=settings.ANALYST_MODEL if settings.llm_enabled else None)

    yield

    # ── Shutdown ──
    logger.info("app_stopped")


# ── Create Application ──

app = FastAPI(
    title="Accessibility Analyzer",
    description=(
        "Scans a web page with axe-core and summarizes the WCAG violations "
        "into a score, a severity label and prioritized recommendations."
    ),
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ── Middleware ──

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Global Exception Handlers ──

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all error handler for unhandled exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again.",
        },
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Handle validation errors."""
    return JSONResponse(
        status_code=422,
        content={"error": "validation_error", "message": str(exc)},
    )


# ── Routes ──

app.include_router(api_router)


# ── Root endpoint ──

@app.get("/")
async def root():
    """Root endpoint — API info."""
    return {
        "name": "Accessibility Analyzer",
        "version": __version__,
        "endpoints": {
            "scan": "GET /scan?url=<URL>",
            "analyze": "POST /analyze",
            "reports": "POST /reports",
        },
        "docs": "/docs",
        "health": "/health",
    }
