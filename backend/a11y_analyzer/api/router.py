"""Main API router — combines all endpoint routers."""

from fastapi import APIRouter

from a11y_analyzer.api.analyze import router as analyze_router
from a11y_analyzer.api.health import router as health_router
from a11y_analyzer.api.reports import router as reports_router
from a11y_analyzer.api.scan import router as scan_router

api_router = APIRouter()

# Health check
api_router.include_router(health_router, tags=["Health"])

# Rule engine
api_router.include_router(scan_router, tags=["Scan"])

# Report generation
api_router.include_router(analyze_router, tags=["Analysis"])
api_router.include_router(reports_router, tags=["Reports"])
