"""Health check endpoint."""

import time
from fastapi import APIRouter, Request

from a11y_analyzer import __version__
from a11y_analyzer.config import get_settings
from a11y_analyzer.models.responses import HealthResponse, HealthDependency

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """Service health with dependency status."""
    dependencies = {}

    # Language model: optional, the heuristic covers for it
    if get_settings().llm_enabled:
        dependencies["llm"] = HealthDependency(status="healthy")
    else:
        dependencies["llm"] = HealthDependency(
            status="degraded",
            message="OPENAI_API_KEY not set; heuristic analysis in use",
        )

    # axe-core script
    try:
        axe_source = request.app.state.axe_source
        if axe_source.is_available:
            dependencies["axe_core"] = HealthDependency(status="healthy")
        else:
            dependencies["axe_core"] = HealthDependency(
                status="degraded",
                message="Not cached yet; will be downloaded on first scan",
            )
    except Exception as e:
        dependencies["axe_core"] = HealthDependency(status="unhealthy", message=str(e))

    # Overall status
    all_healthy = all(d.status == "healthy" for d in dependencies.values())
    any_unhealthy = any(d.status == "unhealthy" for d in dependencies.values())

    if all_healthy:
        status = "healthy"
    elif any_unhealthy:
        status = "unhealthy"
    else:
        status = "degraded"

    return HealthResponse(
        status=status,
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
        dependencies=dependencies,
    )
