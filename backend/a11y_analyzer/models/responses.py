"""API response models."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal
from datetime import datetime

from a11y_analyzer.scoring.models import AnalysisReport, ScanResult, ScoreBand


class AccessibilityReport(BaseModel):
    """Scan results, analysis and totals for one page."""

    model_config = ConfigDict(use_enum_values=True)

    url: str
    timestamp: datetime
    scan: ScanResult
    analysis: AnalysisReport
    analysis_source: Literal["llm", "heuristic"]
    total_issues: int = Field(description="Affected elements across all violations")
    passed_tests: int
    score_band: ScoreBand
    error: Optional[str] = Field(default=None, description="Scan failure message, if the scan failed")

    def to_wire(self) -> dict:
        data = self.model_dump(mode="json")
        data["scan"] = self.scan.to_wire()
        return data


class HealthDependency(BaseModel):
    """Health status of a single dependency."""

    status: Literal["healthy", "unhealthy", "degraded"]
    latency_ms: Optional[float] = None
    message: Optional[str] = None


class HealthResponse(BaseModel):
    """System health check response."""

    status: Literal["healthy", "unhealthy", "degraded"]
    version: str
    uptime_seconds: float
    dependencies: dict[str, HealthDependency]
