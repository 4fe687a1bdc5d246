"""Scoring models — impact levels, severity labels, penalties, and report structure.

Scoring is deterministic: same violations → same report, no randomness, no LLM calls.
"""

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Impact(str, Enum):
    """Impact level attached to each violation by axe-core."""

    MINOR = "minor"
    MODERATE = "moderate"
    SERIOUS = "serious"
    CRITICAL = "critical"

    @classmethod
    def coerce(cls, value: Optional[str]) -> "Impact":
        """Map a raw impact string onto an Impact; missing or unknown values are minor."""
        try:
            return cls(value)
        except ValueError:
            return cls.MINOR


class Severity(str, Enum):
    """Priority label for the whole page."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ScoreBand(str, Enum):
    """Coarse bucket of the score used when presenting a report."""

    GOOD = "good"  # >= 80
    FAIR = "fair"  # >= 50
    POOR = "poor"


# Points subtracted from 100 per violation
IMPACT_PENALTIES = {
    Impact.CRITICAL: 20,
    Impact.SERIOUS: 15,
    Impact.MODERATE: 10,
    Impact.MINOR: 5,
}

MAX_RECOMMENDATIONS = 5
MODERATE_MEDIUM_THRESHOLD = 2
NO_VIOLATIONS_RECOMMENDATION = "No specific violations found to address"


class ViolationNode(BaseModel):
    """One element affected by a violation."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    target: list = Field(default_factory=list)
    html: Optional[str] = None
    impact: Optional[str] = None
    failure_summary: Optional[str] = Field(default=None, alias="failureSummary")

    @field_validator("target", mode="before")
    @classmethod
    def _null_target(cls, value):
        return [] if value is None else value


class Violation(BaseModel):
    """A single rule failure reported by axe-core.

    Extra keys (tags, helpUrl, any/all/none checks...) are kept as-is so the
    scan response carries everything the engine produced.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = ""
    impact: Optional[str] = None
    description: Optional[str] = None
    help: Optional[str] = None
    help_url: Optional[str] = Field(default=None, alias="helpUrl")
    nodes: list[ViolationNode] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _null_id(cls, value):
        return "" if value is None else value

    @field_validator("nodes", mode="before")
    @classmethod
    def _null_nodes(cls, value):
        if value is None:
            return []
        if isinstance(value, list):
            return [node for node in value if node is not None]
        return value

    @property
    def impact_level(self) -> Impact:
        return Impact.coerce(self.impact)


class ScanResult(BaseModel):
    """Raw rule engine output for one page."""

    violations: list[Violation] = Field(default_factory=list)
    passes: list[dict] = Field(default_factory=list)

    @property
    def total_affected_elements(self) -> int:
        return sum(len(v.nodes) for v in self.violations)

    def to_wire(self) -> dict:
        """Serialize with axe-core's camelCase keys."""
        return self.model_dump(by_alias=True, mode="json")


class AnalysisReport(BaseModel):
    """Summary of a page's accessibility state."""

    summary: str
    recommendations: list[str] = Field(default_factory=list)
    severity: Severity
    score: int = Field(ge=0, le=100)

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("severity", mode="before")
    @classmethod
    def _normalize_severity(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("score", mode="before")
    @classmethod
    def _clamp_score(cls, value):
        if isinstance(value, bool):
            return value
        try:
            number = float(value)
        except (TypeError, ValueError):
            return value
        if not math.isfinite(number):
            raise ValueError("score must be a finite number")
        # Half-up rounding, not banker's
        return int(math.floor(max(0.0, min(100.0, number)) + 0.5))
