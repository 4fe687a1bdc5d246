"""Violation scoring — deterministic heuristic report over axe-core violations.

Usage:
    from a11y_analyzer.scoring import summarize_violations

    report = summarize_violations(scan.violations)
    print(report.severity, report.score)
"""

from a11y_analyzer.scoring.heuristic import score_band, summarize_violations
from a11y_analyzer.scoring.models import (
    AnalysisReport,
    Impact,
    ScanResult,
    ScoreBand,
    Severity,
    Violation,
    ViolationNode,
)
from a11y_analyzer.scoring.prompt import build_analysis_prompt, extract_violations

__all__ = [
    "summarize_violations",
    "score_band",
    "build_analysis_prompt",
    "extract_violations",
    "AnalysisReport",
    "Impact",
    "ScanResult",
    "ScoreBand",
    "Severity",
    "Violation",
    "ViolationNode",
]
