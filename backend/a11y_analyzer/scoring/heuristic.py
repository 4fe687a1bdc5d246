"""Heuristic report — score, severity and recommendations computed from violations alone.

This is the single source of truth for the local analysis. Both the
``/analyze`` fallback and the report builder call ``summarize_violations``.
"""

from collections import Counter
from typing import Iterable, Union

from a11y_analyzer.scoring.models import (
    IMPACT_PENALTIES,
    MAX_RECOMMENDATIONS,
    MODERATE_MEDIUM_THRESHOLD,
    NO_VIOLATIONS_RECOMMENDATION,
    AnalysisReport,
    Impact,
    ScoreBand,
    Severity,
    Violation,
)


def count_impacts(violations: Iterable[Violation]) -> Counter:
    """Count violations per impact level (missing or unknown impact counts as minor)."""
    counts = Counter({impact: 0 for impact in Impact})
    for violation in violations:
        counts[violation.impact_level] += 1
    return counts


def determine_severity(counts: Counter) -> Severity:
    if counts[Impact.CRITICAL] > 0:
        return Severity.HIGH
    if counts[Impact.SERIOUS] > 0 or counts[Impact.MODERATE] > MODERATE_MEDIUM_THRESHOLD:
        return Severity.MEDIUM
    return Severity.LOW


def compute_score(counts: Counter) -> int:
    """Start at 100, subtract a fixed penalty per violation, clamp to [0, 100]."""
    penalty = sum(IMPACT_PENALTIES[impact] * counts[impact] for impact in Impact)
    return max(0, min(100, 100 - penalty))


def format_recommendation(violation: Violation) -> str:
    """Render one violation as ``[IMPACT] description (n elements affected). failure summary``."""
    parts = []
    if violation.impact:
        parts.append(f"[{violation.impact.upper()}]")

    text = violation.description or violation.help or violation.id
    if violation.nodes:
        text += f" ({len(violation.nodes)} elements affected)"
    parts.append(f"{text}.")

    failure_summary = violation.nodes[0].failure_summary if violation.nodes else None
    if failure_summary:
        parts.append(failure_summary)

    return " ".join(parts).strip()


def build_summary(total: int, counts: Counter, severity: Severity) -> str:
    return (
        f"Analysis found {total} accessibility issues: "
        f"{counts[Impact.CRITICAL]} critical, "
        f"{counts[Impact.SERIOUS]} serious, "
        f"{counts[Impact.MODERATE]} moderate. "
        f"This website requires {severity.value} priority attention."
    )


def summarize_violations(violations: Iterable[Union[Violation, dict]]) -> AnalysisReport:
    """Build an AnalysisReport from a list of violations.

    Args:
        violations: Violation models or raw axe-core violation dicts

    Returns:
        AnalysisReport with summary, up to five recommendations, severity and score
    """
    parsed = [
        v if isinstance(v, Violation) else Violation.model_validate(v)
        for v in violations
    ]

    counts = count_impacts(parsed)
    severity = determine_severity(counts)

    recommendations = [format_recommendation(v) for v in parsed[:MAX_RECOMMENDATIONS]]
    if not recommendations:
        recommendations = [NO_VIOLATIONS_RECOMMENDATION]

    return AnalysisReport(
        summary=build_summary(len(parsed), counts, severity),
        recommendations=recommendations,
        severity=severity,
        score=compute_score(counts),
    )


def score_band(score: int) -> ScoreBand:
    if score >= 80:
        return ScoreBand.GOOD
    if score >= 50:
        return ScoreBand.FAIR
    return ScoreBand.POOR
