"""Shared test fixtures."""

from typing import Optional

import pytest

from a11y_analyzer.models.errors import ScanError
from a11y_analyzer.scoring import ScanResult
from a11y_analyzer.services.analysis import AnalysisService


def make_violation(
    rule_id: str = "image-alt",
    impact: Optional[str] = "critical",
    nodes: int = 1,
    description: Optional[str] = "Ensures <img> elements have alternate text",
    help: Optional[str] = "Images must have alternate text",
    failure_summary: Optional[str] = "Fix any of the following:\n  Element does not have an alt attribute",
) -> dict:
    """Build a violation dict shaped like axe-core's v2 reporter output."""
    return {
        "id": rule_id,
        "impact": impact,
        "tags": ["wcag2a", "wcag111"],
        "description": description,
        "help": help,
        "helpUrl": f"https://dequeuniversity.com/rules/axe/4.9/{rule_id}",
        "nodes": [
            {
                "target": [f"#{rule_id}-{i}"],
                "html": f'<img id="{rule_id}-{i}" src="a.png">',
                "impact": impact,
                "failureSummary": failure_summary,
                "any": [],
                "all": [],
                "none": [],
            }
            for i in range(nodes)
        ],
    }


class FakeScanner:
    """Stands in for AccessibilityScanner; returns a fixed result or raises."""

    def __init__(self, result: Optional[ScanResult] = None, error: Optional[Exception] = None):
        self.result = result or ScanResult()
        self.error = error
        self.scanned: list[str] = []

    async def scan(self, url: str) -> ScanResult:
        self.scanned.append(url)
        if self.error is not None:
            raise self.error
        return self.result


class StubAgent:
    """Stands in for AccessibilityAnalystAgent."""

    def __init__(self, output=None, error: Optional[Exception] = None):
        self.output = output
        self.error = error
        self.prompts: list[str] = []

    async def run(self, payload: str) -> dict:
        self.prompts.append(payload)
        if self.error is not None:
            raise self.error
        return {"output": self.output, "raw_response": "", "metadata": {}}


@pytest.fixture
def violation_factory():
    return make_violation


@pytest.fixture
def sample_scan() -> ScanResult:
    """Two violations (critical with 2 nodes, moderate with 1) and three passes."""
    return ScanResult.model_validate(
        {
            "violations": [
                make_violation("image-alt", "critical", nodes=2),
                make_violation(
                    "color-contrast",
                    "moderate",
                    nodes=1,
                    description="Ensures the contrast between foreground and background colors meets WCAG 2 AA",
                    help="Elements must have sufficient color contrast",
                    failure_summary="Fix any of the following:\n  Element has insufficient color contrast",
                ),
            ],
            "passes": [{"id": "html-has-lang"}, {"id": "document-title"}, {"id": "bypass"}],
        }
    )


@pytest.fixture
def fake_scanner(sample_scan: ScanResult) -> FakeScanner:
    return FakeScanner(result=sample_scan)


@pytest.fixture
def failing_scanner() -> FakeScanner:
    return FakeScanner(error=ScanError("Could not fetch https://down.example: timed out"))


@pytest.fixture
def heuristic_service() -> AnalysisService:
    """AnalysisService that never calls a language model."""
    return AnalysisService(use_llm=False)


@pytest.fixture
def make_scanner():
    return FakeScanner


@pytest.fixture
def make_agent():
    return StubAgent
