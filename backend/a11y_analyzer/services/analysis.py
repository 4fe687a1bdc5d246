"""Analysis service — language-model report with a local heuristic fallback."""

from enum import Enum
from typing import Optional

import structlog

from a11y_analyzer.agents.accessibility_analyst import AccessibilityAnalystAgent
from a11y_analyzer.config import get_settings
from a11y_analyzer.scoring import (
    AnalysisReport,
    ScanResult,
    build_analysis_prompt,
    extract_violations,
    summarize_violations,
)

logger = structlog.get_logger()


class AnalysisSource(str, Enum):
    LLM = "llm"
    HEURISTIC = "heuristic"


class AnalysisService:
    """Produces an AnalysisReport from an analysis prompt.

    The analyst agent is used only when an OpenAI key is configured. Any
    agent failure falls back to the heuristic computed from the violations
    embedded in the prompt.
    """

    def __init__(self, agent: Optional[AccessibilityAnalystAgent] = None, use_llm: Optional[bool] = None):
        self.use_llm = get_settings().llm_enabled if use_llm is None else use_llm
        self._agent = agent

    @property
    def agent(self) -> AccessibilityAnalystAgent:
        if self._agent is None:
            self._agent = AccessibilityAnalystAgent()
        return self._agent

    async def _try_llm(self, prompt: str) -> Optional[AnalysisReport]:
        if not self.use_llm:
            return None
        try:
            result = await self.agent.run(prompt)
            return result["output"]
        except Exception as e:
            logger.warning("analysis_fallback", reason="llm_failed", error=str(e), error_type=type(e).__name__)
            return None

    async def analyze(self, prompt: str) -> tuple[AnalysisReport, AnalysisSource]:
        """Analyze a prompt that embeds axe-core violations.

        Raises:
            InvalidScanDataError: the model was unavailable and the prompt holds no readable violations
        """
        report = await self._try_llm(prompt)
        if report is not None:
            return report, AnalysisSource.LLM

        violations = extract_violations(prompt)
        report = summarize_violations(violations)

        logger.info(
            "analysis_completed",
            source=AnalysisSource.HEURISTIC.value,
            violations=len(violations),
            severity=report.severity,
            score=report.score,
        )
        return report, AnalysisSource.HEURISTIC

    async def analyze_scan(self, url: str, scan: ScanResult) -> tuple[AnalysisReport, AnalysisSource]:
        """Analyze an in-hand scan result; always returns a report.

        The heuristic runs on ``scan.violations`` directly; only the model
        sees the rendered prompt.
        """
        report = await self._try_llm(build_analysis_prompt(url, scan))
        if report is not None:
            return report, AnalysisSource.LLM

        report = summarize_violations(scan.violations)
        logger.info(
            "analysis_completed",
            source=AnalysisSource.HEURISTIC.value,
            url=url,
            violations=len(scan.violations),
            severity=report.severity,
            score=report.score,
        )
        return report, AnalysisSource.HEURISTIC
