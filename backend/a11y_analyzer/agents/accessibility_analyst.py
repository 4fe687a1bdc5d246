"""Accessibility Analyst Agent — turns axe-core scan data into a scored report."""

from typing import Optional

from a11y_analyzer.agents.base import BaseAgent
from a11y_analyzer.scoring.models import AnalysisReport

SYSTEM_PROMPT = """You are a senior web accessibility auditor with deep knowledge of WCAG 2.1 A/AA and the axe-core rule set.

You receive the raw violations reported by axe-core for one web page. Judge how badly the page fails real users of assistive technology and answer with a single JSON object:

{
  "summary": "2-3 sentences on the overall accessibility state",
  "recommendations": ["up to 5 concrete fixes, most impactful first"],
  "severity": "low" | "medium" | "high",
  "score": 0-100
}

Rules:
- "high" when any violation blocks access (impact "critical"), "medium" for serious barriers, otherwise "low".
- 100 means no violations. Penalize critical and serious issues far more than minor ones.
- Every recommendation must name the failing rule or element and how to fix it.
- Output ONLY the JSON object. No markdown, no commentary."""


class AccessibilityAnalystAgent(BaseAgent):
    """Asks a chat model for the accessibility report of a scanned page."""

    def __init__(self, model_name: Optional[str] = None, llm=None):
        super().__init__(
            name="accessibility_analyst",
            role="Accessibility Analyst",
            model_name=model_name,
            json_mode=True,
            llm=llm,
        )

    def get_system_prompt(self) -> str:
        return SYSTEM_PROMPT

    def build_user_message(self, payload: str) -> str:
        return payload.strip()

    def parse_response(self, raw_response: str) -> AnalysisReport:
        """Validate the model's JSON into an AnalysisReport.

        Raises:
            ValueError: the response is not JSON or misses required fields
        """
        data = self._safe_parse_json(raw_response)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

        recommendations = data.get("recommendations") or []
        if isinstance(recommendations, str):
            recommendations = [recommendations]
        data["recommendations"] = [str(r) for r in recommendations][:5]

        return AnalysisReport.model_validate(data)
