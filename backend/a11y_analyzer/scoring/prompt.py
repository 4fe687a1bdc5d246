"""Analysis prompt — builds the expert prompt and reads the violations back out of it."""

import json
import re
import textwrap

from a11y_analyzer.models.errors import InvalidScanDataError
from a11y_analyzer.scoring.models import ScanResult, Violation

SCAN_DATA_MARKER = "Accessibility scan data for"

# The colon closing "<marker> <url>:" followed by the opening bracket of the array
_ARRAY_START = re.compile(r":\s*(?=\[)")

_PROMPT_TEMPLATE = textwrap.dedent("""\
    You're an accessibility expert. Analyze the accessibility scan results for {url} and generate a JSON response with this exact structure:

    {{
      "summary": "A 2-3 sentence summary of the accessibility state",
      "recommendations": ["recommendation 1", "recommendation 2", "recommendation 3", "recommendation 4", "recommendation 5"],
      "severity": "low|medium|high",
      "score": 75
    }}

    {marker} {url}:
    {violations}

    Total violations: {total_violations}
    Total affected elements: {total_elements}
    Passed tests: {passed_tests}

    Provide specific, actionable recommendations based on the actual violations found on this website. Calculate a score from 0-100 where 100 is perfect accessibility.
""")


def build_analysis_prompt(url: str, scan: ScanResult) -> str:
    """Render the analysis prompt for a scanned page."""
    violations_json = json.dumps(scan.to_wire()["violations"], indent=2)
    return _PROMPT_TEMPLATE.format(
        url=url,
        marker=SCAN_DATA_MARKER,
        violations=violations_json,
        total_violations=len(scan.violations),
        total_elements=scan.total_affected_elements,
        passed_tests=len(scan.passes),
    )


def extract_violations(prompt: str) -> list[Violation]:
    """Decode the violations array embedded after the scan data marker.

    Raises:
        InvalidScanDataError: marker or array missing, malformed JSON, or not a list
    """
    marker_at = prompt.find(SCAN_DATA_MARKER)
    if marker_at == -1:
        raise InvalidScanDataError("Invalid accessibility data format: scan data marker not found")

    match = _ARRAY_START.search(prompt, marker_at + len(SCAN_DATA_MARKER))
    if match is None:
        raise InvalidScanDataError("Invalid accessibility data format: no violations array")
    array_at = match.end()

    try:
        data, _ = json.JSONDecoder().raw_decode(prompt, array_at)
    except json.JSONDecodeError as e:
        raise InvalidScanDataError(f"Invalid accessibility data format: {e}") from e

    if not isinstance(data, list):
        raise InvalidScanDataError("No violations data found")

    try:
        return [Violation.model_validate(item) for item in data]
    except ValueError as e:
        raise InvalidScanDataError(f"Invalid accessibility data format: {e}") from e
