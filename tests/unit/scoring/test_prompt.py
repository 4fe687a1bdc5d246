"""Analysis prompt unit tests."""

import pytest

from a11y_analyzer.models.errors import InvalidScanDataError
from a11y_analyzer.scoring import ScanResult, build_analysis_prompt, extract_violations


class TestBuildAnalysisPrompt:
    def test_prompt_embeds_url_and_totals(self, sample_scan: ScanResult) -> None:
        prompt = build_analysis_prompt("https://example.com", sample_scan)

        assert "Accessibility scan data for https://example.com:" in prompt
        assert "Total violations: 2" in prompt
        assert "Total affected elements: 3" in prompt
        assert "Passed tests: 3" in prompt
        assert '"severity": "low|medium|high"' in prompt

    def test_prompt_uses_axe_key_names(self, sample_scan: ScanResult) -> None:
        prompt = build_analysis_prompt("https://example.com", sample_scan)
        assert '"failureSummary"' in prompt
        assert '"helpUrl"' in prompt

    def test_embedded_violations_can_be_read_back(self, sample_scan: ScanResult) -> None:
        prompt = build_analysis_prompt("https://example.com", sample_scan)

        violations = extract_violations(prompt)

        assert [v.id for v in violations] == ["image-alt", "color-contrast"]
        assert len(violations[0].nodes) == 2
        assert violations[0].nodes[0].target == ["#image-alt-0"]


class TestExtractViolations:
    def test_reads_hand_written_prompt_with_nested_arrays(self) -> None:
        prompt = (
            "Please review.\n"
            "Accessibility scan data for https://shop.example:\n"
            '[{"id": "label", "impact": "serious", "tags": ["wcag2a"], '
            '"nodes": [{"target": [["iframe", "#form"]], "failureSummary": "Missing label"}]}]\n'
            "Total violations: 1"
        )

        violations = extract_violations(prompt)

        assert len(violations) == 1
        assert violations[0].impact == "serious"
        assert violations[0].nodes[0].failure_summary == "Missing label"

    def test_empty_array(self) -> None:
        assert extract_violations("Accessibility scan data for https://a.example:\n[]") == []

    def test_missing_marker_raises(self) -> None:
        with pytest.raises(InvalidScanDataError, match="marker"):
            extract_violations('[{"id": "image-alt"}]')

    def test_missing_array_raises(self) -> None:
        with pytest.raises(InvalidScanDataError):
            extract_violations("Accessibility scan data for https://a.example: nothing here")

    def test_malformed_json_raises(self) -> None:
        with pytest.raises(InvalidScanDataError, match="Invalid accessibility data format"):
            extract_violations('Accessibility scan data for https://a.example:\n[{"id": "x",]')

    def test_array_of_non_objects_raises(self) -> None:
        with pytest.raises(InvalidScanDataError):
            extract_violations("Accessibility scan data for https://a.example:\n[1, 2, 3]")

    def test_url_with_brackets_does_not_hide_the_array(self, sample_scan: ScanResult) -> None:
        prompt = build_analysis_prompt("https://example.com/search?tags[]=a", sample_scan)

        violations = extract_violations(prompt)

        assert [v.id for v in violations] == ["image-alt", "color-contrast"]

    def test_hand_written_prompt_with_bracketed_url(self) -> None:
        prompt = (
            "Accessibility scan data for https://shop.example/list?ids[0]=7:\n"
            '[{"id": "label", "impact": "serious", "nodes": []}]'
        )

        assert [v.id for v in extract_violations(prompt)] == ["label"]

    def test_null_nodes_and_id_are_treated_as_empty(self) -> None:
        prompt = (
            "Accessibility scan data for https://a.example:\n"
            '[{"id": null, "impact": "serious", "help": "h", "nodes": null},'
            ' {"id": "list", "impact": "minor", "nodes": [null, {"target": null}]}]'
        )

        violations = extract_violations(prompt)

        assert violations[0].id == ""
        assert violations[0].nodes == []
        assert len(violations[1].nodes) == 1
        assert violations[1].nodes[0].target == []
