"""AccessibilityScanner unit tests."""

import pytest

from a11y_analyzer.models.errors import PageFetchError, RuleEngineError
from a11y_analyzer.scanner import AccessibilityScanner, AxeSource, PlaywrightAxeRunner


class StaticFetcher:
    def __init__(self, html: str = "<html></html>", error: Exception = None):
        self.html = html
        self.error = error

    async def fetch(self, url: str) -> str:
        if self.error is not None:
            raise self.error
        return self.html


class StaticRunner:
    def __init__(self, result):
        self.result = result
        self.calls = []

    async def run(self, html: str, url: str):
        self.calls.append((html, url))
        return self.result


class TestAccessibilityScanner:
    async def test_scan_returns_violations_and_passes(self, violation_factory) -> None:
        runner = StaticRunner({
            "violations": [violation_factory(nodes=3)],
            "passes": [{"id": "document-title"}],
            "incomplete": [],
        })
        scanner = AccessibilityScanner(fetcher=StaticFetcher("<html><img></html>"), runner=runner)

        result = await scanner.scan("https://example.com")

        assert runner.calls == [("<html><img></html>", "https://example.com")]
        assert [v.id for v in result.violations] == ["image-alt"]
        assert result.total_affected_elements == 3
        assert result.passes == [{"id": "document-title"}]

    async def test_missing_result_lists_default_to_empty(self) -> None:
        scanner = AccessibilityScanner(fetcher=StaticFetcher(), runner=StaticRunner({"violations": None}))

        result = await scanner.scan("https://example.com")

        assert result.violations == []
        assert result.passes == []

    async def test_fetch_error_propagates(self) -> None:
        scanner = AccessibilityScanner(
            fetcher=StaticFetcher(error=PageFetchError("https://down.example", "timed out")),
            runner=StaticRunner({}),
        )

        with pytest.raises(PageFetchError):
            await scanner.scan("https://down.example")

    async def test_non_dict_result_raises(self) -> None:
        scanner = AccessibilityScanner(fetcher=StaticFetcher(), runner=StaticRunner("axe not loaded"))

        with pytest.raises(RuleEngineError, match="Unexpected"):
            await scanner.scan("https://example.com")

    async def test_unreadable_violations_raise(self) -> None:
        scanner = AccessibilityScanner(
            fetcher=StaticFetcher(),
            runner=StaticRunner({"violations": [{"id": "x", "nodes": "not-a-list"}]}),
        )

        with pytest.raises(RuleEngineError, match="Unreadable"):
            await scanner.scan("https://example.com")


class TestPlaywrightAxeRunner:
    def test_axe_options(self) -> None:
        runner = PlaywrightAxeRunner(axe_source=AxeSource(), settle_seconds=0, rule_tags=["wcag2a"])

        assert runner.axe_options == {
            "reporter": "v2",
            "runOnly": {"type": "tag", "values": ["wcag2a"]},
            "resultTypes": ["violations", "passes"],
        }

    def test_default_tags_and_settle_delay(self) -> None:
        runner = PlaywrightAxeRunner(axe_source=AxeSource())

        assert runner.rule_tags == ["wcag2a", "wcag2aa", "best-practice"]
        assert runner.settle_seconds == 1.0
