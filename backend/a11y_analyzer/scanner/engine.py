"""Accessibility scanner — fetches a page and evaluates it with axe-core.

Usage:
    scanner = AccessibilityScanner()
    result = await scanner.scan("https://example.com")
    print(len(result.violations), len(result.passes))
"""

import time
from typing import Optional, Protocol

import structlog
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright
from pydantic import ValidationError

from a11y_analyzer.config import get_settings
from a11y_analyzer.models.errors import RuleEngineError
from a11y_analyzer.scanner.axe_source import AxeSource
from a11y_analyzer.scanner.fetcher import PageFetcher
from a11y_analyzer.scoring.models import ScanResult

logger = structlog.get_logger()

AXE_RUN_SCRIPT = "async (options) => await window.axe.run(document, options)"


class RuleRunner(Protocol):
    async def run(self, html: str, url: str) -> dict:
        ...


class PlaywrightAxeRunner:
    """Loads HTML into headless Chromium and runs axe-core against the document."""

    def __init__(
        self,
        axe_source: Optional[AxeSource] = None,
        settle_seconds: Optional[float] = None,
        rule_tags: Optional[list[str]] = None,
    ):
        settings = get_settings()
        self.axe_source = axe_source or AxeSource()
        self.settle_seconds = settings.SCAN_SETTLE_SECONDS if settle_seconds is None else settle_seconds
        self.rule_tags = rule_tags or list(settings.AXE_RULE_TAGS)

    @property
    def axe_options(self) -> dict:
        return {
            "reporter": "v2",
            "runOnly": {"type": "tag", "values": self.rule_tags},
            "resultTypes": ["violations", "passes"],
        }

    async def run(self, html: str, url: str) -> dict:
        script = await self.axe_source.load()

        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch(headless=True, args=["--no-sandbox"])
                try:
                    page = await browser.new_page(bypass_csp=True)
                    await page.set_content(html, wait_until="domcontentloaded")

                    # Let dynamic content settle
                    if self.settle_seconds > 0:
                        await page.wait_for_timeout(self.settle_seconds * 1000)

                    await page.add_script_tag(content=script)
                    await page.wait_for_function("() => typeof window.axe !== 'undefined'")
                    return await page.evaluate(AXE_RUN_SCRIPT, self.axe_options)
                finally:
                    await browser.close()
        except PlaywrightError as e:
            raise RuleEngineError(f"axe-core evaluation failed for {url}: {e.message}") from e


class AccessibilityScanner:
    """Fetch → DOM → axe-core, one page per call."""

    def __init__(
        self,
        fetcher: Optional[PageFetcher] = None,
        runner: Optional[RuleRunner] = None,
    ):
        self.fetcher = fetcher or PageFetcher()
        self.runner = runner or PlaywrightAxeRunner()

    async def scan(self, url: str) -> ScanResult:
        """Scan one page.

        Raises:
            PageFetchError: the page could not be downloaded
            RuleEngineError: axe-core failed or returned unreadable results
        """
        start_time = time.perf_counter()

        html = await self.fetcher.fetch(url)
        raw = await self.runner.run(html, url)

        if not isinstance(raw, dict):
            raise RuleEngineError(f"Unexpected axe-core result type: {type(raw).__name__}")

        try:
            result = ScanResult(
                violations=raw.get("violations") or [],
                passes=raw.get("passes") or [],
            )
        except ValidationError as e:
            raise RuleEngineError(f"Unreadable axe-core results: {e.error_count()} invalid fields") from e

        logger.info(
            "scan_completed",
            url=url,
            violations=len(result.violations),
            passes=len(result.passes),
            affected_elements=result.total_affected_elements,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return result
