"""Page scanning — HTML fetch plus axe-core rule evaluation."""

from a11y_analyzer.scanner.axe_source import AxeSource
from a11y_analyzer.scanner.engine import AccessibilityScanner, PlaywrightAxeRunner
from a11y_analyzer.scanner.fetcher import PageFetcher

__all__ = ["AccessibilityScanner", "AxeSource", "PageFetcher", "PlaywrightAxeRunner"]
