"""Domain exceptions raised by the scanner and the analysis pipeline."""


class AnalyzerError(Exception):
    """Base class for all accessibility analyzer errors."""


class ScanError(AnalyzerError):
    """Scanning a page failed."""


class PageFetchError(ScanError):
    """The target page could not be downloaded."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Could not fetch {url}: {reason}")


class RuleEngineError(ScanError):
    """axe-core could not be loaded or failed while evaluating the page."""


class InvalidScanDataError(AnalyzerError):
    """The analysis prompt does not carry a readable violations array."""


class InvalidUrlError(AnalyzerError, ValueError):
    """The URL is not an absolute http(s) URL."""

    def __init__(self, url: str):
        self.url = url
        super().__init__("Please enter a valid URL starting with http:// or https://")
