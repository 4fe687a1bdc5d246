"""Page fetcher — downloads the HTML of the page under test."""

from typing import Optional

import httpx
import structlog

from a11y_analyzer.config import get_settings
from a11y_analyzer.models.errors import PageFetchError

logger = structlog.get_logger()


class PageFetcher:
    """Fetches page HTML with a desktop browser User-Agent and a hard timeout."""

    def __init__(
        self,
        timeout_seconds: Optional[float] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.timeout_seconds = timeout_seconds or settings.SCAN_TIMEOUT_SECONDS
        self.user_agent = user_agent or settings.SCAN_USER_AGENT
        self._transport = transport

    async def fetch(self, url: str) -> str:
        """Return the response body of ``url``.

        Raises:
            PageFetchError: network failure, timeout, or non-2xx status
        """
        async with httpx.AsyncClient(
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout_seconds,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            try:
                response = await client.get(url)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise PageFetchError(url, f"HTTP {e.response.status_code}") from e
            except httpx.HTTPError as e:
                raise PageFetchError(url, str(e) or type(e).__name__) from e

        logger.debug("page_fetched", url=url, status=response.status_code, bytes=len(response.content))
        return response.text
