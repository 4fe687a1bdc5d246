"""axe-core script loader.

The script is read from ``AXE_SCRIPT_PATH`` when set, otherwise downloaded
once from ``AXE_CDN_URL`` into ``AXE_CACHE_PATH``. The text is memoized so
every scan after the first injects it without touching the disk.
"""

from pathlib import Path
from typing import Optional

import httpx
import structlog

from a11y_analyzer.config import get_settings
from a11y_analyzer.models.errors import RuleEngineError

logger = structlog.get_logger()


class AxeSource:
    """Provides the axe-core JavaScript source."""

    def __init__(
        self,
        script_path: Optional[str] = None,
        cdn_url: Optional[str] = None,
        cache_path: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        script_path = script_path or settings.AXE_SCRIPT_PATH
        self.script_path = Path(script_path) if script_path else None
        self.cdn_url = cdn_url or settings.AXE_CDN_URL
        self.cache_path = Path(cache_path or settings.AXE_CACHE_PATH)
        self._transport = transport
        self._script: Optional[str] = None

    @property
    def is_available(self) -> bool:
        """True if the script is loaded or present on disk (no download attempted)."""
        if self._script is not None:
            return True
        return self._local_file() is not None

    def _local_file(self) -> Optional[Path]:
        for path in (self.script_path, self.cache_path):
            if path is not None and path.is_file() and path.stat().st_size > 0:
                return path
        return None

    async def load(self) -> str:
        """Return the axe-core source, downloading it on first use if needed."""
        if self._script is not None:
            return self._script

        local = self._local_file()
        if local is not None:
            self._script = local.read_text(encoding="utf-8")
            logger.info("axe_source_loaded", path=str(local))
            return self._script

        if self.script_path is not None:
            raise RuleEngineError(f"axe-core script not found at {self.script_path}")

        self._script = await self._download()
        return self._script

    async def _download(self) -> str:
        try:
            async with httpx.AsyncClient(timeout=20, follow_redirects=True, transport=self._transport) as client:
                response = await client.get(self.cdn_url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise RuleEngineError(f"Could not download axe-core from {self.cdn_url}: {e}") from e

        script = response.text
        try:
            self.cache_path.parent.mkdir(parents=True, exist_ok=True)
            self.cache_path.write_text(script, encoding="utf-8")
        except OSError as e:
            # Still usable from memory for this process
            logger.warning("axe_source_cache_failed", path=str(self.cache_path), error=str(e))

        logger.info("axe_source_downloaded", url=self.cdn_url, bytes=len(script))
        return script
