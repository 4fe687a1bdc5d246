"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys
    OPENAI_API_KEY: str = ""

    # Analyst model
    ANALYST_MODEL: str = "gpt-4o-mini"
    LLM_TEMPERATURE: float = 0.2
    LLM_MAX_OUTPUT_TOKENS: int = 1024
    LLM_MAX_ATTEMPTS: int = 1

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Scanner
    SCAN_TIMEOUT_SECONDS: float = 10.0
    SCAN_SETTLE_SECONDS: float = 1.0
    SCAN_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )
    AXE_RULE_TAGS: list[str] = ["wcag2a", "wcag2aa", "best-practice"]
    AXE_SCRIPT_PATH: str = ""
    AXE_CDN_URL: str = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.9.1/axe.min.js"
    AXE_CACHE_PATH: str = "./data/axe.min.js"

    # Rate Limiting
    RATE_LIMIT_MAX_SCANS: int = 30
    RATE_LIMIT_WINDOW_SECONDS: int = 3600

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def llm_enabled(self) -> bool:
        return bool(self.OPENAI_API_KEY)


@lru_cache
def get_settings() -> Settings:
    return Settings()
