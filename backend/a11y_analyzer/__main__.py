"""Run the API server with uvicorn."""

import uvicorn

from a11y_analyzer.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "a11y_analyzer.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
