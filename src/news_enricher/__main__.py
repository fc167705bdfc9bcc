"""Run the API server: ``python -m news_enricher``."""

from __future__ import annotations

import uvicorn

from news_enricher.config.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "news_enricher.api.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
