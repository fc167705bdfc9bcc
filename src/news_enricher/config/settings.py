"""Application settings loaded from environment variables.

Uses Pydantic Settings v2 for validated, type-safe configuration.
Every tunable of the pipeline is read through this module; never call
``os.getenv`` directly elsewhere in the codebase.

Usage::

    from news_enricher.config.settings import get_settings

    settings = get_settings()
    ttl = settings.cache_ttl_seconds
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from news_enricher.config.feeds import DEFAULT_FEED_URLS


class Settings(BaseSettings):
    """Service configuration backed by environment variables and an optional .env file.

    Every field has a working default so the service starts with an empty
    environment; only ``llm_api_key`` must be supplied for enrichment to
    produce output.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Application behaviour
    # ------------------------------------------------------------------

    app_name: str = "Gaming News API"
    """Human-readable service name shown in the OpenAPI docs and descriptor."""

    debug: bool = False
    """Enable FastAPI debug mode.  Never True in production."""

    log_level: str = "INFO"
    """Logging verbosity.  One of: DEBUG, INFO, WARNING, ERROR, CRITICAL."""

    allowed_origins: list[str] = ["*"]
    """Origins permitted by the CORS middleware."""

    host: str = "0.0.0.0"
    """Bind address for ``python -m news_enricher``."""

    port: int = 3000
    """Listen port for ``python -m news_enricher``."""

    # ------------------------------------------------------------------
    # Feed aggregation
    # ------------------------------------------------------------------

    feed_urls: list[str] = Field(default_factory=lambda: list(DEFAULT_FEED_URLS))
    """Ordered syndication sources.  Supply as a JSON array in ``FEED_URLS``."""

    recency_window_hours: float = 24.0
    """Items published before ``now - window`` are discarded (boundary inclusive)."""

    feed_concurrency: int = 5
    """Maximum number of feeds fetched at the same time."""

    # ------------------------------------------------------------------
    # Caching and batching
    # ------------------------------------------------------------------

    cache_ttl_seconds: float = 3600.0
    """How long a completed run's payload is served before a new run starts."""

    batch_size: int = 2
    """Articles extracted and enriched concurrently within one batch."""

    inter_batch_delay_seconds: float = 1.0
    """Pause between consecutive batches."""

    # ------------------------------------------------------------------
    # Content extraction
    # ------------------------------------------------------------------

    http_timeout_seconds: float = 30.0
    """Timeout for static page and feed fetches."""

    max_article_words: int = 4000
    """Extracted article text is capped to this many words."""

    user_agent: str = (
        "Mozilla/5.0 (X11; Linux x86_64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    """User-Agent sent with feed, page and headless-browser requests."""

    render_enabled: bool = True
    """Try a headless-browser fetch before the static fetch."""

    render_timeout_seconds: float = 30.0
    """Navigation timeout for the headless browser."""

    embed_wait_seconds: float = 5.0
    """Upper bound on waiting for an embed element to appear after scrolling."""

    scroll_step_px: int = 800
    """Pixels scrolled per auto-scroll step."""

    scroll_max_steps: int = 40
    """Auto-scroll gives up after this many steps even if the page keeps growing."""

    scroll_interval_ms: int = 200
    """Pause between auto-scroll steps so lazy loaders can react."""

    # ------------------------------------------------------------------
    # Text generation
    # ------------------------------------------------------------------

    llm_api_url: str = "https://api.openai.com/v1/chat/completions"
    """OpenAI-compatible chat-completions endpoint."""

    llm_api_key: str = ""
    """Bearer token for ``llm_api_url``."""

    llm_model: str = "gpt-4o-mini"
    """Model identifier sent with every generation request."""

    llm_timeout_seconds: float = 60.0
    """Per-call timeout for generation requests."""

    selection_count: int = 10
    """Number of articles requested from the selection step per run."""

    selection_delay_seconds: float = 1.0
    """Pause between the two selection calls."""

    chunk_size_chars: int = 8000
    """Article text is summarized in chunks of this many characters."""

    chunk_delay_seconds: float = 0.5
    """Minimum interval between consecutive chunk-summary calls."""


@lru_cache
def get_settings() -> Settings:
    """Return the cached application settings singleton.

    In tests, call ``get_settings.cache_clear()`` after patching environment
    variables.

    Returns:
        Settings: The validated settings object.
    """
    return Settings()
