"""Configuration package for the news enrichment service.

Re-exports the most commonly used configuration symbols::

    from news_enricher.config import get_settings, DEFAULT_NARRATORS
"""

from __future__ import annotations

from news_enricher.config.feeds import DEFAULT_FEED_URLS
from news_enricher.config.narrators import DEFAULT_NARRATORS
from news_enricher.config.settings import Settings, get_settings

__all__ = [
    "DEFAULT_FEED_URLS",
    "DEFAULT_NARRATORS",
    "Settings",
    "get_settings",
]
