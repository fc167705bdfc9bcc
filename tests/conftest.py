"""Shared pytest fixtures for news-enricher tests.

Fixture summary
---------------
now             - Fixed timezone-aware "current time" (FIXED_NOW).
fake_llm        - Empty FakeGenerationClient; script replies per test.

No test needs network access or a browser: HTTP is mocked with respx, the
text-generation service is replaced with ``FakeGenerationClient`` and the
rendered fetch is disabled or replaced with a coroutine.
"""

from __future__ import annotations

import os
from datetime import datetime

import pytest

# ---------------------------------------------------------------------------
# Test environment bootstrap
# ---------------------------------------------------------------------------
# Set env vars before any application module is imported so that the
# module-level app in ``api/main.py`` is built with safe settings.

_TEST_ENV_DEFAULTS: dict[str, str] = {
    "LLM_API_KEY": "test-key-not-real",
    "RENDER_ENABLED": "false",
    "LOG_LEVEL": "INFO",
}

for _key, _default in _TEST_ENV_DEFAULTS.items():
    os.environ.setdefault(_key, _default)

from news_enricher.config.settings import get_settings  # noqa: E402
from tests.factories import FIXED_NOW, FakeGenerationClient  # noqa: E402

# Clear the lru_cache so Settings() re-reads from the patched environment.
get_settings.cache_clear()


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def fake_llm() -> FakeGenerationClient:
    return FakeGenerationClient()
