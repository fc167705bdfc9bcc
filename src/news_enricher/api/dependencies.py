"""FastAPI dependency providers.

The news service is created in the application lifespan (or injected by
tests through :func:`~news_enricher.api.main.create_app`) and stored on
``app.state``.  Routes reach it through :func:`get_news_service`.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from news_enricher.pipeline.service import NewsService

_TRUTHY_VALUES: frozenset[str] = frozenset({"true", "1", "yes"})


def get_news_service(request: Request) -> NewsService:
    return request.app.state.news_service


NewsServiceDep = Annotated[NewsService, Depends(get_news_service)]


def wants_refresh(refresh: list[str] | None, cache: list[str] | None) -> bool:
    """Decide whether a request forces a new pipeline run.

    Args:
        refresh: Every ``refresh`` query value.  Truthy if any value is
            ``true``, ``1`` or ``yes`` (case-insensitive).
        cache: Every ``cache`` query value.  ``bypass`` (case-insensitive)
            forces a run as well.

    Returns:
        ``True`` if the cache must be bypassed.
    """
    if any(value.strip().lower() in _TRUTHY_VALUES for value in refresh or []):
        return True
    return any(value.strip().lower() == "bypass" for value in cache or [])
