"""``GET /api/news``: cached or freshly computed enriched news.

Responses:

- ``{"status": "success", "message": ..., "data": [...]}``: cached or new run.
- ``{"status": "processing", "message": ...}``: a run is already in flight.
- HTTP 500 ``{"error": ..., "message": ...}``: the run failed as a whole
  (rendered by the ``PipelineRunError`` handler in ``api/main.py``).
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from news_enricher.api.dependencies import NewsServiceDep, wants_refresh

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["news"])


@router.get("/api/news")
async def get_news(
    service: NewsServiceDep,
    refresh: Annotated[list[str] | None, Query()] = None,
    cache: Annotated[list[str] | None, Query()] = None,
) -> JSONResponse:
    """Serve the enriched news payload.

    Args:
        service: The news service stored on ``app.state``.
        refresh: ``true``/``1``/``yes`` forces a new run; may repeat.
        cache: ``bypass`` forces a new run.

    Returns:
        The payload as JSON with camelCase article keys.
    """
    force_refresh = wants_refresh(refresh, cache)
    payload = await service.get_news(force_refresh=force_refresh)
    logger.info(
        "news_served",
        status=payload.status,
        forced=force_refresh,
        articles=len(payload.data) if payload.data is not None else None,
    )
    return JSONResponse(payload.to_json())
