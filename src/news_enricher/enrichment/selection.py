"""Article selection through the text-generation service.

The candidate list is split into two halves and each half is offered to the
service separately, asking for half of the wanted count from each.  The
returned URLs are mapped back to candidate items; anything the service
invents is dropped.
"""

from __future__ import annotations

import math
from typing import Sequence

import structlog

from news_enricher.core.exceptions import GenerationError
from news_enricher.core.models import FeedItem
from news_enricher.enrichment._generation_client import TextGenerationClient
from news_enricher.enrichment.config import (
    SELECTION_PARAMS,
    SELECTION_SYSTEM_PROMPT,
    SELECTION_USER_TEMPLATE,
)
from news_enricher.enrichment.pacing import IntervalPacer
from news_enricher.enrichment.responses import (
    ArticleSelectionResponse,
    MalformedResponse,
    parse_generation,
)

logger = structlog.get_logger(__name__)

_DESCRIPTION_PREVIEW_CHARS = 300


class ArticleSelector:
    """Picks the most discussion-worthy candidates.

    Args:
        client: Text-generation client.
        count: Total number of articles wanted across both calls.
        pacer: Spacing between the two selection calls.
    """

    def __init__(
        self,
        client: TextGenerationClient,
        *,
        count: int = 10,
        pacer: IntervalPacer | None = None,
    ) -> None:
        self._client = client
        self._count = max(1, count)
        self._pacer = pacer or IntervalPacer(0)

    async def select(self, candidates: Sequence[FeedItem]) -> list[FeedItem]:
        """Return the selected candidates, deduplicated by URL, in reply order."""
        if not candidates:
            return []

        half = math.ceil(len(candidates) / 2)
        groups = [group for group in (candidates[:half], candidates[half:]) if group]
        per_call = math.ceil(self._count / 2)

        by_url: dict[str, FeedItem] = {}
        for item in candidates:
            by_url.setdefault(_url_key(item.link), item)

        selected: list[FeedItem] = []
        seen: set[str] = set()
        for group in groups:
            await self._pacer.wait()
            for url in await self._select_from(group, per_call):
                key = _url_key(url)
                if key in seen:
                    continue
                item = by_url.get(key)
                if item is None:
                    logger.warning("selection_unknown_url", url=url)
                    continue
                seen.add(key)
                selected.append(item)

        logger.info("selection_complete", candidates=len(candidates), selected=len(selected))
        return selected

    async def _select_from(self, group: Sequence[FeedItem], per_call: int) -> list[str]:
        temperature, max_tokens = SELECTION_PARAMS
        user_message = SELECTION_USER_TEMPLATE.format(
            count=per_call, article_list=_format_article_list(group)
        )
        try:
            raw = await self._client.complete(
                SELECTION_SYSTEM_PROMPT,
                user_message,
                json_object=True,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except GenerationError as exc:
            logger.warning("selection_call_failed", error=str(exc))
            return []

        result = parse_generation(raw, ArticleSelectionResponse)
        if isinstance(result, MalformedResponse):
            logger.warning("selection_malformed_response", reason=result.reason)
            return []
        return [article.url for article in result.value.articles[:per_call]]


def _format_article_list(items: Sequence[FeedItem]) -> str:
    blocks = []
    for index, item in enumerate(items, start=1):
        lines = [f"{index}. {item.title}", f"URL: {item.link}", f"Source: {item.source_name}"]
        if item.description:
            lines.append(f"Description: {item.description[:_DESCRIPTION_PREVIEW_CHARS]}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def _url_key(url: str) -> str:
    return url.strip().rstrip("/")
