"""Bounded-concurrency batch processing of selected articles."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Sequence

import structlog

from news_enricher.core.models import EnrichedArticle, FeedItem

logger = structlog.get_logger(__name__)

ArticleWorker = Callable[[FeedItem], Awaitable[EnrichedArticle | None]]


async def process_in_batches(
    items: Sequence[FeedItem],
    worker: ArticleWorker,
    *,
    batch_size: int = 2,
    delay: float = 1.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> list[EnrichedArticle]:
    """Run *worker* over *items* in sequential batches.

    Items inside a batch run concurrently; batches run one after another
    with *delay* seconds between them.  Results are appended in batch order,
    not completion order.  A worker that returns ``None`` or raises an
    ``Exception`` only loses its own item.

    Args:
        items: Articles to process, in output order.
        worker: Coroutine turning one item into an article or ``None``.
        batch_size: Items per batch.
        delay: Pause between consecutive batches.
        sleep: Coroutine used for the pause.

    Returns:
        The non-``None`` worker results.
    """
    size = max(1, batch_size)
    batches = [list(items[start:start + size]) for start in range(0, len(items), size)]
    results: list[EnrichedArticle] = []

    for index, batch in enumerate(batches):
        if index > 0 and delay > 0:
            await sleep(delay)
        logger.info("batch_start", batch=index + 1, batches=len(batches), size=len(batch))

        outcomes = await asyncio.gather(*(worker(item) for item in batch), return_exceptions=True)
        for item, outcome in zip(batch, outcomes):
            if isinstance(outcome, Exception):
                logger.warning("batch_item_failed", url=item.link, error=repr(outcome))
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            if outcome is None:
                logger.info("batch_item_skipped", url=item.link)
                continue
            results.append(outcome)

    return results
