"""The news pipeline and the cached service in front of it.

:class:`NewsPipeline` is one full run: aggregate feeds, prepare candidates,
select, then extract and enrich in batches.  :class:`NewsService` decides per
request whether to serve the cache, report a run in flight, or run the
pipeline.
"""

from __future__ import annotations

import asyncio
import functools
import random
from datetime import UTC, datetime, timedelta
from typing import Awaitable, Callable

import httpx
import structlog

from news_enricher.config.narrators import DEFAULT_NARRATORS
from news_enricher.config.settings import Settings
from news_enricher.core.exceptions import PipelineRunError
from news_enricher.core.models import EnrichedArticle, FeedItem
from news_enricher.core.schemas import EnrichedArticleRead, NewsPayload
from news_enricher.enrichment._generation_client import TextGenerationClient
from news_enricher.enrichment.narrator import NarratorSelector
from news_enricher.enrichment.orchestrator import EnrichmentOrchestrator
from news_enricher.enrichment.pacing import IntervalPacer
from news_enricher.enrichment.selection import ArticleSelector
from news_enricher.feeds.collector import FeedAggregator
from news_enricher.feeds.filtering import prepare_candidates
from news_enricher.pipeline.cache import ResultCache
from news_enricher.pipeline.scheduler import process_in_batches
from news_enricher.scraper.content_extractor import ContentExtractor
from news_enricher.scraper.playwright_fetcher import RenderOptions, render_url

logger = structlog.get_logger(__name__)

NO_ARTICLES_MESSAGE = "No articles found for today"
PROCESSING_MESSAGE = "News processing is already in progress. Please try again shortly."
RUN_FAILED_MESSAGE = "Failed to process news"


def _utc_now() -> datetime:
    return datetime.now(UTC)


class NewsPipeline:
    """One end-to-end run over the configured feeds.

    Args:
        aggregator: Feed source.
        selector: Picks candidates worth enriching.
        extractor: Fetches article pages.
        orchestrator: Runs the generation stages.
        window: Recency window for candidates.
        batch_size: Articles processed concurrently per batch.
        inter_batch_delay: Seconds between batches.
        clock: Returns the current aware datetime.
        sleep: Coroutine used for the inter-batch pause.
    """

    def __init__(
        self,
        aggregator: FeedAggregator,
        selector: ArticleSelector,
        extractor: ContentExtractor,
        orchestrator: EnrichmentOrchestrator,
        *,
        window: timedelta = timedelta(hours=24),
        batch_size: int = 2,
        inter_batch_delay: float = 1.0,
        clock: Callable[[], datetime] = _utc_now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._aggregator = aggregator
        self._selector = selector
        self._extractor = extractor
        self._orchestrator = orchestrator
        self._window = window
        self._batch_size = batch_size
        self._inter_batch_delay = inter_batch_delay
        self._clock = clock
        self._sleep = sleep

    async def run(self) -> NewsPayload:
        items = await self._aggregator.aggregate()
        candidates = prepare_candidates(items, self._clock(), self._window)
        logger.info("pipeline_candidates", items=len(items), candidates=len(candidates))
        if not candidates:
            return NewsPayload(status="success", message=NO_ARTICLES_MESSAGE, data=[])

        selected = await self._selector.select(candidates)
        articles = await process_in_batches(
            selected,
            self._process_article,
            batch_size=self._batch_size,
            delay=self._inter_batch_delay,
            sleep=self._sleep,
        )
        logger.info("pipeline_complete", selected=len(selected), articles=len(articles))
        return NewsPayload(
            status="success",
            message=f"Successfully processed {len(articles)} articles",
            data=[EnrichedArticleRead.from_article(article) for article in articles],
        )

    async def _process_article(self, item: FeedItem) -> EnrichedArticle | None:
        content = await self._extractor.extract(item.link)
        if content is None:
            return None
        return await self._orchestrator.enrich(item, content)


class NewsService:
    """Serves pipeline results through a :class:`ResultCache`.

    Args:
        pipeline: Object with an async ``run() -> NewsPayload``.
        cache: The cache slot owned by this service.
    """

    def __init__(self, pipeline: NewsPipeline, cache: ResultCache) -> None:
        self._pipeline = pipeline
        self._cache = cache

    @property
    def cache(self) -> ResultCache:
        return self._cache

    async def get_news(self, force_refresh: bool = False) -> NewsPayload:
        """Return the cached payload, a processing notice, or a fresh run's payload.

        Raises:
            PipelineRunError: The run failed as a whole.  The cache keeps its
                previous payload and the in-flight flag is released.
        """
        if self._cache.is_in_flight():
            return _processing()

        if not force_refresh:
            cached = await self._cache.get()
            if cached is not None:
                logger.info("news_cache_hit")
                return cached

        if not await self._cache.begin_run():
            return _processing()

        logger.info("news_run_start", forced=force_refresh)
        completed = False
        try:
            payload = await self._pipeline.run()
            await self._cache.complete_run(payload)
            completed = True
        except Exception as exc:
            logger.exception("news_run_failed")
            raise PipelineRunError(RUN_FAILED_MESSAGE) from exc
        finally:
            if not completed:
                await self._cache.abort_run()
        return payload


def _processing() -> NewsPayload:
    return NewsPayload(status="processing", message=PROCESSING_MESSAGE)


def build_news_service(
    settings: Settings,
    http_client: httpx.AsyncClient,
    *,
    rng: random.Random | None = None,
) -> NewsService:
    """Wire a :class:`NewsService` from settings around a shared HTTP client."""
    generation_client = TextGenerationClient(
        http_client,
        api_url=settings.llm_api_url,
        api_key=settings.llm_api_key,
        model=settings.llm_model,
        timeout=settings.llm_timeout_seconds,
    )
    renderer = None
    if settings.render_enabled:
        renderer = functools.partial(
            render_url,
            options=RenderOptions(
                timeout=settings.render_timeout_seconds,
                embed_wait=settings.embed_wait_seconds,
                scroll_step_px=settings.scroll_step_px,
                scroll_max_steps=settings.scroll_max_steps,
                scroll_interval_ms=settings.scroll_interval_ms,
                user_agent=settings.user_agent,
            ),
        )

    pipeline = NewsPipeline(
        aggregator=FeedAggregator(
            settings.feed_urls,
            http_client=http_client,
            concurrency=settings.feed_concurrency,
            timeout=settings.http_timeout_seconds,
            user_agent=settings.user_agent,
        ),
        selector=ArticleSelector(
            generation_client,
            count=settings.selection_count,
            pacer=IntervalPacer(settings.selection_delay_seconds),
        ),
        extractor=ContentExtractor(
            http_client,
            max_words=settings.max_article_words,
            timeout=settings.http_timeout_seconds,
            user_agent=settings.user_agent,
            renderer=renderer,
        ),
        orchestrator=EnrichmentOrchestrator(
            generation_client,
            NarratorSelector(DEFAULT_NARRATORS, rng=rng),
            chunk_size=settings.chunk_size_chars,
            pacer=IntervalPacer(settings.chunk_delay_seconds),
        ),
        window=timedelta(hours=settings.recency_window_hours),
        batch_size=settings.batch_size,
        inter_batch_delay=settings.inter_batch_delay_seconds,
    )
    return NewsService(pipeline, ResultCache(ttl_seconds=settings.cache_ttl_seconds))
