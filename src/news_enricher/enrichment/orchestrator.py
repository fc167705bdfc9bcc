"""Turns extracted article text into an :class:`EnrichedArticle`.

Stages, all through the text-generation service:

1. One summary per fixed-size character chunk, sequential and paced.
   A failed chunk is skipped; if every chunk fails the article is dropped.
2. Platform classification of the combined summary, restricted to
   :data:`~news_enricher.enrichment.config.PLATFORM_TAGS`.  Nothing usable
   means the full vocabulary.
3. A humanized title and summary, optionally in a narrator's voice.  A
   missing or malformed rewrite drops the article.
"""

from __future__ import annotations

from typing import Sequence

import structlog

from news_enricher.core.exceptions import GenerationError
from news_enricher.core.models import EnrichedArticle, ExtractedContent, FeedItem, NarratorProfile
from news_enricher.enrichment._generation_client import TextGenerationClient
from news_enricher.enrichment.config import (
    BANNED_PHRASES,
    CHUNK_SUMMARY_PARAMS,
    CHUNK_SYSTEM_PROMPT,
    CHUNK_USER_TEMPLATE,
    HUMANIZE_PARAMS,
    HUMANIZE_SYSTEM_PROMPT,
    HUMANIZE_USER_TEMPLATE,
    NARRATOR_PROMPT_TEMPLATE,
    PLATFORM_PARAMS,
    PLATFORM_SYSTEM_PROMPT,
    PLATFORM_TAGS,
    PLATFORM_USER_TEMPLATE,
)
from news_enricher.enrichment.narrator import NarratorSelector
from news_enricher.enrichment.pacing import IntervalPacer
from news_enricher.enrichment.responses import (
    HumanizedArticle,
    MalformedResponse,
    PlatformClassification,
    parse_generation,
)

logger = structlog.get_logger(__name__)


def split_into_chunks(text: str, size: int) -> list[str]:
    """Split *text* into consecutive slices of at most *size* characters."""
    if size <= 0:
        raise ValueError("chunk size must be positive")
    return [text[start:start + size] for start in range(0, len(text), size)]


def normalize_platforms(raw: Sequence[str]) -> tuple[str, ...]:
    """Map classifier output onto the closed vocabulary.

    Matching is case-insensitive; unknown tags are dropped, duplicates
    collapse to the first occurrence.  An empty result becomes the full
    vocabulary.
    """
    lookup = {tag.lower(): tag for tag in PLATFORM_TAGS}
    platforms: list[str] = []
    for value in raw:
        tag = lookup.get(value.strip().lower())
        if tag and tag not in platforms:
            platforms.append(tag)
    return tuple(platforms) if platforms else PLATFORM_TAGS


def build_humanize_prompt(narrator: NarratorProfile | None) -> str:
    prompt = HUMANIZE_SYSTEM_PROMPT.format(banned=", ".join(f'"{p}"' for p in BANNED_PHRASES))
    if narrator is None:
        return prompt
    return prompt + NARRATOR_PROMPT_TEMPLATE.format(
        traits=", ".join(narrator.traits) or "none",
        mood=narrator.mood or "neutral",
        likes=", ".join(narrator.likes) or "none",
        dislikes=", ".join(narrator.dislikes) or "none",
        style=narrator.style_description or "plain",
    )


class EnrichmentOrchestrator:
    """Runs the generation stages for one article at a time.

    Args:
        client: Text-generation client.
        narrators: Narrator selector; ``None`` means a neutral voice.
        chunk_size: Characters per summarization chunk.
        pacer: Minimum spacing between chunk-summary calls.  Shared by all
            articles processed through this orchestrator.
    """

    def __init__(
        self,
        client: TextGenerationClient,
        narrators: NarratorSelector | None = None,
        *,
        chunk_size: int = 8000,
        pacer: IntervalPacer | None = None,
    ) -> None:
        self._client = client
        self._narrators = narrators
        self._chunk_size = chunk_size
        self._pacer = pacer or IntervalPacer(0)

    async def enrich(self, item: FeedItem, content: ExtractedContent) -> EnrichedArticle | None:
        """Enrich one article.

        Returns:
            The enriched article, or ``None`` if summarization or the
            rewrite failed.
        """
        log = logger.bind(url=item.link)

        combined = await self.summarize(content.text)
        if not combined:
            log.info("enrich_no_summary")
            return None

        platforms = await self.classify_platforms(combined)
        narrator = self._narrators.select() if self._narrators is not None else None
        rewrite = await self.humanize(combined, narrator)
        if rewrite is None:
            log.info("enrich_rewrite_failed")
            return None

        log.info(
            "enrich_complete",
            platforms=list(platforms),
            narrator=narrator.id if narrator else None,
        )
        return EnrichedArticle(
            title=rewrite.title,
            summary=rewrite.summary,
            platforms=platforms,
            source_url=item.link,
            image_url=content.image_url,
            social_embed_url=content.social_embed_url,
            narrator_name=narrator.display_name if narrator else None,
        )

    async def summarize(self, text: str) -> str:
        """Summarize *text* chunk by chunk and join the summaries in order."""
        temperature, max_tokens = CHUNK_SUMMARY_PARAMS
        summaries: list[str] = []
        chunks = split_into_chunks(text, self._chunk_size) if text else []
        for index, chunk in enumerate(chunks):
            await self._pacer.wait()
            try:
                summary = await self._client.complete(
                    CHUNK_SYSTEM_PROMPT,
                    CHUNK_USER_TEMPLATE.format(chunk=chunk),
                    temperature=temperature,
                    max_tokens=max_tokens,
                )
            except GenerationError as exc:
                logger.warning("enrich_chunk_failed", chunk=index, error=str(exc))
                continue
            summary = summary.strip()
            if summary:
                summaries.append(summary)
        return " ".join(summaries)

    async def classify_platforms(self, summary: str) -> tuple[str, ...]:
        temperature, max_tokens = PLATFORM_PARAMS
        try:
            raw = await self._client.complete(
                PLATFORM_SYSTEM_PROMPT.format(tags=", ".join(PLATFORM_TAGS)),
                PLATFORM_USER_TEMPLATE.format(text=summary),
                json_object=True,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except GenerationError as exc:
            logger.warning("enrich_platforms_failed", error=str(exc))
            return PLATFORM_TAGS

        result = parse_generation(raw, PlatformClassification)
        if isinstance(result, MalformedResponse):
            logger.warning("enrich_platforms_malformed", reason=result.reason)
            return PLATFORM_TAGS
        return normalize_platforms(result.value.platforms)

    async def humanize(
        self,
        summary: str,
        narrator: NarratorProfile | None,
    ) -> HumanizedArticle | None:
        temperature, max_tokens = HUMANIZE_PARAMS
        try:
            raw = await self._client.complete(
                build_humanize_prompt(narrator),
                HUMANIZE_USER_TEMPLATE.format(summary=summary),
                json_object=True,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except GenerationError as exc:
            logger.warning("enrich_rewrite_call_failed", error=str(exc))
            return None

        result = parse_generation(raw, HumanizedArticle)
        if isinstance(result, MalformedResponse):
            logger.warning("enrich_rewrite_malformed", reason=result.reason)
            return None
        return result.value
