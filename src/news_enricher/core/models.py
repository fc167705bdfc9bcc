"""Domain records passed between pipeline stages.

All records are frozen dataclasses: a stage produces them, later stages read
them, nothing mutates them in between.  HTTP-facing representations live in
:mod:`news_enricher.core.schemas`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping


@dataclass(frozen=True)
class FeedItem:
    """One normalized entry from a syndication feed.

    Attributes:
        title: Entry headline.
        description: Plain-text teaser (may be empty).
        link: Article URL; the deduplication key.
        published_at: Timezone-aware publication time, or ``None`` when the
            feed gave no parseable date (such items never pass the recency
            window).
        source_name: Feed title, falling back to the feed URL's host.
    """

    title: str
    description: str
    link: str
    published_at: datetime | None
    source_name: str


@dataclass(frozen=True)
class ExtractedContent:
    """Article body and media references pulled from a publisher page.

    Attributes:
        text: Whitespace-normalized, word-capped plain text.
        image_url: Absolute URL of the representative image, if any.
        social_embed_url: Canonical video or tweet URL, if any.
    """

    text: str
    image_url: str | None = None
    social_embed_url: str | None = None


@dataclass(frozen=True)
class NarratorProfile:
    """A persona used to vary the tone of rewritten summaries.

    ``response_probability`` is the persona's relative selection weight; see
    :mod:`news_enricher.enrichment.narrator` for how missing or out-of-range
    values are treated.
    """

    id: str
    display_name: str
    traits: tuple[str, ...] = ()
    mood: str = ""
    likes: tuple[str, ...] = ()
    dislikes: tuple[str, ...] = ()
    interest_weights: Mapping[str, float] = field(default_factory=dict)
    style_description: str = ""
    response_probability: float | None = None


@dataclass(frozen=True)
class EnrichedArticle:
    """Final output unit of one pipeline run."""

    title: str
    summary: str
    platforms: tuple[str, ...]
    source_url: str
    image_url: str | None = None
    social_embed_url: str | None = None
    narrator_name: str | None = None
