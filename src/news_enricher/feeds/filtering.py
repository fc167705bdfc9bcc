"""Candidate preparation: recency window and link deduplication.

Both steps are pure functions over :class:`~news_enricher.core.models.FeedItem`
lists.  Publication dates are immutable, so the two steps commute; the
pipeline applies the window first and deduplicates the survivors
(:func:`prepare_candidates`).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable

from news_enricher.core.models import FeedItem


def deduplicate_by_link(items: Iterable[FeedItem]) -> list[FeedItem]:
    """Keep the first item for each ``link``, preserving first-occurrence order."""
    seen: set[str] = set()
    unique: list[FeedItem] = []
    for item in items:
        if item.link in seen:
            continue
        seen.add(item.link)
        unique.append(item)
    return unique


def within_window(
    items: Iterable[FeedItem],
    now: datetime,
    window: timedelta,
) -> list[FeedItem]:
    """Keep items with ``published_at >= now - window``.

    The boundary is inclusive.  Items without a publication date are dropped.
    Naive datetimes are taken to be UTC.

    Args:
        items: Feed items in any order.
        now: Reference time.
        window: Recency window (e.g. 24 hours).

    Returns:
        Retained items in their input order.
    """
    cutoff = _as_utc(now) - window
    return [
        item
        for item in items
        if item.published_at is not None and _as_utc(item.published_at) >= cutoff
    ]


def prepare_candidates(
    items: Iterable[FeedItem],
    now: datetime,
    window: timedelta,
) -> list[FeedItem]:
    """Apply the recency window, then deduplicate by link."""
    return deduplicate_by_link(within_window(items, now, window))


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
