"""Syndication feed aggregator.

Fetches every configured feed with ``httpx`` and parses it with
``feedparser``.  Feeds are fetched concurrently (bounded by a semaphore) but
results are always assembled in source-list order, then feed order.

A failing feed (network error, HTTP error status or unparseable body) is
logged and skipped.  Aggregation never raises because of a single source; if every
source fails the result is simply empty.
"""

from __future__ import annotations

import asyncio
import calendar
import html
import logging
import re
from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlparse

import feedparser
import httpx

from news_enricher.core.exceptions import FeedFetchError
from news_enricher.core.models import FeedItem

logger = logging.getLogger(__name__)

_HTML_TAG_RE = re.compile(r"<[^>]+>")


def _strip_html(text: str) -> str:
    """Strip HTML tags from *text*, decode entities and collapse whitespace."""
    cleaned = html.unescape(_HTML_TAG_RE.sub(" ", text))
    return re.sub(r"\s+", " ", cleaned).strip()


class FeedAggregator:
    """Collects :class:`~news_enricher.core.models.FeedItem` records from feeds.

    Args:
        feed_urls: Ordered list of feed URLs.
        http_client: Optional injected :class:`httpx.AsyncClient`.  Inject for
            testing.  If ``None``, a new client is created per call to
            :meth:`aggregate`.
        concurrency: Maximum number of feeds fetched at once.
        timeout: Per-request timeout in seconds for the self-built client.
        user_agent: User-Agent header for the self-built client.
    """

    def __init__(
        self,
        feed_urls: list[str],
        http_client: httpx.AsyncClient | None = None,
        concurrency: int = 5,
        timeout: float = 30.0,
        user_agent: str = "news-enricher/0.1 (feed aggregator)",
    ) -> None:
        self._feed_urls = list(feed_urls)
        self._http_client = http_client
        self._concurrency = max(1, concurrency)
        self._timeout = timeout
        self._user_agent = user_agent

    async def aggregate(self) -> list[FeedItem]:
        """Fetch and normalize all feeds.

        Returns:
            Concatenation of every successfully parsed feed's items, in
            source-list order then feed order.  Empty if every feed failed.
        """
        if self._http_client is not None:
            items = await self._fetch_feeds(self._http_client)
        else:
            async with self._build_http_client() as client:
                items = await self._fetch_feeds(client)

        logger.info(
            "feeds: aggregated %d items from %d sources", len(items), len(self._feed_urls)
        )
        return items

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _build_http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._timeout,
            follow_redirects=True,
            headers={"User-Agent": self._user_agent},
        )

    async def _fetch_feeds(self, client: httpx.AsyncClient) -> list[FeedItem]:
        """Fetch all feeds in parallel, keeping source order in the output."""
        semaphore = asyncio.Semaphore(self._concurrency)
        tasks = [
            self._fetch_single_feed(client, feed_url, semaphore)
            for feed_url in self._feed_urls
        ]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        all_items: list[FeedItem] = []
        for feed_url, result in zip(self._feed_urls, results):
            if isinstance(result, BaseException):
                logger.warning("feeds: skipping '%s': %s", feed_url, result)
                continue
            all_items.extend(result)
        return all_items

    async def _fetch_single_feed(
        self,
        client: httpx.AsyncClient,
        feed_url: str,
        semaphore: asyncio.Semaphore,
    ) -> list[FeedItem]:
        """Fetch, parse and normalize one feed.

        Raises:
            FeedFetchError: On network errors, HTTP errors, or a body that
                feedparser cannot turn into any entries.
        """
        async with semaphore:
            try:
                response = await client.get(feed_url)
            except httpx.RequestError as exc:
                raise FeedFetchError(
                    f"feeds: request error fetching '{feed_url}': {exc}", url=feed_url
                ) from exc

        if response.status_code >= 400:
            raise FeedFetchError(
                f"feeds: '{feed_url}' returned HTTP {response.status_code}", url=feed_url
            )

        feed = feedparser.parse(response.content)
        if feed.bozo and not feed.entries:
            raise FeedFetchError(
                f"feeds: unparseable feed '{feed_url}': "
                f"{getattr(feed, 'bozo_exception', 'unknown')}",
                url=feed_url,
            )

        source_name = _source_name(feed, feed_url)
        items: list[FeedItem] = []
        for entry in feed.entries:
            item = _entry_to_item(entry, source_name)
            if item is not None:
                items.append(item)

        logger.debug("feeds: parsed %d items from '%s'", len(items), feed_url)
        return items


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


def _source_name(feed: Any, feed_url: str) -> str:
    """Feed title, else the feed URL's host."""
    title = (feed.feed.get("title") or "").strip() if getattr(feed, "feed", None) else ""
    if title:
        return title
    return urlparse(feed_url).hostname or feed_url


def _entry_to_item(entry: Any, source_name: str) -> FeedItem | None:
    """Map a feedparser entry to a :class:`FeedItem`; ``None`` if it has no link."""
    link = (entry.get("link") or "").strip()
    if not link:
        return None

    title = _strip_html(entry.get("title") or "")
    return FeedItem(
        title=title,
        description=_entry_description(entry),
        link=link,
        published_at=_entry_datetime(entry),
        source_name=source_name,
    )


def _entry_description(entry: Any) -> str:
    """Plain-text snippet, else the HTML summary/description stripped of tags."""
    raw = entry.get("summary") or entry.get("description") or ""
    return _strip_html(raw) if raw else ""


def _entry_datetime(entry: Any) -> datetime | None:
    """Extract a timezone-aware publication datetime from a feedparser entry."""
    pub_struct = entry.get("published_parsed") or entry.get("updated_parsed")
    if pub_struct is None:
        return None
    try:
        ts = calendar.timegm(pub_struct)
        return datetime.fromtimestamp(ts, tz=timezone.utc)
    except (TypeError, ValueError, OverflowError):
        return None
