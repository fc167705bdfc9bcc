"""Article content extraction with a rendered-then-static fetch strategy.

Main text comes from ``trafilatura`` (boilerplate removal).  Media comes from
:mod:`news_enricher.scraper.media_locator`.  The rendered fetch is tried
first when a renderer is configured; the static ``httpx`` fetch is the
fallback whenever rendering fails or yields no main content.

Embed priority for the final record:

1. The embed found in the live rendered DOM.
2. The embed found in whichever markup produced the main text.
3. A regex scan of that markup.
"""

from __future__ import annotations

from typing import Awaitable, Callable

import httpx
import structlog
import trafilatura
from bs4 import BeautifulSoup

from news_enricher.core.models import ExtractedContent
from news_enricher.scraper.embed_urls import scan_markup_for_embed
from news_enricher.scraper.http_fetcher import fetch_url
from news_enricher.scraper.media_locator import locate_image, locate_social_embed
from news_enricher.scraper.playwright_fetcher import RenderResult

logger = structlog.get_logger(__name__)

Renderer = Callable[[str], Awaitable[RenderResult]]


def extract_main_text(html: str, url: str) -> str | None:
    """Extract the main article text from raw HTML.

    Args:
        html: Raw HTML string (may be partial or malformed).
        url: URL of the page (used by trafilatura for heuristics).

    Returns:
        Plain text, or ``None`` when no main content could be isolated.
    """
    try:
        result = trafilatura.extract(
            html,
            url=url,
            include_comments=False,
            include_tables=True,
            no_fallback=False,
            output_format="txt",
        )
    except Exception as exc:  # noqa: BLE001
        logger.warning("extract_trafilatura_failed", url=url, error=str(exc))
        return None
    return result or None


def normalize_article_text(text: str, max_words: int) -> str:
    """Collapse all whitespace to single spaces and keep the first *max_words* words."""
    return " ".join(text.split()[:max_words])


class ContentExtractor:
    """Turns an article URL into :class:`ExtractedContent`.

    Args:
        http_client: Shared client for static fetches.
        max_words: Word cap applied to the extracted text.
        timeout: Static fetch timeout in seconds.
        user_agent: User-Agent for static fetches.
        renderer: Optional rendered-fetch coroutine, usually
            :func:`~news_enricher.scraper.playwright_fetcher.render_url`
            bound to its options.  ``None`` disables the rendered strategy.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        max_words: int = 4000,
        timeout: float = 30.0,
        user_agent: str = "news-enricher/0.1",
        renderer: Renderer | None = None,
    ) -> None:
        self._http_client = http_client
        self._max_words = max_words
        self._timeout = timeout
        self._user_agent = user_agent
        self._renderer = renderer

    async def extract(self, url: str) -> ExtractedContent | None:
        """Fetch *url* and extract text, image and social embed.

        Returns:
            The extracted content, or ``None`` when neither fetch strategy
            produced any main content.
        """
        live_embed: str | None = None
        document: tuple[str, str, str] | None = None

        if self._renderer is not None:
            rendered = await self._renderer(url)
            if rendered.error is None and rendered.html:
                live_embed = rendered.embed_url
                base_url = rendered.final_url or url
                text = extract_main_text(rendered.html, base_url)
                if text:
                    document = (rendered.html, base_url, text)
                else:
                    logger.info("extract_rendered_empty", url=url)
            else:
                logger.info("extract_render_failed", url=url, error=rendered.error)

        if document is None:
            fetched = await fetch_url(
                url,
                client=self._http_client,
                timeout=self._timeout,
                user_agent=self._user_agent,
            )
            if fetched.ok:
                base_url = fetched.final_url or url
                text = extract_main_text(fetched.html or "", base_url)
                if text:
                    document = (fetched.html or "", base_url, text)
            else:
                logger.info("extract_static_failed", url=url, error=fetched.error)

        if document is None:
            logger.info("extract_no_content", url=url)
            return None

        html, base_url, text = document
        normalized = normalize_article_text(text, self._max_words)
        if not normalized:
            logger.info("extract_no_content", url=url)
            return None

        soup = BeautifulSoup(html, "html.parser")
        image_url = locate_image(soup, base_url)
        embed_url = (
            live_embed
            or locate_social_embed(soup, base_url)
            or scan_markup_for_embed(html, base_url)
        )
        logger.debug(
            "extract_complete",
            url=url,
            words=len(normalized.split()),
            image=image_url,
            embed=embed_url,
        )
        return ExtractedContent(text=normalized, image_url=image_url, social_embed_url=embed_url)
