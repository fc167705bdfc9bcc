"""Playwright-based headless browser fetcher for script-heavy pages.

Loads a page in headless Chromium, scrolls it to the bottom to trigger
lazy-loaded media, waits briefly for an embed to appear and then captures
both the rendered markup and a list of embed candidates read straight from
the live DOM.  Script-injected embeds (tweets, lazy video players) only
exist there, so the live result is preferred over anything found later in
the captured markup.

The browser binary must be installed once per machine::

    playwright install chromium
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from news_enricher.scraper.config import EMBED_READY_SELECTORS
from news_enricher.scraper.embed_urls import canonical_embed_url, canonical_status_url

logger = logging.getLogger(__name__)

_DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# Returns true once the viewport has reached the bottom of the document.
_SCROLL_STEP_JS = """
(step) => {
    window.scrollBy(0, step);
    const bottom = window.scrollY + window.innerHeight;
    return bottom >= document.documentElement.scrollHeight;
}
"""

# Returns [{kind, url}] in priority order: document-order walk first
# (tweet blockquote anchors, iframe sources), then the fixed probes.
_EMBED_PROBE_JS = r"""
() => {
    const out = [];
    const tweetClasses = ['twitter-tweet', 'twitter-video'];
    for (const el of document.querySelectorAll('*')) {
        const tag = el.tagName.toLowerCase();
        if (tag === 'blockquote' && tweetClasses.some((c) => el.classList.contains(c))) {
            for (const a of el.querySelectorAll('a[href]')) {
                out.push({kind: 'status', url: a.href});
            }
        } else if (tag === 'iframe') {
            for (const name of ['src', 'data-src']) {
                const value = el.getAttribute(name);
                if (value) out.push({kind: 'embed', url: value});
            }
        }
    }
    for (const el of document.querySelectorAll('lite-youtube[videoid]')) {
        out.push({kind: 'embed', url: 'https://www.youtube.com/watch?v=' + el.getAttribute('videoid')});
    }
    for (const el of document.querySelectorAll('a[data-video-url]')) {
        out.push({kind: 'embed', url: el.getAttribute('data-video-url')});
    }
    for (const el of document.querySelectorAll('[data-oembed-url]')) {
        out.push({kind: 'embed', url: el.getAttribute('data-oembed-url')});
    }
    for (const el of document.querySelectorAll('*')) {
        for (const attr of el.attributes) {
            if (/^data-[\w-]*url$/.test(attr.name)) {
                out.push({kind: 'embed', url: attr.value});
            }
        }
    }
    return out;
}
"""


@dataclass
class RenderOptions:
    """Tunables for one rendered fetch.

    Attributes:
        timeout: Navigation timeout in seconds.
        embed_wait: Upper bound in seconds on waiting for an embed selector.
        scroll_step_px: Pixels scrolled per auto-scroll step.
        scroll_max_steps: Maximum auto-scroll iterations.
        scroll_interval_ms: Pause between auto-scroll steps.
        user_agent: Browser context User-Agent.
    """

    timeout: float = 30.0
    embed_wait: float = 5.0
    scroll_step_px: int = 800
    scroll_max_steps: int = 40
    scroll_interval_ms: int = 200
    user_agent: str = _DEFAULT_USER_AGENT

    @property
    def overall_timeout(self) -> float:
        scroll_budget = self.scroll_max_steps * self.scroll_interval_ms / 1000
        return self.timeout + self.embed_wait + scroll_budget


@dataclass
class RenderResult:
    """Result of a rendered fetch.

    Attributes:
        html: Rendered markup, or ``None`` on failure.
        final_url: Page URL after navigation.
        embed_url: Canonical embed URL found in the live DOM, if any.
        error: Human-readable error description, or ``None`` on success.
    """

    html: str | None
    final_url: str | None
    embed_url: str | None
    error: str | None


def pick_live_embed(candidates: list[dict[str, Any]], base_url: str) -> str | None:
    """Return the first in-page probe candidate that canonicalizes.

    ``status`` candidates come from tweet blockquote anchors and only accept
    tweet status links; ``embed`` candidates accept video or tweet links.
    """
    for candidate in candidates:
        if not isinstance(candidate, dict):
            continue
        raw = candidate.get("url")
        if not isinstance(raw, str):
            continue
        if candidate.get("kind") == "status":
            canonical = canonical_status_url(raw, base_url)
        else:
            canonical = canonical_embed_url(raw, base_url)
        if canonical:
            return canonical
    return None


async def render_url(url: str, *, options: RenderOptions | None = None) -> RenderResult:
    """Fetch a URL using a headless Chromium browser via Playwright.

    Never raises for browser or timeout failures: they come back as a
    :class:`RenderResult` with ``error`` set.  The browser is always closed.

    Args:
        url: Target URL.
        options: Render tunables; defaults apply when omitted.

    Returns:
        A :class:`RenderResult`.
    """
    options = options or RenderOptions()
    try:
        return await asyncio.wait_for(_render(url, options), timeout=options.overall_timeout)
    except asyncio.TimeoutError:
        logger.warning("scraper: playwright render timed out for %s", url)
        return RenderResult(html=None, final_url=url, embed_url=None, error="render timeout")
    except PlaywrightError as exc:
        logger.warning("scraper: playwright fetch failed for %s: %s", url, exc)
        return RenderResult(
            html=None, final_url=url, embed_url=None, error=f"playwright error: {exc}"
        )


async def _render(url: str, options: RenderOptions) -> RenderResult:
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True)
        try:
            context = await browser.new_context(user_agent=options.user_agent)
            page = await context.new_page()
            try:
                await page.goto(
                    url,
                    timeout=options.timeout * 1000,
                    wait_until="domcontentloaded",
                )
                await _autoscroll(page, options)
                await _wait_for_embed(page, options)

                final_url = page.url
                candidates = await page.evaluate(_EMBED_PROBE_JS)
                embed_url = pick_live_embed(candidates or [], final_url)
                html = await page.content()
                logger.debug(
                    "scraper: rendered %s (%d candidates, embed=%s)",
                    url,
                    len(candidates or []),
                    embed_url,
                )
                return RenderResult(
                    html=html, final_url=final_url, embed_url=embed_url, error=None
                )
            finally:
                await page.close()
                await context.close()
        finally:
            await browser.close()


async def _autoscroll(page: Any, options: RenderOptions) -> None:
    for _ in range(options.scroll_max_steps):
        at_bottom = await page.evaluate(_SCROLL_STEP_JS, options.scroll_step_px)
        if at_bottom:
            return
        await page.wait_for_timeout(options.scroll_interval_ms)


async def _wait_for_embed(page: Any, options: RenderOptions) -> None:
    try:
        await page.wait_for_selector(
            ", ".join(EMBED_READY_SELECTORS),
            state="attached",
            timeout=options.embed_wait * 1000,
        )
    except PlaywrightTimeoutError:
        logger.debug("scraper: no embed selector appeared on %s", page.url)
