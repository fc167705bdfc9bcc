"""Tests for the rendered-fetch helpers.

No browser is launched: the scroll and embed-wait loops run against a
scripted fake page, and ``render_url`` is exercised with ``_render`` patched.
"""

from __future__ import annotations

import asyncio
from unittest.mock import patch

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from news_enricher.scraper.playwright_fetcher import (
    RenderOptions,
    RenderResult,
    _autoscroll,
    _wait_for_embed,
    pick_live_embed,
    render_url,
)

BASE = "https://news.example.com/articles/42"

_PATCH_RENDER = "news_enricher.scraper.playwright_fetcher._render"


class FakePage:
    """Answers scroll steps from a script and records every wait."""

    def __init__(self, bottoms: list[bool] | None = None, *, selector_error: Exception | None = None) -> None:
        self.url = BASE
        self.bottoms = list(bottoms or [])
        self.selector_error = selector_error
        self.scroll_calls: list[int] = []
        self.pauses: list[int] = []
        self.selector_waits: list[dict] = []

    async def evaluate(self, script: str, step: int) -> bool:
        self.scroll_calls.append(step)
        return self.bottoms.pop(0) if self.bottoms else False

    async def wait_for_timeout(self, ms: int) -> None:
        self.pauses.append(ms)

    async def wait_for_selector(self, selector: str, **kwargs) -> None:
        self.selector_waits.append({"selector": selector, **kwargs})
        if self.selector_error is not None:
            raise self.selector_error


class TestPickLiveEmbed:
    def test_first_canonical_candidate_wins(self) -> None:
        candidates = [
            {"kind": "status", "url": "https://twitter.com/studio"},
            {"kind": "embed", "url": "https://ads.example.com/frame"},
            {"kind": "embed", "url": "https://www.youtube.com/embed/vid1"},
            {"kind": "status", "url": "https://twitter.com/a/status/5"},
        ]
        assert pick_live_embed(candidates, BASE) == "https://www.youtube.com/watch?v=vid1"

    def test_status_candidates_only_accept_tweets(self) -> None:
        candidates = [
            {"kind": "status", "url": "https://youtu.be/vid2"},
            {"kind": "status", "url": "https://x.com/a/status/77"},
        ]
        assert pick_live_embed(candidates, BASE) == "https://twitter.com/i/web/status/77"

    def test_garbage_entries_ignored(self) -> None:
        candidates = ["nope", {"kind": "embed"}, {"kind": "embed", "url": 5}]
        assert pick_live_embed(candidates, BASE) is None  # type: ignore[arg-type]

    def test_nocookie_video_rejected(self) -> None:
        candidates = [{"kind": "embed", "url": "https://www.youtube-nocookie.com/embed/x1"}]
        assert pick_live_embed(candidates, BASE) is None


class TestRenderOptions:
    def test_overall_timeout_covers_every_phase(self) -> None:
        options = RenderOptions(
            timeout=10, embed_wait=2, scroll_max_steps=5, scroll_interval_ms=100
        )
        assert options.overall_timeout == 12.5


@pytest.mark.asyncio
class TestAutoscroll:
    async def test_stops_once_bottom_reached(self) -> None:
        page = FakePage([False, False, True])
        await _autoscroll(page, RenderOptions(scroll_step_px=500, scroll_interval_ms=50))

        assert page.scroll_calls == [500, 500, 500]
        assert page.pauses == [50, 50]

    async def test_capped_at_max_steps(self) -> None:
        page = FakePage()
        await _autoscroll(page, RenderOptions(scroll_max_steps=10))

        assert len(page.scroll_calls) == 10
        assert len(page.pauses) == 10

    async def test_zero_steps_never_scrolls(self) -> None:
        page = FakePage()
        await _autoscroll(page, RenderOptions(scroll_max_steps=0))

        assert page.scroll_calls == []


@pytest.mark.asyncio
class TestWaitForEmbed:
    async def test_waits_for_embed_selectors_with_bounded_timeout(self) -> None:
        page = FakePage()
        await _wait_for_embed(page, RenderOptions(embed_wait=2.5))

        [wait] = page.selector_waits
        assert "twitter-tweet" in wait["selector"]
        assert wait["state"] == "attached"
        assert wait["timeout"] == 2500

    async def test_selector_timeout_is_not_an_error(self) -> None:
        page = FakePage(selector_error=PlaywrightTimeoutError("Timeout 5000ms exceeded"))
        await _wait_for_embed(page, RenderOptions())

        assert len(page.selector_waits) == 1


@pytest.mark.asyncio
class TestRenderUrl:
    async def test_success_passes_result_through(self) -> None:
        expected = RenderResult(html="<p>ok</p>", final_url=BASE, embed_url=None, error=None)

        async def fake_render(url: str, options: RenderOptions) -> RenderResult:
            return expected

        with patch(_PATCH_RENDER, new=fake_render):
            assert await render_url(BASE) is expected

    async def test_browser_error_becomes_error_result(self) -> None:
        async def failing_render(url: str, options: RenderOptions) -> RenderResult:
            raise PlaywrightError("boom")

        with patch(_PATCH_RENDER, new=failing_render):
            result = await render_url(BASE)

        assert result.html is None
        assert result.final_url == BASE
        assert result.error == "playwright error: boom"

    async def test_overall_timeout_becomes_error_result(self) -> None:
        async def slow_render(url: str, options: RenderOptions) -> RenderResult:
            await asyncio.sleep(5)
            return RenderResult(html="<p>late</p>", final_url=url, embed_url=None, error=None)

        options = RenderOptions(timeout=0.01, embed_wait=0, scroll_max_steps=0)
        with patch(_PATCH_RENDER, new=slow_render):
            result = await render_url(BASE, options=options)

        assert result.html is None
        assert result.error == "render timeout"
