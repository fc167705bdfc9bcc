"""Unit tests for article selection through the text-generation service."""

from __future__ import annotations

import json

import pytest

from news_enricher.core.exceptions import GenerationAuthError
from news_enricher.enrichment.selection import ArticleSelector
from tests.factories import FakeGenerationClient, FeedItemFactory


def _reply(*urls: str) -> str:
    return json.dumps({"articles": [{"title": "t", "url": url} for url in urls]})


@pytest.mark.asyncio
class TestArticleSelector:
    async def test_empty_candidates_make_no_calls(self) -> None:
        client = FakeGenerationClient()
        assert await ArticleSelector(client).select([]) == []
        assert client.calls == []

    async def test_two_calls_over_halves(self) -> None:
        items = FeedItemFactory.build_batch(5)
        client = FakeGenerationClient([_reply(items[1].link), _reply(items[4].link)])

        selected = await ArticleSelector(client, count=4).select(items)

        assert selected == [items[1], items[4]]
        first, second = client.calls
        assert items[2].link in first["user"]
        assert items[3].link not in first["user"]
        assert items[3].link in second["user"]
        assert "Select the 2 most" in first["user"]
        assert first["json_object"] is True

    async def test_odd_count_rounds_up_per_call(self) -> None:
        items = FeedItemFactory.build_batch(2)
        client = FakeGenerationClient([_reply(items[0].link), _reply(items[1].link)])

        await ArticleSelector(client, count=3).select(items)

        assert "Select the 2 most" in client.calls[0]["user"]

    async def test_reply_truncated_to_per_call(self) -> None:
        items = FeedItemFactory.build_batch(6)
        client = FakeGenerationClient(
            [_reply(items[0].link, items[1].link, items[2].link), _reply()]
        )

        selected = await ArticleSelector(client, count=2).select(items)

        assert selected == [items[0]]

    async def test_duplicates_across_calls_and_trailing_slash(self) -> None:
        items = FeedItemFactory.build_batch(4)
        client = FakeGenerationClient(
            [_reply(items[0].link), _reply(items[0].link + "/", items[3].link)]
        )

        selected = await ArticleSelector(client, count=4).select(items)

        assert selected == [items[0], items[3]]

    async def test_invented_urls_dropped(self) -> None:
        items = FeedItemFactory.build_batch(2)
        client = FakeGenerationClient(
            [_reply("https://made-up.example.com/x", items[0].link), _reply()]
        )

        selected = await ArticleSelector(client, count=4).select(items)

        assert selected == [items[0]]

    async def test_failed_or_malformed_call_contributes_nothing(self) -> None:
        items = FeedItemFactory.build_batch(4)
        client = FakeGenerationClient([GenerationAuthError("no key"), "not json at all"])

        assert await ArticleSelector(client).select(items) == []
        assert len(client.calls) == 2

    async def test_single_candidate_makes_one_call(self) -> None:
        items = FeedItemFactory.build_batch(1, description="x" * 500)
        client = FakeGenerationClient([_reply(items[0].link)])

        assert await ArticleSelector(client).select(items) == items
        assert len(client.calls) == 1
        assert "Description: " + "x" * 300 in client.calls[0]["user"]
        assert "x" * 301 not in client.calls[0]["user"]
