"""Unit tests for representative-image and social-embed location."""

from __future__ import annotations

from bs4 import BeautifulSoup

from news_enricher.scraper.media_locator import (
    iter_elements,
    locate_image,
    locate_social_embed,
    probe_for_embed,
    walk_for_embed,
)

BASE = "https://news.example.com/articles/42"


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


# ---------------------------------------------------------------------------
# Image
# ---------------------------------------------------------------------------


class TestLocateImage:
    def test_open_graph_wins_over_article_img(self) -> None:
        soup = _soup(
            '<head><meta property="og:image" content="/og.jpg"></head>'
            '<body><article><img src="/inline.jpg"></article></body>'
        )
        assert locate_image(soup, BASE) == "https://news.example.com/og.jpg"

    def test_twitter_card_used_when_no_open_graph(self) -> None:
        soup = _soup('<meta name="twitter:image" content="https://cdn.example.com/tw.jpg">')
        assert locate_image(soup, BASE) == "https://cdn.example.com/tw.jpg"

    def test_empty_meta_content_falls_through(self) -> None:
        soup = _soup(
            '<meta property="og:image" content="  ">'
            '<figure><img src="figure.png"></figure>'
        )
        assert locate_image(soup, BASE) == "https://news.example.com/articles/figure.png"

    def test_schema_org_image(self) -> None:
        soup = _soup('<div><img itemprop="image" src="/schema.jpg"></div>')
        assert locate_image(soup, BASE) == "https://news.example.com/schema.jpg"

    def test_large_image_fallback_uses_declared_size(self) -> None:
        soup = _soup(
            '<img src="/icon.png" width="32" height="32">'
            '<img src="/banner.png" width="1200px" height="80">'
            '<img src="/hero.png" width="640" height="360">'
        )
        assert locate_image(soup, BASE) == "https://news.example.com/hero.png"

    def test_unresolvable_choice_gives_no_image(self) -> None:
        soup = _soup('<meta property="og:image" content="data:image/png;base64,AAAA">')
        assert locate_image(soup, BASE) is None

    def test_no_candidates(self) -> None:
        assert locate_image(_soup("<p>text only</p>"), BASE) is None


# ---------------------------------------------------------------------------
# Tree walk
# ---------------------------------------------------------------------------


class TestIterElements:
    def test_document_order_and_restartable(self) -> None:
        soup = _soup("<div><p><a></a></p><span></span></div>")
        first = [el.name for el in iter_elements(soup)]
        second = [el.name for el in iter_elements(soup)]
        assert first == ["div", "p", "a", "span"]
        assert second == first


class TestWalkForEmbed:
    def test_tweet_blockquote(self) -> None:
        soup = _soup(
            '<blockquote class="twitter-tweet"><p>Big news</p>'
            '<a href="https://twitter.com/Nintendo">@Nintendo</a>'
            '<a href="https://twitter.com/Nintendo/status/12345?ref_src=twsrc">'
            "November 5, 2024</a></blockquote>"
        )
        assert walk_for_embed(soup, BASE) == "https://twitter.com/i/web/status/12345"

    def test_first_embed_in_document_order_wins(self) -> None:
        soup = _soup(
            '<iframe src="https://www.youtube.com/embed/first1"></iframe>'
            '<blockquote class="twitter-tweet">'
            '<a href="https://twitter.com/a/status/1">t</a></blockquote>'
        )
        assert walk_for_embed(soup, BASE) == "https://www.youtube.com/watch?v=first1"

    def test_iframe_data_src(self) -> None:
        soup = _soup('<iframe data-src="https://www.youtube.com/embed/lazy42"></iframe>')
        assert walk_for_embed(soup, BASE) == "https://www.youtube.com/watch?v=lazy42"

    def test_unrelated_iframe_ignored(self) -> None:
        soup = _soup(
            '<iframe src="https://ads.example.com/frame"></iframe>'
            '<iframe src="https://www.youtube-nocookie.com/embed/priv1"></iframe>'
        )
        assert walk_for_embed(soup, BASE) is None

    def test_blockquote_without_tweet_marker_ignored(self) -> None:
        soup = _soup(
            '<blockquote><a href="https://twitter.com/a/status/1">quote</a></blockquote>'
        )
        assert walk_for_embed(soup, BASE) is None


# ---------------------------------------------------------------------------
# Probes
# ---------------------------------------------------------------------------


class TestProbeForEmbed:
    def test_lite_video_element(self) -> None:
        soup = _soup('<lite-youtube videoid="lite123"></lite-youtube>')
        assert probe_for_embed(soup, BASE) == "https://www.youtube.com/watch?v=lite123"

    def test_lite_video_beats_oembed(self) -> None:
        soup = _soup(
            '<div data-oembed-url="https://twitter.com/a/status/7"></div>'
            '<lite-youtube videoid="lite123"></lite-youtube>'
        )
        assert probe_for_embed(soup, BASE) == "https://www.youtube.com/watch?v=lite123"

    def test_video_anchor(self) -> None:
        soup = _soup('<a data-video-url="https://youtu.be/anchor9">watch</a>')
        assert probe_for_embed(soup, BASE) == "https://www.youtube.com/watch?v=anchor9"

    def test_oembed_attribute(self) -> None:
        soup = _soup('<figure data-oembed-url="https://x.com/a/status/77"></figure>')
        assert probe_for_embed(soup, BASE) == "https://twitter.com/i/web/status/77"

    def test_generic_data_url_attribute(self) -> None:
        soup = _soup('<div data-embed-url="https://www.youtube.com/embed/generic5"></div>')
        assert probe_for_embed(soup, BASE) == "https://www.youtube.com/watch?v=generic5"


class TestLocateSocialEmbed:
    def test_tree_walk_beats_probes(self) -> None:
        soup = _soup(
            '<lite-youtube videoid="probe1"></lite-youtube>'
            '<iframe src="https://www.youtube.com/embed/walk1"></iframe>'
        )
        assert locate_social_embed(soup, BASE) == "https://www.youtube.com/watch?v=walk1"

    def test_regex_fallback_only_with_raw_markup(self) -> None:
        raw = '<script>load("https://youtu.be/script7")</script>'
        soup = _soup(raw)
        assert locate_social_embed(soup, BASE) is None
        assert locate_social_embed(soup, BASE, raw_html=raw) == (
            "https://www.youtube.com/watch?v=script7"
        )
