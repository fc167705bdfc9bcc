"""Unit tests for URL resolution and embed canonicalization."""

from __future__ import annotations

import pytest

from news_enricher.scraper.embed_urls import (
    EmbedProvider,
    canonical_embed_url,
    canonicalize_url,
    detect_provider,
    resolve_url,
    scan_markup_for_embed,
)

BASE = "https://news.example.com/articles/42"


class TestResolveUrl:
    def test_relative_path_resolved_against_base(self) -> None:
        assert resolve_url("/img/hero.jpg", BASE) == "https://news.example.com/img/hero.jpg"

    def test_protocol_relative_url(self) -> None:
        assert resolve_url("//cdn.example.com/a.png", BASE) == "https://cdn.example.com/a.png"

    def test_data_uri_rejected(self) -> None:
        assert resolve_url("data:image/png;base64,AAAA", BASE) is None

    def test_javascript_uri_rejected(self) -> None:
        assert resolve_url("javascript:void(0)", BASE) is None
        assert resolve_url("  JavaScript:alert(1)", BASE) is None

    def test_empty_value(self) -> None:
        assert resolve_url("", BASE) is None
        assert resolve_url(None, BASE) is None

    def test_relative_without_base_is_unresolvable(self) -> None:
        assert resolve_url("/img/hero.jpg") is None


class TestVideoCanonicalization:
    @pytest.mark.parametrize(
        "raw",
        [
            "https://www.youtube.com/embed/dQw4w9WgXcQ",
            "https://www.youtube.com/embed/dQw4w9WgXcQ?autoplay=1",
            "https://youtube.com/watch?v=dQw4w9WgXcQ&t=30",
            "https://m.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ",
            "https://www.youtube.com/shorts/dQw4w9WgXcQ",
            "//www.youtube.com/embed/dQw4w9WgXcQ",
        ],
    )
    def test_variants_map_to_watch_form(self, raw: str) -> None:
        assert canonicalize_url(raw, BASE) == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"

    def test_privacy_enhanced_domain_rejected(self) -> None:
        assert canonicalize_url("https://www.youtube-nocookie.com/embed/dQw4w9WgXcQ") is None

    def test_no_identifier_returns_original_url(self) -> None:
        url = "https://www.youtube.com/channel/UC123"
        assert canonicalize_url(url) == url

    def test_playlist_embed_has_no_video_identifier(self) -> None:
        url = "https://www.youtube.com/embed/videoseries?list=PL123"
        assert canonicalize_url(url) == url


class TestSocialCanonicalization:
    @pytest.mark.parametrize(
        "raw",
        [
            "https://twitter.com/Nintendo/status/12345",
            "https://x.com/Nintendo/status/12345?s=20",
            "https://mobile.twitter.com/Nintendo/status/12345/photo/1",
            "https://twitter.com/i/web/status/12345",
            "https://platform.twitter.com/embed/Tweet.html?id=12345",
            "https://syndication.twitter.com/srv/timeline?tweet_id=12345",
        ],
    )
    def test_status_variants_map_to_canonical_form(self, raw: str) -> None:
        assert canonicalize_url(raw) == "https://twitter.com/i/web/status/12345"

    def test_profile_link_is_no_match(self) -> None:
        assert canonicalize_url("https://twitter.com/Nintendo") is None

    def test_platform_host_without_id_is_no_match(self) -> None:
        assert canonicalize_url("https://platform.twitter.com/widgets.js") is None


class TestOtherUrls:
    def test_other_link_returned_absolute(self) -> None:
        assert canonicalize_url("../other", BASE) == "https://news.example.com/other"

    def test_canonical_embed_url_filters_plain_links(self) -> None:
        assert canonical_embed_url("https://news.example.com/other") is None
        assert canonical_embed_url("https://youtu.be/abc123") == (
            "https://www.youtube.com/watch?v=abc123"
        )


class TestIdempotence:
    @pytest.mark.parametrize(
        "raw",
        [
            "https://www.youtube.com/embed/dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ",
            "https://x.com/Nintendo/status/12345",
            "https://platform.twitter.com/embed/Tweet.html?id=12345",
            "https://www.youtube.com/channel/UC123",
            "/relative/path?x=1",
            "https://news.example.com/a b",
        ],
    )
    def test_canonicalize_twice_equals_once(self, raw: str) -> None:
        once = canonicalize_url(raw, BASE)
        assert canonicalize_url(once, BASE) == once


class TestDetectProvider:
    def test_providers(self) -> None:
        assert detect_provider("https://youtu.be/x") is EmbedProvider.VIDEO
        assert detect_provider("https://x.com/a/status/1") is EmbedProvider.SOCIAL
        assert detect_provider("https://example.com/") is None


class TestScanMarkupForEmbed:
    def test_finds_url_inside_script(self) -> None:
        markup = '<script>var player = {src: "https://www.youtube.com/embed/abc_123"};</script>'
        assert scan_markup_for_embed(markup, BASE) == "https://www.youtube.com/watch?v=abc_123"

    def test_unescapes_entities(self) -> None:
        markup = '<div data-x="https://www.youtube.com/watch?feature=share&amp;v=abc123"></div>'
        assert scan_markup_for_embed(markup, BASE) == "https://www.youtube.com/watch?v=abc123"

    def test_skips_non_canonicalizable_matches(self) -> None:
        markup = (
            '<a href="https://twitter.com/Nintendo">profile</a>'
            '<a href="https://twitter.com/Nintendo/status/999">tweet</a>'
        )
        assert scan_markup_for_embed(markup, BASE) == "https://twitter.com/i/web/status/999"

    def test_json_escaped_slashes(self) -> None:
        markup = r'<script>window.__DATA__ = {"embed":"https:\/\/twitter.com\/studio\/status\/99"}</script>'
        assert scan_markup_for_embed(markup, BASE) == "https://twitter.com/i/web/status/99"

    def test_nothing_found(self) -> None:
        assert scan_markup_for_embed("<p>No embeds here</p>", BASE) is None
