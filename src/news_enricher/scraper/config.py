"""Constants for page fetching and media location.

The selector tables are ordered data: the first entry that yields a value
wins, so reordering them changes behaviour.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

#: Content-Type prefixes that indicate binary/non-text resources that should
#: be skipped without attempting extraction.
BINARY_CONTENT_TYPES: frozenset[str] = frozenset(
    {
        "application/pdf",
        "application/zip",
        "application/octet-stream",
        "application/vnd.",
        "image/",
        "video/",
        "audio/",
        "font/",
    }
)

# ---------------------------------------------------------------------------
# Representative image
# ---------------------------------------------------------------------------

#: ``(css selector, attribute)`` pairs tried in order against the document.
IMAGE_PROBES: tuple[tuple[str, str], ...] = (
    ('meta[property="og:image"]', "content"),
    ('meta[name="twitter:image"]', "content"),
    ('meta[property="og:image:secure_url"]', "content"),
    ("article img", "src"),
    (".article-image img", "src"),
    (".post-image img", "src"),
    (".entry-image img", "src"),
    (".featured-image img", "src"),
    ("figure img", "src"),
    (".main-image img", "src"),
    ("#main-image", "src"),
    ('img[itemprop="image"]', "src"),
)

#: Minimum declared size for the "first large image" fallback.
MIN_IMAGE_WIDTH: int = 300
MIN_IMAGE_HEIGHT: int = 200

# ---------------------------------------------------------------------------
# Social embeds
# ---------------------------------------------------------------------------

#: ``class`` values marking a blockquote as an embedded tweet.
TWEET_BLOCKQUOTE_CLASSES: frozenset[str] = frozenset({"twitter-tweet", "twitter-video"})

#: Attributes read from iframes, in order.
IFRAME_SOURCE_ATTRIBUTES: tuple[str, ...] = ("src", "data-src")

#: Selectors whose appearance in a rendered page means an embed has loaded.
EMBED_READY_SELECTORS: tuple[str, ...] = (
    "blockquote.twitter-tweet",
    "blockquote.twitter-video",
    "iframe[src*='youtube.com']",
    "iframe[src*='youtu.be']",
    "iframe[src*='twitter.com']",
    "iframe[src*='x.com']",
    "iframe[data-src*='youtube.com']",
    "lite-youtube",
    "[data-oembed-url]",
)
