"""Representative-image and social-embed location in parsed pages.

Works on a :class:`bs4.BeautifulSoup` document.  Image search is a
"first match wins" walk over :data:`~news_enricher.scraper.config.IMAGE_PROBES`.
Social-embed search has three tiers, tried in order:

1. A single document-order walk (:func:`iter_elements`) evaluating
   :data:`EMBED_RULES` on every element.
2. Fixed-priority attribute probes (:data:`EMBED_PROBES`).
3. A plain-text regex scan of the raw markup, if it was supplied.

Every embed candidate goes through
:func:`~news_enricher.scraper.embed_urls.canonical_embed_url`, so only
canonical video watch URLs and tweet status URLs are ever returned.
"""

from __future__ import annotations

import re
from typing import Callable, Iterator

from bs4 import BeautifulSoup, Tag

from news_enricher.scraper.config import (
    IFRAME_SOURCE_ATTRIBUTES,
    IMAGE_PROBES,
    MIN_IMAGE_HEIGHT,
    MIN_IMAGE_WIDTH,
    TWEET_BLOCKQUOTE_CLASSES,
)
from news_enricher.scraper.embed_urls import (
    VIDEO_WATCH_PREFIX,
    canonical_embed_url,
    canonical_status_url,
    resolve_url,
    scan_markup_for_embed,
)

_LEADING_INT_RE = re.compile(r"^\s*(\d+)")
_DATA_URL_ATTR_RE = re.compile(r"^data-[\w-]*url$")

ElementRule = tuple[Callable[[Tag], bool], Callable[[Tag, str], str | None]]


# ---------------------------------------------------------------------------
# Image
# ---------------------------------------------------------------------------


def locate_image(soup: BeautifulSoup, base_url: str) -> str | None:
    """Return the absolute URL of the page's representative image.

    Args:
        soup: Parsed document.
        base_url: URL the document was loaded from.

    Returns:
        The resolved image URL, or ``None`` if nothing matched or the chosen
        value could not be resolved to an absolute URL.
    """
    for selector, attribute in IMAGE_PROBES:
        for element in soup.select(selector):
            value = _attr(element, attribute)
            if value:
                return resolve_url(value, base_url)

    for img in soup.find_all("img"):
        src = _attr(img, "src")
        if not src:
            continue
        width = _leading_int(img.get("width"))
        height = _leading_int(img.get("height"))
        if width >= MIN_IMAGE_WIDTH and height >= MIN_IMAGE_HEIGHT:
            return resolve_url(src, base_url)
    return None


# ---------------------------------------------------------------------------
# Social embed: tree walk
# ---------------------------------------------------------------------------


def iter_elements(soup: BeautifulSoup | Tag) -> Iterator[Tag]:
    """Yield every element under *soup* in document order.

    Each call returns a fresh generator, so the walk can be restarted.
    """
    for node in soup.descendants:
        if isinstance(node, Tag):
            yield node


def _is_tweet_blockquote(element: Tag) -> bool:
    if element.name != "blockquote":
        return False
    classes = element.get("class") or []
    return any(cls in TWEET_BLOCKQUOTE_CLASSES for cls in classes)


def _tweet_from_blockquote(element: Tag, base_url: str) -> str | None:
    for anchor in element.find_all("a", href=True):
        status = canonical_status_url(anchor["href"], base_url)
        if status:
            return status
    return None


def _is_iframe(element: Tag) -> bool:
    return element.name == "iframe"


def _embed_from_iframe(element: Tag, base_url: str) -> str | None:
    for attribute in IFRAME_SOURCE_ATTRIBUTES:
        canonical = canonical_embed_url(_attr(element, attribute), base_url)
        if canonical:
            return canonical
    return None


#: Evaluated on each element in order; the first non-``None`` result wins.
EMBED_RULES: tuple[ElementRule, ...] = (
    (_is_tweet_blockquote, _tweet_from_blockquote),
    (_is_iframe, _embed_from_iframe),
)


def walk_for_embed(soup: BeautifulSoup, base_url: str) -> str | None:
    for element in iter_elements(soup):
        for matches, extract in EMBED_RULES:
            if matches(element):
                found = extract(element, base_url)
                if found:
                    return found
    return None


# ---------------------------------------------------------------------------
# Social embed: fixed probes
# ---------------------------------------------------------------------------


def _probe_lite_video(soup: BeautifulSoup, base_url: str) -> str | None:
    for element in soup.select("lite-youtube[videoid]"):
        video_id = _attr(element, "videoid")
        if video_id:
            canonical = canonical_embed_url(f"{VIDEO_WATCH_PREFIX}{video_id}", base_url)
            if canonical:
                return canonical
    return None


def _probe_video_anchor(soup: BeautifulSoup, base_url: str) -> str | None:
    return _first_canonical(soup.select("a[data-video-url]"), "data-video-url", base_url)


def _probe_oembed(soup: BeautifulSoup, base_url: str) -> str | None:
    return _first_canonical(soup.select("[data-oembed-url]"), "data-oembed-url", base_url)


def _probe_data_url_attributes(soup: BeautifulSoup, base_url: str) -> str | None:
    for element in iter_elements(soup):
        for name, value in element.attrs.items():
            if not _DATA_URL_ATTR_RE.match(name) or not isinstance(value, str):
                continue
            canonical = canonical_embed_url(value, base_url)
            if canonical:
                return canonical
    return None


EMBED_PROBES: tuple[Callable[[BeautifulSoup, str], str | None], ...] = (
    _probe_lite_video,
    _probe_video_anchor,
    _probe_oembed,
    _probe_data_url_attributes,
)


def probe_for_embed(soup: BeautifulSoup, base_url: str) -> str | None:
    for probe in EMBED_PROBES:
        found = probe(soup, base_url)
        if found:
            return found
    return None


# ---------------------------------------------------------------------------
# Social embed: public entry point
# ---------------------------------------------------------------------------


def locate_social_embed(
    soup: BeautifulSoup,
    base_url: str,
    raw_html: str | None = None,
) -> str | None:
    """Find the page's canonical social/video embed URL.

    Args:
        soup: Parsed document.
        base_url: URL the document was loaded from.
        raw_html: Raw markup for the regex fallback.  Omit to skip it.

    Returns:
        A canonical video watch URL or tweet status URL, or ``None``.
    """
    found = walk_for_embed(soup, base_url) or probe_for_embed(soup, base_url)
    if found:
        return found
    if raw_html:
        return scan_markup_for_embed(raw_html, base_url)
    return None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _attr(element: Tag, name: str) -> str | None:
    value = element.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _first_canonical(elements: list[Tag], attribute: str, base_url: str) -> str | None:
    for element in elements:
        canonical = canonical_embed_url(_attr(element, attribute), base_url)
        if canonical:
            return canonical
    return None


def _leading_int(value: object) -> int:
    if value is None:
        return 0
    match = _LEADING_INT_RE.match(str(value))
    return int(match.group(1)) if match else 0
