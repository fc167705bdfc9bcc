"""URL resolution and canonicalization for embed providers.

Two providers get special treatment:

- **Video** (YouTube): embed, watch, shorts and short-link URLs all map to
  ``https://www.youtube.com/watch?v=<id>``.  The privacy-enhanced
  ``youtube-nocookie.com`` domain is rejected outright.
- **Social posts** (Twitter / X): only status links are accepted and they map
  to ``https://twitter.com/i/web/status/<id>``.  Profile and other
  non-status links on these hosts canonicalize to ``None``.

Any other link is resolved to an absolute URL and returned unchanged;
``data:`` and ``javascript:`` links are always rejected.

:func:`canonicalize_url` is idempotent: feeding its output back in returns
the same value.
"""

from __future__ import annotations

import html
import re
from enum import Enum
from urllib.parse import parse_qs, urljoin, urlparse

VIDEO_WATCH_PREFIX: str = "https://www.youtube.com/watch?v="
STATUS_PREFIX: str = "https://twitter.com/i/web/status/"

_REJECTED_SCHEMES: frozenset[str] = frozenset({"data", "javascript"})

_VIDEO_HOSTS: frozenset[str] = frozenset(
    {"youtube.com", "www.youtube.com", "m.youtube.com", "music.youtube.com"}
)
_VIDEO_SHORT_HOSTS: frozenset[str] = frozenset({"youtu.be", "www.youtu.be"})
_VIDEO_PRIVACY_HOSTS: frozenset[str] = frozenset(
    {"youtube-nocookie.com", "www.youtube-nocookie.com"}
)
#: Path prefixes whose next segment is the video id.
_VIDEO_ID_PATH_PREFIXES: tuple[str, ...] = ("/embed/", "/shorts/", "/live/", "/v/")
_VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")

_SOCIAL_HOSTS: frozenset[str] = frozenset(
    {
        "twitter.com",
        "www.twitter.com",
        "mobile.twitter.com",
        "x.com",
        "www.x.com",
        "mobile.x.com",
    }
)
_SOCIAL_PLATFORM_HOSTS: frozenset[str] = frozenset(
    {
        "platform.twitter.com",
        "syndication.twitter.com",
        "cdn.syndication.twimg.com",
        "platform.x.com",
    }
)
_STATUS_QUERY_KEYS: tuple[str, ...] = ("id", "tweet_id", "status")
_STATUS_PATH_RE = re.compile(r"^/(?:i/web|[^/]+)/status(?:es)?/(\d+)")

#: Loose pattern for provider URLs embedded anywhere in raw markup.
_RAW_EMBED_URL_RE = re.compile(
    r"(?:https?:)?//"
    r"(?:(?:www|m|mobile|platform|syndication)\.)?"
    r"(?:youtube(?:-nocookie)?\.com|youtu\.be|twitter\.com|x\.com)"
    r"/[^\s\"'<>\\)]+",
    re.IGNORECASE,
)


class EmbedProvider(str, Enum):
    """Providers whose URLs have a canonical embed form."""

    VIDEO = "video"
    SOCIAL = "social"


def resolve_url(raw: str | None, base_url: str | None = None) -> str | None:
    """Resolve *raw* against *base_url* into an absolute URL.

    Returns:
        The absolute URL, or ``None`` if *raw* is empty, uses a ``data:`` or
        ``javascript:`` scheme, or cannot be made absolute.
    """
    if not raw:
        return None
    candidate = raw.strip()
    if not candidate or _scheme_of(candidate) in _REJECTED_SCHEMES:
        return None
    try:
        absolute = urljoin(base_url or "", candidate)
        parsed = urlparse(absolute)
    except ValueError:
        return None
    if not parsed.scheme or parsed.scheme.lower() in _REJECTED_SCHEMES:
        return None
    if parsed.scheme.lower() in ("http", "https") and not parsed.netloc:
        return None
    return absolute


def detect_provider(url: str) -> EmbedProvider | None:
    """Return the embed provider owning *url*'s host, if any."""
    try:
        host = (urlparse(url).hostname or "").lower()
    except ValueError:
        return None
    if host in _VIDEO_HOSTS or host in _VIDEO_SHORT_HOSTS or host in _VIDEO_PRIVACY_HOSTS:
        return EmbedProvider.VIDEO
    if host in _SOCIAL_HOSTS or host in _SOCIAL_PLATFORM_HOSTS:
        return EmbedProvider.SOCIAL
    return None


def canonicalize_url(raw: str | None, base_url: str | None = None) -> str | None:
    """Canonicalize a link found in a page.

    Args:
        raw: The link as written in the markup (absolute or relative).
        base_url: URL of the page the link appeared on.

    Returns:
        The canonical URL, or ``None`` when the link is rejected (see the
        module docstring for the per-provider rules).
    """
    absolute = resolve_url(raw, base_url)
    if absolute is None:
        return None

    parsed = urlparse(absolute)
    host = (parsed.hostname or "").lower()

    if host in _VIDEO_PRIVACY_HOSTS:
        return None
    if host in _VIDEO_HOSTS or host in _VIDEO_SHORT_HOSTS:
        video_id = _video_id(parsed.path, parsed.query, short_link=host in _VIDEO_SHORT_HOSTS)
        return f"{VIDEO_WATCH_PREFIX}{video_id}" if video_id else absolute
    if host in _SOCIAL_HOSTS or host in _SOCIAL_PLATFORM_HOSTS:
        status_id = _status_id(parsed.path, parsed.query, platform=host in _SOCIAL_PLATFORM_HOSTS)
        return f"{STATUS_PREFIX}{status_id}" if status_id else None
    return absolute


def canonical_embed_url(raw: str | None, base_url: str | None = None) -> str | None:
    """Like :func:`canonicalize_url`, but accept only canonical video/tweet URLs."""
    canonical = canonicalize_url(raw, base_url)
    if canonical and is_embed_url(canonical):
        return canonical
    return None


def canonical_status_url(raw: str | None, base_url: str | None = None) -> str | None:
    """Accept only links that canonicalize to a tweet status URL."""
    canonical = canonicalize_url(raw, base_url)
    if canonical and canonical.startswith(STATUS_PREFIX):
        return canonical
    return None


def is_embed_url(url: str) -> bool:
    return url.startswith(VIDEO_WATCH_PREFIX) or url.startswith(STATUS_PREFIX)


def scan_markup_for_embed(markup: str, base_url: str | None = None) -> str | None:
    """Plain-text scan of raw markup for the first canonicalizable embed URL.

    Last-resort fallback for pages whose embeds live only inside scripts,
    JSON blobs or attributes the DOM probes do not know about.  JSON-escaped
    slashes (``https:\\/\\/...``) are unescaped before matching.
    """
    for match in _RAW_EMBED_URL_RE.finditer(markup.replace("\\/", "/")):
        candidate = html.unescape(match.group(0))
        canonical = canonical_embed_url(candidate, base_url)
        if canonical:
            return canonical
    return None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _scheme_of(value: str) -> str:
    head, sep, _ = value.partition(":")
    if not sep or "/" in head:
        return ""
    return head.strip().lower()


def _video_id(path: str, query: str, *, short_link: bool) -> str | None:
    if short_link:
        candidate = path.strip("/").split("/", 1)[0]
        return candidate if _valid_video_id(candidate) else None

    for prefix in _VIDEO_ID_PATH_PREFIXES:
        if path.startswith(prefix):
            candidate = path[len(prefix):].split("/", 1)[0]
            return candidate if _valid_video_id(candidate) else None

    values = parse_qs(query).get("v")
    if values and _valid_video_id(values[0]):
        return values[0]
    return None


def _valid_video_id(candidate: str) -> bool:
    return bool(candidate) and candidate != "videoseries" and bool(_VIDEO_ID_RE.match(candidate))


def _status_id(path: str, query: str, *, platform: bool) -> str | None:
    if platform:
        params = parse_qs(query)
        for key in _STATUS_QUERY_KEYS:
            values = params.get(key)
            if values and values[0].isdigit():
                return values[0]
        return None

    match = _STATUS_PATH_RE.match(path)
    return match.group(1) if match else None
