"""Plain GET fallback for article pages.

:func:`fetch_url` never raises.  Every way a page can be unusable (transport
failure, error status, a PDF or image where markup was expected, an
undecodable body) is folded into :attr:`FetchResult.error` so the extractor
can log it and move on.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx
import structlog

from news_enricher.scraper.config import BINARY_CONTENT_TYPES

logger = structlog.get_logger(__name__)

# Checked in order; TimeoutException and TooManyRedirects are RequestError subclasses.
_TRANSPORT_FAILURES: tuple[tuple[type[httpx.RequestError], str], ...] = (
    (httpx.TimeoutException, "timeout"),
    (httpx.TooManyRedirects, "too many redirects"),
)


@dataclass
class FetchResult:
    """Outcome of one static GET.

    ``status_code`` is ``None`` when no response arrived.  ``final_url`` is
    the URL after redirects, or the requested URL when there was no response.
    """

    html: str | None
    status_code: int | None
    final_url: str | None
    error: str | None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.html)

    @classmethod
    def failed(cls, url: str, error: str, status_code: int | None = None) -> FetchResult:
        return cls(html=None, status_code=status_code, final_url=url, error=error)


def _media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


def _is_binary_content_type(content_type: str) -> bool:
    media_type = _media_type(content_type)
    return any(media_type.startswith(prefix) for prefix in BINARY_CONTENT_TYPES)


def _describe_transport_error(exc: httpx.RequestError) -> str:
    for exc_type, label in _TRANSPORT_FAILURES:
        if isinstance(exc, exc_type):
            return label
    return f"request error: {exc}"


def _rejection(response: httpx.Response) -> str | None:
    """Why a received response cannot be used as page markup, if it cannot."""
    if response.is_client_error or response.is_server_error:
        return f"HTTP {response.status_code}"
    content_type = response.headers.get("content-type", "")
    if _is_binary_content_type(content_type):
        return f"binary content-type: {content_type}"
    return None


async def fetch_url(
    url: str,
    *,
    client: httpx.AsyncClient,
    timeout: float,
    user_agent: str,
) -> FetchResult:
    """GET *url* following redirects and return its decoded body.

    Args:
        url: Page to fetch.
        client: Shared client; connection pooling is the caller's concern.
        timeout: Per-request timeout in seconds.
        user_agent: Sent as the ``User-Agent`` header.
    """
    try:
        response = await client.get(
            url,
            headers={"User-Agent": user_agent},
            timeout=timeout,
            follow_redirects=True,
        )
    except httpx.RequestError as exc:
        error = _describe_transport_error(exc)
        logger.warning("static_fetch_failed", url=url, error=error)
        return FetchResult.failed(url, error)

    landed_on = str(response.url)
    reason = _rejection(response)
    if reason is None:
        try:
            body = response.text
        except (UnicodeDecodeError, LookupError) as exc:
            reason = f"decode error: {exc}"
        else:
            return FetchResult(
                html=body, status_code=response.status_code, final_url=landed_on, error=None
            )

    logger.info("static_fetch_rejected", url=url, status=response.status_code, error=reason)
    return FetchResult.failed(landed_on, reason, status_code=response.status_code)
