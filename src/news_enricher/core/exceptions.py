"""Application-wide exception hierarchy for the news enrichment service.

All custom exceptions subclass ``NewsEnricherError`` so that callers can catch
the whole hierarchy with a single ``except`` clause when needed.

Hierarchy::

    NewsEnricherError
    ├── FeedFetchError
    ├── PipelineRunError
    └── GenerationError
        ├── GenerationRateLimitError   (retry_after: float)
        └── GenerationAuthError

Malformed generation *output* is not an exception: it is reported as a
:class:`~news_enricher.enrichment.responses.MalformedResponse` value.
"""

from __future__ import annotations


class NewsEnricherError(Exception):
    """Base class for all news enrichment exceptions."""


# ---------------------------------------------------------------------------
# Source failures
# ---------------------------------------------------------------------------


class FeedFetchError(NewsEnricherError):
    """Raised when a single syndication feed cannot be fetched or parsed.

    Always caught by the aggregator; one bad feed never aborts a run.

    Args:
        message: Human-readable description of the failure.
        url: The feed URL that failed.
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


# ---------------------------------------------------------------------------
# Text-generation service
# ---------------------------------------------------------------------------


class GenerationError(NewsEnricherError):
    """Raised when the text-generation service call itself fails.

    Covers network errors, non-2xx responses and responses without a message
    body.  Callers treat it as a recoverable failure of that one call.
    """


class GenerationRateLimitError(GenerationError):
    """Raised on HTTP 429 from the text-generation service.

    Args:
        message: Human-readable description of the rate limit.
        retry_after: Seconds the service asked us to wait. Defaults to 60.
    """

    def __init__(self, message: str, retry_after: float = 60.0) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class GenerationAuthError(GenerationError):
    """Raised when no API key is configured or the service rejects it (401/403)."""


# ---------------------------------------------------------------------------
# Run-level failures
# ---------------------------------------------------------------------------


class PipelineRunError(NewsEnricherError):
    """Raised when a whole pipeline run fails outside the per-article guards.

    The API layer turns it into an HTTP 500 with an error body.  The cached
    result is left as it was.
    """
