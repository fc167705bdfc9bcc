"""Low-level HTTP client for an OpenAI-compatible chat-completions endpoint.

This module is private to the ``enrichment`` package.  The selector and
orchestrator only depend on :meth:`TextGenerationClient.complete`, so tests
replace the whole client with a fake.

Error handling maps HTTP status codes to typed exceptions:

- HTTP 429 -> :class:`~news_enricher.core.exceptions.GenerationRateLimitError`
- HTTP 401/403 -> :class:`~news_enricher.core.exceptions.GenerationAuthError`
- Other non-2xx -> :class:`~news_enricher.core.exceptions.GenerationError`
- Network errors -> :class:`~news_enricher.core.exceptions.GenerationError`
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from news_enricher.core.exceptions import (
    GenerationAuthError,
    GenerationError,
    GenerationRateLimitError,
)

logger = logging.getLogger(__name__)


class TextGenerationClient:
    """Thin async wrapper around a chat-completions endpoint.

    Args:
        http_client: Shared :class:`httpx.AsyncClient` instance.
        api_url: Full chat-completions URL.
        api_key: Bearer token.  Empty means "not configured".
        model: Model identifier sent with every request.
        timeout: Per-call timeout in seconds.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        api_url: str,
        api_key: str,
        model: str,
        timeout: float = 60.0,
    ) -> None:
        self._http_client = http_client
        self._api_url = api_url
        self._api_key = api_key
        self._model = model
        self._timeout = timeout

    async def complete(
        self,
        system_prompt: str,
        user_message: str,
        *,
        json_object: bool = False,
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> str:
        """Send one system+user exchange and return the reply text.

        Args:
            system_prompt: System message.
            user_message: User message.
            json_object: Ask the service for a JSON object reply.
            temperature: Sampling temperature.
            max_tokens: Completion token cap.

        Returns:
            ``choices[0].message.content`` of the response.

        Raises:
            GenerationAuthError: No API key configured, or HTTP 401/403.
            GenerationRateLimitError: On HTTP 429.
            GenerationError: On other HTTP errors, network failures, or a
                response without message content.
        """
        if not self._api_key:
            raise GenerationAuthError("text generation: no API key configured")

        payload: dict[str, Any] = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if json_object:
            payload["response_format"] = {"type": "json_object"}
        headers: dict[str, str] = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        body = await self._post_completion(payload, headers)
        try:
            content = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise GenerationError("text generation: response has no message content") from exc
        if not isinstance(content, str):
            raise GenerationError("text generation: message content is not text")
        logger.debug("text generation: %d chars from %s", len(content), self._model)
        return content

    async def _post_completion(
        self,
        payload: dict[str, Any],
        headers: dict[str, str],
    ) -> dict[str, Any]:
        try:
            response = await self._http_client.post(
                self._api_url, json=payload, headers=headers, timeout=self._timeout
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            code = exc.response.status_code
            if code == 429:
                retry_after = _retry_after(exc.response)
                raise GenerationRateLimitError(
                    "text generation: HTTP 429, rate limited", retry_after=retry_after
                ) from exc
            if code in (401, 403):
                raise GenerationAuthError(
                    f"text generation: HTTP {code}, API key rejected"
                ) from exc
            raise GenerationError(
                f"text generation: HTTP {code}: {exc.response.text[:200]}"
            ) from exc
        except httpx.RequestError as exc:
            raise GenerationError(f"text generation: network error: {exc}") from exc

        try:
            return response.json()  # type: ignore[no-any-return]
        except ValueError as exc:
            raise GenerationError(f"text generation: JSON parse error: {exc}") from exc


def _retry_after(response: httpx.Response) -> float:
    try:
        return float(response.headers.get("Retry-After", 60))
    except ValueError:
        return 60.0
