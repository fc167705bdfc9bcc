"""Validation of structured text-generation replies.

Every JSON reply is validated against a pydantic model.  The outcome is a
value, not an exception: callers get either a :class:`ParsedResponse` holding
the validated model or a :class:`MalformedResponse` explaining what was
wrong, and branch with ``isinstance``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


class HumanizedArticle(BaseModel):
    """Reply shape of the humanized rewrite call."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1)
    summary: str = Field(min_length=1)


class PlatformClassification(BaseModel):
    """Reply shape of the platform classification call."""

    platforms: list[str]


class SelectedArticle(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = ""
    url: str = Field(min_length=1)


class ArticleSelectionResponse(BaseModel):
    """Reply shape of the article selection call."""

    articles: list[SelectedArticle]


@dataclass(frozen=True)
class ParsedResponse:
    value: Any


@dataclass(frozen=True)
class MalformedResponse:
    reason: str
    raw: str


def parse_generation(
    raw: str,
    model: type[BaseModel],
) -> ParsedResponse | MalformedResponse:
    """Validate a JSON reply against *model*.

    A surrounding Markdown code fence is tolerated.

    Args:
        raw: Reply text from the text-generation service.
        model: Pydantic model describing the expected shape.

    Returns:
        :class:`ParsedResponse` wrapping a *model* instance, or
        :class:`MalformedResponse` if the text is not JSON or does not match.
    """
    text = raw.strip()
    fenced = _CODE_FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1)
    if not text:
        return MalformedResponse(reason="empty response", raw=raw)

    try:
        return ParsedResponse(value=model.model_validate_json(text))
    except ValidationError as exc:
        return MalformedResponse(reason=_summarize(exc), raw=raw)


def _summarize(exc: ValidationError) -> str:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    return f"{location}: {first.get('msg', 'invalid')} ({exc.error_count()} error(s))"
