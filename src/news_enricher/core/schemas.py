"""Pydantic schemas for the HTTP surface.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from news_enricher.core.models import EnrichedArticle


class EnrichedArticleRead(BaseModel):
    """Wire representation of :class:`~news_enricher.core.models.EnrichedArticle`."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    title: str
    summary: str
    platforms: list[str]
    narrator_name: str | None = None
    source_url: str
    image_url: str | None = None
    social_embed_url: str | None = None

    @classmethod
    def from_article(cls, article: EnrichedArticle) -> "EnrichedArticleRead":
        return cls(
            title=article.title,
            summary=article.summary,
            platforms=list(article.platforms),
            narrator_name=article.narrator_name,
            source_url=article.source_url,
            image_url=article.image_url,
            social_embed_url=article.social_embed_url,
        )


class NewsPayload(BaseModel):
    """Body of ``GET /api/news`` for the success and processing outcomes."""

    model_config = ConfigDict(frozen=True)

    status: Literal["success", "processing"]
    message: str
    data: list[EnrichedArticleRead] | None = Field(default=None)

    def to_json(self) -> dict:
        """Serialize with camelCase article keys, omitting ``data`` when unset."""
        return self.model_dump(by_alias=True, exclude_none=self.data is None)


class ErrorPayload(BaseModel):
    """Body of ``GET /api/news`` when a whole run fails (HTTP 500)."""

    error: str
    message: str
