"""Factory Boy factories and fakes for test data.

Available factories
-------------------
FeedItemFactory          - FeedItem published one hour before FIXED_NOW
NarratorProfileFactory   - NarratorProfile with a configurable weight
ExtractedContentFactory  - ExtractedContent with text and no media
FakeGenerationClient     - scripted stand-in for TextGenerationClient
"""

from __future__ import annotations

from tests.factories.feeds import (
    FIXED_NOW,
    ExtractedContentFactory,
    FeedItemFactory,
    NarratorProfileFactory,
)
from tests.factories.generation import FakeGenerationClient

__all__ = [
    "FIXED_NOW",
    "ExtractedContentFactory",
    "FakeGenerationClient",
    "FeedItemFactory",
    "NarratorProfileFactory",
]
