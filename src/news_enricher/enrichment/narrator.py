"""Weighted-random narrator selection.

Effective weight of a profile:

- ``response_probability`` missing, non-numeric or non-finite: 1.
- Outside ``[0, 1]``: 1, and a warning is logged.
- Exactly 0: 0, so the profile never wins the weighted draw.
- Otherwise: the probability itself.

If every profile ends up with weight 0 the pick is uniform over the whole
list.  An empty list means no narrator.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Sequence

from news_enricher.core.models import NarratorProfile

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT: float = 1.0


def effective_weight(profile: NarratorProfile) -> float:
    value = profile.response_probability
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_WEIGHT
    if not math.isfinite(value):
        return DEFAULT_WEIGHT
    if value < 0 or value > 1:
        logger.warning(
            "narrator: profile '%s' has response_probability %s outside [0, 1]; using %s",
            profile.id,
            value,
            DEFAULT_WEIGHT,
        )
        return DEFAULT_WEIGHT
    return float(value)


class NarratorSelector:
    """Picks a narrator for each article.

    Args:
        profiles: The roster to draw from.
        rng: Random source.  Inject a seeded :class:`random.Random` in tests.
    """

    def __init__(
        self,
        profiles: Sequence[NarratorProfile],
        rng: random.Random | None = None,
    ) -> None:
        self._profiles = list(profiles)
        self._rng = rng or random.Random()
        weights = [(profile, effective_weight(profile)) for profile in self._profiles]
        self._weighted = [(profile, weight) for profile, weight in weights if weight > 0]
        self._total_weight = sum(weight for _, weight in self._weighted)

    @property
    def profiles(self) -> list[NarratorProfile]:
        return list(self._profiles)

    def select(self) -> NarratorProfile | None:
        """Draw one profile, or ``None`` when the roster is empty."""
        if not self._profiles:
            return None
        if not self._weighted:
            return self._rng.choice(self._profiles)

        remaining = self._rng.random() * self._total_weight
        for profile, weight in self._weighted:
            remaining -= weight
            if remaining <= 0:
                return profile
        # Float rounding can leave a sliver above zero.
        return self._weighted[-1][0]
