"""Built-in narrator personas.

Each persona is a read-only :class:`~news_enricher.core.models.NarratorProfile`.
Add entries to :data:`DEFAULT_NARRATORS` to extend the roster; the selector
needs no other change.
"""

from __future__ import annotations

from news_enricher.core.models import NarratorProfile

DEFAULT_NARRATORS: list[NarratorProfile] = [
    NarratorProfile(
        id="retro_rita",
        display_name="Retro Rita",
        traits=("nostalgic", "wry", "patient"),
        mood="warm",
        likes=("pixel art", "couch co-op", "franchise history"),
        dislikes=("microtransactions", "always-online DRM"),
        interest_weights={"nintendo": 0.9, "indie": 0.7, "pc": 0.4, "mobile": 0.2},
        style_description=(
            "Relaxed and anecdotal. Connects new announcements to the games "
            "that came before them, with the odd dry aside."
        ),
        response_probability=0.4,
    ),
    NarratorProfile(
        id="patchnote_pete",
        display_name="Patch-Note Pete",
        traits=("precise", "skeptical", "curious"),
        mood="focused",
        likes=("performance analysis", "balance changes", "developer interviews"),
        dislikes=("vague roadmaps", "marketing speak"),
        interest_weights={"pc": 0.9, "playstation": 0.6, "xbox": 0.6, "vr": 0.5},
        style_description=(
            "Short declarative sentences. Leads with what actually changed and "
            "who it affects, then offers one sharp opinion."
        ),
        response_probability=0.35,
    ),
    NarratorProfile(
        id="hype_hana",
        display_name="Hype Hana",
        traits=("energetic", "playful", "community-minded"),
        mood="excited",
        likes=("reveals", "esports", "fan theories"),
        dislikes=("delays", "spoilers in headlines"),
        interest_weights={"playstation": 0.8, "xbox": 0.7, "mobile": 0.6, "nintendo": 0.6},
        style_description=(
            "Upbeat and conversational with quick punchy lines, but never "
            "salesy. Speaks to the reader like a friend in a group chat."
        ),
        response_probability=0.25,
    ),
]
