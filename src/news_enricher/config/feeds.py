"""Default syndication sources polled on every pipeline run.

Order matters: aggregation output follows this list, and deduplication keeps
the first occurrence of a link, so earlier sources win ties.
"""

from __future__ import annotations

DEFAULT_FEED_URLS: list[str] = [
    "https://feeds.feedburner.com/ign/all",
    "https://www.gamespot.com/feeds/game-news",
    "https://www.polygon.com/rss/index.xml",
    "https://kotaku.com/feed/rss",
    "https://www.eurogamer.net/feed",
    "https://www.pcgamer.com/rss",
    "https://www.rockpapershotgun.com/feed",
    "https://www.vg247.com/feed",
    "https://automaton-media.com/en/feed/",
    "https://www.videogameschronicle.com/feed/",
    "https://nintendoeverything.com/feed",
    "https://www.nintendolife.com/feeds/latest",
    "https://nintendonews.com/api/nn/feed",
]
"""Gaming news feeds (IGN, GameSpot, Polygon, Kotaku, Eurogamer, PC Gamer,
Rock Paper Shotgun, VG247, Automaton, VGC, Nintendo Everything, Nintendo Life,
Nintendo News)."""
