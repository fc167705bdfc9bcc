"""Feed aggregation and candidate preparation.

Sub-modules:
- ``collector`` - :class:`FeedAggregator`, httpx + feedparser over a list of feeds
- ``filtering`` - recency window and link deduplication
"""
