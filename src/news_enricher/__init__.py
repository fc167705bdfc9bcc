"""News enrichment service.

Aggregates gaming news feeds, extracts article content and embedded media from
publisher pages, and rewrites selected stories into short enriched summaries.
"""

__version__ = "0.1.0"
