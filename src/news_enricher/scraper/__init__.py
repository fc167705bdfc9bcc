"""Article page fetching and media extraction.

Sub-modules:
- ``config``             - selector tables and content-type constants
- ``embed_urls``         - URL resolution and video/tweet canonicalization
- ``media_locator``      - representative image and social embed search
- ``http_fetcher``       - async httpx-based static page fetcher
- ``playwright_fetcher`` - headless Chromium fetch with auto-scroll and live embed probe
- ``content_extractor``  - trafilatura-based text extraction over both fetch strategies
"""
