"""Text-generation stages: article selection, summarization and rewrite.

Sub-modules:
- ``_generation_client`` - chat-completions HTTP client (private)
- ``config``             - prompts, platform vocabulary, generation parameters
- ``responses``          - pydantic validation of JSON replies
- ``narrator``           - weighted-random narrator selection
- ``pacing``             - minimum-interval pacing between calls
- ``selection``          - :class:`ArticleSelector`
- ``orchestrator``       - :class:`EnrichmentOrchestrator`
"""
