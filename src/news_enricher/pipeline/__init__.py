"""Pipeline wiring: result cache, batch scheduler and the news service."""
