"""Liveness and service descriptor endpoints.

``GET /health``
    Process-level liveness.  No I/O, always ``{"status": "ok"}``.

``GET /``
    Lists the public endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

router = APIRouter(tags=["system"])

ENDPOINTS: dict[str, str] = {
    "/health": "Liveness check",
    "/api/news": "Enriched gaming news (add ?refresh=true to force a new run)",
}


@router.get("/health")
async def health() -> JSONResponse:
    """Return a minimal process-level liveness status.

    Returns:
        JSON response with ``{"status": "ok"}``.
    """
    return JSONResponse({"status": "ok"})


@router.get("/")
async def service_descriptor() -> JSONResponse:
    return JSONResponse(
        {
            "status": "ok",
            "message": "Gaming news enrichment service",
            "endpoints": ENDPOINTS,
        }
    )
