"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from jira_triage.config import Settings
from jira_triage.infrastructure.api.dependencies import get_settings

VERSION = "1.0.0"

router = APIRouter(tags=["health"])


def _service_status(api_key: str) -> dict:
    return {"available": bool(api_key), "keyLength": len(api_key or "")}


@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)):
    """Report which backend credentials are configured; degraded if either is missing."""
    services = {
        "gemini": _service_status(settings.gemini_api_key),
        "claude": _service_status(settings.claude_api_key),
    }
    healthy = all(s["available"] for s in services.values())

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": settings.environment,
            "version": VERSION,
            "services": services,
        },
    )


@router.options("/health")
async def health_preflight():
    return Response(status_code=200)
