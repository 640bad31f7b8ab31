"""Jira AI Triage — FastAPI application factory."""

import logging

from fastapi import FastAPI, Request

from jira_triage.config import Settings, settings as default_settings
from jira_triage.infrastructure.api.cors import EmptyPreflightCORSMiddleware
from jira_triage.infrastructure.api.dependencies import (
    build_rate_limiter,
    build_triage_use_case,
)
from jira_triage.infrastructure.api.routes_health import router as health_router
from jira_triage.infrastructure.api.routes_triage import router as triage_router

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )
    logging.getLogger("jira_triage").setLevel(logging.DEBUG if verbose else logging.INFO)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.verbose_logging)

    app = FastAPI(
        title="Jira AI Triage API",
        description="Scores Jira tickets with Gemini (Claude fallback) and recommends a priority",
        version="1.0.0",
    )

    # Webhooks come from Jira Cloud and ad hoc tools, so every origin is allowed
    app.add_middleware(
        EmptyPreflightCORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # Process-lifetime collaborators
    app.state.settings = settings
    app.state.triage_uc = build_triage_use_case(settings)
    app.state.rate_limiter = build_rate_limiter(settings)

    # Register routers (bare paths plus the /api aliases Jira automation rules use)
    for prefix in ("", "/api"):
        app.include_router(health_router, prefix=prefix)
        app.include_router(triage_router, prefix=prefix)

    @app.get("/")
    async def index(request: Request):
        """Usage help with a sample webhook body."""
        base = str(request.base_url).rstrip("/")
        return {
            "message": "Jira AI Triage API",
            "endpoints": {
                "GET /health": "Health check and status",
                "POST /triage": "AI triage analysis",
                "GET /": "This help message",
            },
            "healthCheck": f"{base}/health",
            "sampleRequest": {
                "method": "POST",
                "url": "/triage",
                "headers": {"Content-Type": "application/json"},
                "body": {
                    "webhookEvent": "jira:issue_created",
                    "issue": {
                        "key": "PROJ-123",
                        "fields": {
                            "summary": "Add bulk import feature for customer data",
                            "description": "Enterprise clients need to import large CSV files...",
                            "priority": {"name": "High"},
                            "reporter": {"displayName": "Sarah Johnson"},
                        },
                    },
                },
            },
        }

    logger.info(
        "Triage API ready (environment=%s, rate_limit=%s)",
        settings.environment,
        settings.rate_limit_per_minute if settings.rate_limit_enabled else "off",
    )
    return app


app = create_app()
