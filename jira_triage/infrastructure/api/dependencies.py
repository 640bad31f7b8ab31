"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

import logging

from fastapi import Request

from jira_triage.adapters.llm.claude_adapter import ClaudeAdapter
from jira_triage.adapters.llm.gemini_adapter import GeminiAdapter
from jira_triage.adapters.rate_limit.sliding_window import SlidingWindowRateLimiter
from jira_triage.application.ports.llm_port import LLMPort
from jira_triage.application.ports.rate_limiter import RateLimiter
from jira_triage.application.use_cases.dispatch_prompt import DispatchPromptUseCase
from jira_triage.application.use_cases.triage_ticket import TriageTicketUseCase
from jira_triage.config import Settings

logger = logging.getLogger(__name__)


def build_backends(settings: Settings) -> tuple[LLMPort | None, LLMPort | None]:
    """Return (primary, secondary); a backend without a credential is None."""
    primary: LLMPort | None = None
    secondary: LLMPort | None = None

    if settings.gemini_api_key:
        primary = GeminiAdapter(settings.gemini_api_key, settings.gemini_model)
    else:
        logger.warning("GEMINI_API_KEY is not set; primary backend disabled")

    if settings.claude_api_key:
        secondary = ClaudeAdapter(settings.claude_api_key, settings.claude_model)
    else:
        logger.warning("CLAUDE_API_KEY is not set; secondary backend disabled")

    return primary, secondary


def build_triage_use_case(
    settings: Settings,
    primary: LLMPort | None = None,
    secondary: LLMPort | None = None,
) -> TriageTicketUseCase:
    if primary is None and secondary is None:
        primary, secondary = build_backends(settings)
    dispatcher = DispatchPromptUseCase(
        primary=primary,
        secondary=secondary,
        timeout_seconds=settings.llm_timeout_seconds,
    )
    return TriageTicketUseCase(
        dispatcher,
        scoring_temperature=settings.scoring_temperature,
        scoring_max_tokens=settings.scoring_max_tokens,
        theme_temperature=settings.theme_temperature,
        theme_max_tokens=settings.theme_max_tokens,
        concurrent_dispatch=settings.concurrent_dispatch,
    )


def build_rate_limiter(settings: Settings) -> RateLimiter | None:
    if not settings.rate_limit_enabled:
        return None
    return SlidingWindowRateLimiter(max_requests=settings.rate_limit_per_minute)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_triage_uc(request: Request) -> TriageTicketUseCase:
    return request.app.state.triage_uc


def get_rate_limiter(request: Request) -> RateLimiter | None:
    return request.app.state.rate_limiter
