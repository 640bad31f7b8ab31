"""Triage endpoint — Jira webhook in, priority recommendation out."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from jira_triage.adapters.webhook.issue_mapper import ticket_from_webhook
from jira_triage.application.ports.rate_limiter import RateLimiter
from jira_triage.application.request_logger import RequestLogger
from jira_triage.application.use_cases.triage_ticket import TriageTicketUseCase
from jira_triage.domain.entities.triage_outcome import TriageOutcome
from jira_triage.domain.exceptions import TriageError
from jira_triage.infrastructure.api.dependencies import get_rate_limiter, get_triage_uc

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = 60

router = APIRouter(tags=["triage"])


@router.post("/triage")
async def triage(
    request: Request,
    triage_uc: TriageTicketUseCase = Depends(get_triage_uc),
    rate_limiter: RateLimiter | None = Depends(get_rate_limiter),
):
    """Triage the ticket carried by a Jira webhook."""
    request_log = RequestLogger()
    client = request.client.host if request.client else "unknown"

    if rate_limiter is not None and not rate_limiter.allow(client):
        request_log.log_action("RATE_LIMITED", level=logging.WARNING, client=client)
        return JSONResponse(
            status_code=429,
            headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
            content={
                "error": "Too many requests, please retry later",
                "retryAfter": RETRY_AFTER_SECONDS,
            },
        )

    body = await request.body()
    request_log.log_action("WEBHOOK_RECEIVED", contentLength=len(body), client=client)

    try:
        payload = await request.json()
        ticket, webhook_event = ticket_from_webhook(payload)
        request_log.log_action(
            "WEBHOOK_PARSED", issueKey=ticket.key, webhookEvent=webhook_event,
        )
        outcome = await triage_uc.execute(ticket, request_log)
    except (TriageError, ValueError) as e:
        request_log.log_action("ERROR", level=logging.ERROR, error=str(e))
        return _error_response(request_log, e)
    except Exception as e:
        logger.exception("Unexpected error triaging request %s", request_log.request_id)
        request_log.log_action("ERROR", level=logging.ERROR, error=str(e))
        return _error_response(request_log, e)

    return _outcome_to_dict(outcome, request_log)


@router.options("/triage")
async def triage_preflight():
    return Response(status_code=200)


def _error_response(request_log: RequestLogger, error: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "status": "error",
            "requestId": request_log.request_id,
            "error": str(error),
        },
    )


def _outcome_to_dict(outcome: TriageOutcome, request_log: RequestLogger) -> dict:
    """Convert a TriageOutcome to the webhook response body."""
    return {
        "recommendation": outcome.recommendation.value,
        "classification": outcome.classification.value,
        "themes": outcome.themes,
        "similarity_group": outcome.similarity_group,
        "duplicate_keys": list(outcome.duplicate_keys),
        "importance": outcome.importance,
        "confidence": outcome.confidence,
        "notes": outcome.notes,
        "status": "success",
        "requestId": request_log.request_id,
        "issueKey": outcome.issue_key,
        "result": outcome.to_result_dict(),
        "processingTime": request_log.processing_time_ms(),
    }
