"""Triage a Jira webhook payload from a JSON file.

Usage:
    python -m jira_triage.tools.triage_file payload.json
    python -m jira_triage.tools.triage_file payload.json --offline

``--offline`` runs only the local steps (product/effort inference, issue
type, prompts) and never calls a backend.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from jira_triage.adapters.webhook.issue_mapper import ticket_from_webhook
from jira_triage.application.prompt_builder import build_theme_prompt, build_triage_prompt
from jira_triage.application.request_logger import RequestLogger
from jira_triage.config import settings
from jira_triage.domain.exceptions import TriageError
from jira_triage.domain.policies.effort_inference import infer_effort
from jira_triage.domain.policies.issue_type import classify_issue_type
from jira_triage.domain.policies.product_context import detect_product
from jira_triage.infrastructure.api.dependencies import build_triage_use_case

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


def _offline_report(payload: dict, show_prompts: bool) -> dict:
    ticket, webhook_event = ticket_from_webhook(payload)
    effort = infer_effort(ticket)
    product = detect_product(ticket)
    report = {
        "issueKey": ticket.key,
        "webhookEvent": webhook_event,
        "classification": classify_issue_type(ticket).value,
        "product": {"name": product.product.value, "confidence": product.confidence.value},
        "effort": {
            "size": effort.size.value,
            "score": effort.score,
            "reasoning": effort.reasoning,
        },
    }
    if show_prompts:
        report["themePrompt"] = build_theme_prompt(ticket, product)
        report["triagePrompt"] = build_triage_prompt(ticket, product, effort)
    return report


async def _online_report(payload: dict) -> dict:
    ticket, _ = ticket_from_webhook(payload)
    request_log = RequestLogger()
    outcome = await build_triage_use_case(settings).execute(ticket, request_log)
    return {
        "recommendation": outcome.recommendation.value,
        "classification": outcome.classification.value,
        "themes": outcome.themes,
        "similarity_group": outcome.similarity_group,
        "importance": outcome.importance,
        "confidence": outcome.confidence,
        "notes": outcome.notes,
        "requestId": request_log.request_id,
        "issueKey": outcome.issue_key,
        "result": outcome.to_result_dict(),
        "processingTime": request_log.processing_time_ms(),
    }


def main():
    parser = argparse.ArgumentParser(description="Triage a Jira webhook payload file")
    parser.add_argument("payload", type=str, help="Path to a webhook JSON file")
    parser.add_argument(
        "--offline", action="store_true",
        help="Only run local inference; do not call any backend",
    )
    parser.add_argument(
        "--show-prompts", action="store_true",
        help="Include the generated prompts in offline output",
    )
    args = parser.parse_args()

    path = Path(args.payload)
    if not path.is_file():
        logger.error("Payload file not found: %s", path)
        sys.exit(1)

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        if args.offline:
            report = _offline_report(payload, args.show_prompts)
        else:
            report = asyncio.run(_online_report(payload))
    except (json.JSONDecodeError, TriageError) as e:
        logger.error("Cannot triage %s: %s", path, e)
        sys.exit(1)

    print(json.dumps(report, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
