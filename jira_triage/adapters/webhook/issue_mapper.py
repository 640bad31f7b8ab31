"""Jira webhook → Ticket mapping — tolerant of missing and oddly shaped fields."""

from __future__ import annotations

from typing import Any

from jira_triage.domain.entities.ticket import Ticket
from jira_triage.domain.exceptions import InvalidTicketError


def clean_string(value: Any) -> str | None:
    """Strip whitespace and return None for empty or non-string values."""
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    return value if value else None


def flatten_adf(node: Any) -> str:
    """Flatten an Atlassian Document Format node into plain text.

    Jira Cloud v3 webhooks send descriptions as ADF documents instead of
    strings; paragraphs become newlines.
    """
    if isinstance(node, str):
        return node
    if isinstance(node, list):
        return "".join(flatten_adf(child) for child in node)
    if not isinstance(node, dict):
        return ""
    if node.get("type") == "text":
        return str(node.get("text", ""))
    if node.get("type") == "hardBreak":
        return "\n"
    text = flatten_adf(node.get("content", []))
    if node.get("type") in ("paragraph", "heading", "listItem", "codeBlock"):
        text += "\n"
    return text


def _named(value: Any) -> str | None:
    """Jira wraps many values as ``{"name": ...}`` / ``{"displayName": ...}``."""
    if isinstance(value, dict):
        return clean_string(value.get("displayName") or value.get("name"))
    return clean_string(value)


def _names(values: Any) -> tuple[str, ...]:
    if not isinstance(values, list):
        return ()
    names = (_named(v) for v in values)
    return tuple(n for n in names if n)


def ticket_from_issue(issue: Any) -> Ticket:
    """Build a Ticket from the ``issue`` object of a Jira webhook.

    Raises:
        InvalidTicketError: *issue* is not an object or has no ``key``.
    """
    if not isinstance(issue, dict):
        raise InvalidTicketError("No issue key provided in webhook")
    key = clean_string(issue.get("key"))
    if not key:
        raise InvalidTicketError("No issue key provided in webhook")

    fields = issue.get("fields")
    if not isinstance(fields, dict):
        fields = {}

    description = fields.get("description")
    if description is not None and not isinstance(description, str):
        description = flatten_adf(description)

    return Ticket(
        key=key,
        title=clean_string(fields.get("summary")),
        description=clean_string(description),
        reporter=_named(fields.get("reporter")),
        created=clean_string(fields.get("created")),
        priority=_named(fields.get("priority")),
        components=_names(fields.get("components")),
        labels=_names(fields.get("labels")),
        status=_named(fields.get("status")),
    )


def ticket_from_webhook(payload: Any) -> tuple[Ticket, str | None]:
    """Return the ticket and the ``webhookEvent`` name from a webhook body."""
    if not isinstance(payload, dict):
        raise InvalidTicketError("Webhook body must be a JSON object")
    return ticket_from_issue(payload.get("issue")), clean_string(payload.get("webhookEvent"))
