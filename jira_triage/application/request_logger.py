"""RequestLogger — per-request audit trail with a correlation id."""

from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger("jira_triage.audit")


class RequestLogger:
    """Emits one JSON line per pipeline action, tagged with the request id.

    Entries are also kept in memory so callers (CLI, tests) can inspect the
    sequence of actions for a request.
    """

    def __init__(self, request_id: str | None = None):
        self.request_id = request_id or str(uuid.uuid4())
        self.entries: list[dict[str, Any]] = []
        self._started = time.perf_counter()

    def log_action(self, action: str, level: int = logging.INFO, **details: Any) -> None:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "requestId": self.request_id,
            "action": action,
            "details": details,
        }
        self.entries.append(entry)
        logger.log(level, json.dumps(entry, default=str, ensure_ascii=False))

    def actions(self) -> list[str]:
        return [e["action"] for e in self.entries]

    def processing_time_ms(self) -> int:
        return int((time.perf_counter() - self._started) * 1000)
