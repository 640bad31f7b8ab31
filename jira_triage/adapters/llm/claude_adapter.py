"""Claude adapter — implements LLMPort using the Anthropic Messages API."""

from __future__ import annotations

import logging
from typing import Any

from anthropic import AsyncAnthropic

from jira_triage.application.ports.llm_port import LLMPort
from jira_triage.domain.exceptions import BackendUnavailableError

logger = logging.getLogger(__name__)


class ClaudeAdapter(LLMPort):
    """Claude implementation of LLMPort (secondary backend)."""

    label = "Claude Sonnet"

    def __init__(self, api_key: str, model: str, client: Any | None = None):
        if not api_key:
            raise ValueError("CLAUDE_API_KEY must be configured.")
        self._client = client or AsyncAnthropic(api_key=api_key)
        self._model = model

    async def generate(self, prompt: str, *, temperature: float, max_tokens: int) -> str:
        response = await self._client.messages.create(
            model=self._model,
            max_tokens=max_tokens,
            temperature=temperature,
            messages=[{"role": "user", "content": prompt}],
        )
        text = "".join(
            getattr(block, "text", "")
            for block in (response.content or [])
            if getattr(block, "type", "text") == "text"
        )
        if text.strip():
            logger.debug("Claude returned %d characters", len(text))
            return text
        raise BackendUnavailableError("Claude response contained no text")
