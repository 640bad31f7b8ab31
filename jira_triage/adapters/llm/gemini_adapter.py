"""Gemini adapter — implements LLMPort using the Google GenAI SDK."""

from __future__ import annotations

import logging
from typing import Any

from google import genai
from google.genai import types

from jira_triage.application.ports.llm_port import LLMPort
from jira_triage.domain.exceptions import BackendUnavailableError

logger = logging.getLogger(__name__)


class GeminiAdapter(LLMPort):
    """Gemini implementation of LLMPort (primary backend)."""

    label = "Gemini Flash 2.0"

    def __init__(self, api_key: str, model: str, client: Any | None = None):
        if not api_key:
            raise ValueError("GEMINI_API_KEY must be configured.")
        self._client = client or genai.Client(api_key=api_key)
        self._model = model

    async def generate(self, prompt: str, *, temperature: float, max_tokens: int) -> str:
        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=temperature,
                max_output_tokens=max_tokens,
            ),
        )
        text = getattr(response, "text", None)
        if isinstance(text, str) and text.strip():
            logger.debug("Gemini returned %d characters", len(text))
            return text
        raise BackendUnavailableError("Gemini response contained no text")
