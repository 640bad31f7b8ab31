"""DispatchPromptUseCase — primary backend first, secondary once, then give up."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from jira_triage.application.ports.llm_port import LLMPort
from jira_triage.application.request_logger import RequestLogger
from jira_triage.domain.entities.triage_outcome import StageReport
from jira_triage.domain.value_objects.enums import TriageStage

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class DispatchResult(Generic[T]):
    value: T | None
    model_used: str | None
    elapsed_ms: int
    failures: tuple[str, ...] = ()

    def report(self) -> StageReport:
        return StageReport(
            model_used=self.model_used,
            elapsed_ms=self.elapsed_ms,
            failures=self.failures,
        )


class DispatchPromptUseCase:
    """Sends one prompt to the primary backend, falling back to the secondary.

    A provider that is ``None`` was not configured (no credential) and counts
    as a failed attempt. Exceptions, timeouts and replies the parser rejects
    all trigger the fallback. There is no retry beyond primary → secondary.
    """

    def __init__(
        self,
        primary: LLMPort | None,
        secondary: LLMPort | None,
        timeout_seconds: float = 30.0,
    ):
        self._primary = primary
        self._secondary = secondary
        self._timeout = timeout_seconds

    async def execute(
        self,
        prompt: str,
        parser: Callable[[str], T | None],
        *,
        stage: TriageStage,
        temperature: float,
        max_tokens: int,
        request_log: RequestLogger,
    ) -> DispatchResult[T]:
        started = time.perf_counter()
        failures: list[str] = []

        for role, provider in (("primary", self._primary), ("secondary", self._secondary)):
            value, reason = await self._attempt(
                provider, role, prompt, parser,
                stage=stage, temperature=temperature,
                max_tokens=max_tokens, request_log=request_log,
            )
            if value is not None:
                return DispatchResult(
                    value=value,
                    model_used=provider.label,
                    elapsed_ms=_elapsed_ms(started),
                    failures=tuple(failures),
                )
            name = provider.label if provider is not None else role
            failures.append(f"{name}: {reason}")

        request_log.log_action(
            "BOTH_MODELS_FAILED",
            level=logging.ERROR,
            stage=stage.value,
            failures=failures,
        )
        return DispatchResult(
            value=None,
            model_used=None,
            elapsed_ms=_elapsed_ms(started),
            failures=tuple(failures),
        )

    async def _attempt(
        self,
        provider: LLMPort | None,
        role: str,
        prompt: str,
        parser: Callable[[str], T | None],
        *,
        stage: TriageStage,
        temperature: float,
        max_tokens: int,
        request_log: RequestLogger,
    ) -> tuple[T | None, str | None]:
        if provider is None:
            reason = "backend not configured"
            request_log.log_action(
                "BACKEND_SKIPPED", level=logging.WARNING,
                stage=stage.value, role=role, reason=reason,
            )
            return None, reason

        request_log.log_action(
            "BACKEND_ATTEMPT", stage=stage.value, role=role, model=provider.label,
        )
        call_started = time.perf_counter()
        try:
            raw = await asyncio.wait_for(
                provider.generate(prompt, temperature=temperature, max_tokens=max_tokens),
                timeout=self._timeout,
            )
            value = parser(raw)
        except asyncio.TimeoutError:
            reason = f"timed out after {self._timeout:g}s"
        except Exception as e:
            logger.debug("Backend %s raised", provider.label, exc_info=True)
            reason = f"{type(e).__name__}: {e}"
        else:
            if value is not None:
                request_log.log_action(
                    "BACKEND_SUCCESS", stage=stage.value, role=role,
                    model=provider.label, responseTime=_elapsed_ms(call_started),
                )
                return value, None
            reason = "response could not be parsed"

        request_log.log_action(
            "BACKEND_FAILED", level=logging.WARNING, stage=stage.value, role=role,
            model=provider.label, reason=reason, responseTime=_elapsed_ms(call_started),
        )
        return None, reason


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)
