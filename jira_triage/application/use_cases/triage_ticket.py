"""TriageTicketUseCase — theme + scoring dispatch, local inference, aggregation."""

from __future__ import annotations

import asyncio
import logging
from functools import partial

from jira_triage.application.prompt_builder import build_theme_prompt, build_triage_prompt
from jira_triage.application.request_logger import RequestLogger
from jira_triage.application.response_parser import parse_analysis, parse_theme
from jira_triage.application.use_cases.dispatch_prompt import DispatchPromptUseCase
from jira_triage.domain.entities.analysis import AnalysisResult
from jira_triage.domain.entities.ticket import Ticket
from jira_triage.domain.entities.triage_outcome import TriageOutcome
from jira_triage.domain.exceptions import InvalidTicketError
from jira_triage.domain.policies.effort_inference import infer_effort
from jira_triage.domain.policies.issue_type import classify_issue_type
from jira_triage.domain.policies.priority import recommendation_for
from jira_triage.domain.policies.product_context import detect_product
from jira_triage.domain.policies.similarity import similarity_group
from jira_triage.domain.value_objects.enums import PriorityRecommendation, TriageStage
from jira_triage.domain.value_objects.theme import THEME_NOT_IDENTIFIED, is_identified

DEGRADED_RECOMMENDATION = PriorityRecommendation.ON_HOLD


def score_confidence(
    analysis: AnalysisResult | None,
    from_primary: bool,
    theme: str,
) -> float:
    """Confidence in the recommendation, 0.0 when there is no analysis.

    Starts at 0.9 (primary) or 0.8 (secondary) and loses 0.1 for each of:
    backend label disagreeing with the band, overall priority computed
    locally, theme not identified.
    """
    if analysis is None:
        return 0.0
    confidence = 0.9 if from_primary else 0.8
    if analysis.priority_recommendation != recommendation_for(analysis.scores.overall_priority):
        confidence -= 0.1
    if analysis.overall_computed_locally:
        confidence -= 0.1
    if not is_identified(theme):
        confidence -= 0.1
    return round(max(0.0, min(1.0, confidence)), 2)


class TriageTicketUseCase:
    """Orchestrates triage of a single ticket.

    Pipeline:
    1. Local inference: product context + effort estimate (no AI call)
    2. Theme classification dispatch (product vocabulary)
    3. Scoring dispatch (triage prompt)
    4. Feature/Bug classification and similarity group
    5. Aggregate into an immutable TriageOutcome

    Steps 2 and 3 share no data, so they run concurrently unless
    ``concurrent_dispatch`` is off (then theme goes first).
    """

    def __init__(
        self,
        dispatcher: DispatchPromptUseCase,
        *,
        scoring_temperature: float = 0.3,
        scoring_max_tokens: int = 2000,
        theme_temperature: float = 0.1,
        theme_max_tokens: int = 50,
        concurrent_dispatch: bool = True,
    ):
        self._dispatch = dispatcher
        self._scoring_temperature = scoring_temperature
        self._scoring_max_tokens = scoring_max_tokens
        self._theme_temperature = theme_temperature
        self._theme_max_tokens = theme_max_tokens
        self._concurrent = concurrent_dispatch

    async def execute(
        self, ticket: Ticket, request_log: RequestLogger | None = None
    ) -> TriageOutcome:
        """Triage *ticket*.

        Raises:
            InvalidTicketError: the ticket has no key (request-level failure).
        """
        if not ticket.key or not ticket.key.strip():
            raise InvalidTicketError("No issue key provided in webhook")

        log = request_log or RequestLogger()
        log.log_action("PROCESSING_START", issueKey=ticket.key)

        effort = infer_effort(ticket)
        product = detect_product(ticket)
        log.log_action(
            "CONTEXT_INFERRED",
            product=product.product.value,
            productConfidence=product.confidence.value,
            effortSize=effort.size.value,
        )

        theme_prompt = build_theme_prompt(ticket, product)
        triage_prompt = build_triage_prompt(ticket, product, effort)
        log.log_action(
            "PROMPT_BUILT",
            themePromptLength=len(theme_prompt),
            promptLength=len(triage_prompt),
        )

        theme_call = self._dispatch.execute(
            theme_prompt,
            partial(parse_theme, vocabulary=product.themes),
            stage=TriageStage.THEME,
            temperature=self._theme_temperature,
            max_tokens=self._theme_max_tokens,
            request_log=log,
        )
        scoring_call = self._dispatch.execute(
            triage_prompt,
            parse_analysis,
            stage=TriageStage.SCORING,
            temperature=self._scoring_temperature,
            max_tokens=self._scoring_max_tokens,
            request_log=log,
        )
        if self._concurrent:
            theme_result, scoring_result = await asyncio.gather(theme_call, scoring_call)
        else:
            theme_result = await theme_call
            scoring_result = await scoring_call

        theme = theme_result.value or THEME_NOT_IDENTIFIED
        log.log_action("THEME_CLASSIFIED", theme=theme, modelUsed=theme_result.model_used)

        analysis = scoring_result.value
        if analysis is not None:
            overall = analysis.scores.overall_priority
            recommendation = analysis.priority_recommendation
            expected = recommendation_for(overall)
            if recommendation != expected:
                # the backend label is kept; the mismatch only lowers confidence
                log.log_action(
                    "PRIORITY_LABEL_MISMATCH",
                    level=logging.WARNING,
                    score=overall,
                    backendLabel=recommendation.value,
                    bandLabel=expected.value,
                )
            log.log_action(
                "ANALYSIS_COMPLETE",
                modelUsed=scoring_result.model_used,
                responseTime=scoring_result.elapsed_ms,
                recommendation=recommendation.value,
                score=overall,
            )
        else:
            overall = 0
            recommendation = DEGRADED_RECOMMENDATION
            log.log_action(
                "ANALYSIS_FAILED",
                level=logging.WARNING,
                reason="AI unavailable",
                failures=list(scoring_result.failures),
            )

        classification = classify_issue_type(ticket)
        group = similarity_group(theme, analysis.similar_features if analysis else "")
        confidence = score_confidence(
            analysis,
            from_primary=not scoring_result.failures,
            theme=theme,
        )

        outcome = TriageOutcome(
            issue_key=ticket.key,
            theme=theme,
            analysis=analysis,
            theme_stage=theme_result.report(),
            scoring_stage=scoring_result.report(),
            classification=classification,
            similarity_group=group,
            effort=effort,
            product_context=product,
            recommendation=recommendation,
            importance=overall,
            confidence=confidence,
        )
        log.log_action(
            "PROCESSING_COMPLETE",
            recommendation=recommendation.value,
            classification=classification.value,
            similarityGroup=group,
            importance=overall,
            confidence=confidence,
        )
        return outcome
