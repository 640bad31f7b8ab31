"""Tests for TriageTicketUseCase with in-memory fakes."""

from __future__ import annotations

import json

import pytest

from jira_triage.application.ports.llm_port import LLMPort
from jira_triage.application.request_logger import RequestLogger
from jira_triage.application.use_cases.dispatch_prompt import DispatchPromptUseCase
from jira_triage.application.use_cases.triage_ticket import (
    TriageTicketUseCase,
    score_confidence,
)
from jira_triage.domain.entities.ticket import Ticket
from jira_triage.domain.exceptions import InvalidTicketError
from jira_triage.domain.policies.similarity import similarity_group
from jira_triage.domain.value_objects.enums import (
    IssueClassification,
    PriorityRecommendation,
)
from jira_triage.domain.value_objects.theme import THEME_NOT_IDENTIFIED

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeLLM(LLMPort):
    """Answers theme prompts with *theme* and scoring prompts with *analysis*."""

    def __init__(self, label="Fake", theme="Data Management", analysis=None, error=None):
        self.label = label
        self._theme = theme
        self._analysis = analysis
        self._error = error
        self.prompts: list[str] = []

    async def generate(self, prompt, *, temperature, max_tokens):
        self.prompts.append(prompt)
        if self._error is not None:
            raise self._error
        if "ALLOWED THEMES" in prompt:
            return self._theme
        return "```json\n" + json.dumps(self._analysis) + "\n```"


def make_analysis(**score_overrides) -> dict:
    scores = {
        "business_impact": 85,
        "effort_size": "M",
        "effort_score": 60,
        "strategic_fit": 75,
        "cross_client_value": 80,
        "overall_priority": 78,
    }
    scores.update(score_overrides)
    scores = {k: v for k, v in scores.items() if v is not None}
    return {
        "scores": scores,
        "priority_recommendation": "Standard",
        "key_insights": ["Broad demand"],
        "risks": ["Data quality"],
        "opportunities": ["Faster onboarding"],
        "similar_features": "Existing CSV export",
        "recommended_next_steps": ["Validate file sizes"],
        "executive_summary": "Bulk import unblocks enterprise onboarding.",
    }


def make_uc(primary, secondary=None, concurrent=True) -> TriageTicketUseCase:
    dispatcher = DispatchPromptUseCase(primary=primary, secondary=secondary, timeout_seconds=5)
    return TriageTicketUseCase(dispatcher, concurrent_dispatch=concurrent)


# ─── End-to-end ─────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_full_triage(enterprise_ticket):
    primary = FakeLLM("Gemini Flash 2.0", analysis=make_analysis())
    log = RequestLogger()

    outcome = await make_uc(primary).execute(enterprise_ticket, log)

    assert outcome.issue_key == "PROJ-123"
    assert outcome.recommendation == PriorityRecommendation.STANDARD
    assert outcome.importance == 78
    assert outcome.confidence == 0.9
    assert outcome.classification == IssueClassification.FEATURE
    assert outcome.themes == ["Data Management"]
    assert outcome.similarity_group == similarity_group("Data Management", "Existing CSV export")
    assert outcome.notes.startswith("Bulk import unblocks enterprise onboarding.")
    assert outcome.scoring_stage.model_used == "Gemini Flash 2.0"
    assert outcome.theme_stage.model_used == "Gemini Flash 2.0"
    assert outcome.duplicate_keys == ()

    actions = log.actions()
    assert actions[0] == "PROCESSING_START"
    assert "CONTEXT_INFERRED" in actions
    assert "ANALYSIS_COMPLETE" in actions
    assert actions[-1] == "PROCESSING_COMPLETE"


@pytest.mark.asyncio
async def test_sparse_ticket_still_scores():
    analysis = make_analysis(
        business_impact=90, strategic_fit=85, cross_client_value=80,
        effort_size="S", effort_score=None, overall_priority=None,
    )
    analysis["priority_recommendation"] = "Fast Track"
    primary = FakeLLM(theme="Performance & Scalability", analysis=analysis)

    outcome = await make_uc(primary).execute(Ticket(key="PROJ-9", title="Something"))

    assert isinstance(outcome.analysis.scores.overall_priority, int)
    assert outcome.importance == 85
    assert outcome.recommendation == PriorityRecommendation.FAST_TRACK
    # computed locally costs 0.1
    assert outcome.confidence == 0.8


@pytest.mark.asyncio
async def test_prompts_use_placeholders_for_missing_fields():
    primary = FakeLLM(analysis=make_analysis())
    await make_uc(primary).execute(Ticket(key="PROJ-9"))
    for prompt in primary.prompts:
        assert "No title provided" in prompt
        assert "Title: None" not in prompt


@pytest.mark.asyncio
async def test_secondary_answer_lowers_confidence(enterprise_ticket):
    primary = FakeLLM("Gemini Flash 2.0", error=RuntimeError("quota"))
    secondary = FakeLLM("Claude Sonnet", analysis=make_analysis())

    outcome = await make_uc(primary, secondary).execute(enterprise_ticket)

    assert outcome.scoring_stage.model_used == "Claude Sonnet"
    assert outcome.scoring_stage.failures == ("Gemini Flash 2.0: RuntimeError: quota",)
    assert outcome.confidence == 0.8


@pytest.mark.asyncio
async def test_both_backends_down_degrades(enterprise_ticket):
    primary = FakeLLM("Gemini Flash 2.0", error=RuntimeError("down"))
    secondary = FakeLLM("Claude Sonnet", error=RuntimeError("down"))
    log = RequestLogger()

    outcome = await make_uc(primary, secondary).execute(enterprise_ticket, log)

    assert outcome.analysis is None
    assert outcome.recommendation == PriorityRecommendation.ON_HOLD
    assert outcome.importance == 0
    assert outcome.confidence == 0.0
    assert outcome.theme == THEME_NOT_IDENTIFIED
    assert outcome.themes == []
    assert outcome.notes == "AI analysis unavailable - manual review needed"
    assert outcome.to_result_dict()["analysis"] is None
    assert "ANALYSIS_FAILED" in log.actions()
    assert log.actions().count("BOTH_MODELS_FAILED") == 2


@pytest.mark.asyncio
async def test_label_mismatch_keeps_backend_label(enterprise_ticket):
    analysis = make_analysis()
    analysis["priority_recommendation"] = "Fast Track"
    log = RequestLogger()

    outcome = await make_uc(FakeLLM(analysis=analysis)).execute(enterprise_ticket, log)

    assert outcome.recommendation == PriorityRecommendation.FAST_TRACK
    assert outcome.importance == 78
    assert outcome.confidence == 0.8
    assert "PRIORITY_LABEL_MISMATCH" in log.actions()


@pytest.mark.asyncio
async def test_unidentified_theme(enterprise_ticket):
    primary = FakeLLM(theme="THEME NOT IDENTIFIED", analysis=make_analysis())

    outcome = await make_uc(primary).execute(enterprise_ticket)

    assert outcome.themes == []
    assert outcome.confidence == 0.8


@pytest.mark.asyncio
async def test_theme_outside_vocabulary_falls_back_to_secondary(enterprise_ticket):
    primary = FakeLLM("Gemini Flash 2.0", theme="Billing", analysis=make_analysis())
    secondary = FakeLLM("Claude Sonnet", theme="Data Management", analysis=make_analysis())

    outcome = await make_uc(primary, secondary).execute(enterprise_ticket)

    assert outcome.theme_stage.model_used == "Claude Sonnet"
    assert outcome.scoring_stage.model_used == "Gemini Flash 2.0"
    assert outcome.themes == ["Data Management"]


@pytest.mark.asyncio
async def test_sequential_dispatch_sends_theme_first(enterprise_ticket):
    primary = FakeLLM(analysis=make_analysis())

    await make_uc(primary, concurrent=False).execute(enterprise_ticket)

    assert len(primary.prompts) == 2
    assert "ALLOWED THEMES" in primary.prompts[0]
    assert "ANALYSIS FRAMEWORK" in primary.prompts[1]


@pytest.mark.asyncio
async def test_missing_key_raises():
    uc = make_uc(FakeLLM(analysis=make_analysis()))
    with pytest.raises(InvalidTicketError):
        await uc.execute(Ticket(key="  ", title="No key"))


# ─── score_confidence ───────────────────────────────────────────────


def test_confidence_without_analysis():
    assert score_confidence(None, from_primary=True, theme="Data Import") == 0.0
