"""Tests for domain entities."""

import dataclasses

import pytest

from jira_triage.domain.entities.analysis import AnalysisResult, AnalysisScores
from jira_triage.domain.entities.effort_estimate import EffortEstimate
from jira_triage.domain.entities.ticket import Ticket
from jira_triage.domain.entities.triage_outcome import StageReport, TriageOutcome
from jira_triage.domain.policies.product_context import detect_product
from jira_triage.domain.value_objects.enums import (
    EffortSize,
    IssueClassification,
    PriorityRecommendation,
)
from jira_triage.domain.value_objects.theme import THEME_NOT_IDENTIFIED


def _analysis(**overrides) -> AnalysisResult:
    fields = dict(
        scores=AnalysisScores(
            business_impact=85, effort_size="M", effort_score=60,
            strategic_fit=75, cross_client_value=80, overall_priority=78,
        ),
        priority_recommendation=PriorityRecommendation.STANDARD,
        key_insights=("High impact",),
        risks=("Scope creep",),
        opportunities=("Upsell",),
        recommended_next_steps=("Validate requirements", "Size with engineering"),
        similar_features="CSV export",
        executive_summary="Worth doing next quarter.",
    )
    fields.update(overrides)
    return AnalysisResult(**fields)


def _outcome(analysis: AnalysisResult | None, theme: str = "Data Import") -> TriageOutcome:
    ticket = Ticket(key="PROJ-1", title="Bulk import")
    return TriageOutcome(
        issue_key=ticket.key,
        theme=theme,
        analysis=analysis,
        theme_stage=StageReport(model_used="Gemini Flash 2.0", elapsed_ms=12),
        scoring_stage=StageReport(
            model_used="Claude Sonnet" if analysis else None,
            elapsed_ms=40,
            failures=("Gemini Flash 2.0: timed out after 30s",),
        ),
        classification=IssueClassification.FEATURE,
        similarity_group="SIM-0000000001",
        effort=EffortEstimate(size=EffortSize.M, score=60, reasoning="r", size_description="d"),
        product_context=detect_product(ticket),
        recommendation=(
            analysis.priority_recommendation if analysis else PriorityRecommendation.ON_HOLD
        ),
        importance=analysis.scores.overall_priority if analysis else 0,
        confidence=0.8 if analysis else 0.0,
    )


# ─── Ticket ─────────────────────────────────────────────────────────


def test_ticket_searchable_text_handles_missing_fields():
    assert Ticket(key="PROJ-1").searchable_text() == " "
    assert Ticket(key="PROJ-1", title="Dark MODE").searchable_text() == "dark mode "


def test_ticket_lowered_components_and_labels():
    t = Ticket(key="PROJ-1", components=("User Interface", ""), labels=("UI",))
    assert t.lowered_components() == ["user interface"]
    assert t.lowered_labels() == ["ui"]


def test_ticket_is_frozen():
    t = Ticket(key="PROJ-1")
    with pytest.raises(dataclasses.FrozenInstanceError):
        t.key = "PROJ-2"


# ─── AnalysisResult ─────────────────────────────────────────────────


def test_analysis_to_dict_shape():
    data = _analysis().to_dict()
    assert data["scores"]["overall_priority"] == 78
    assert data["priority_recommendation"] == "Standard"
    assert "on_hold_reasoning" not in data


def test_analysis_to_dict_includes_on_hold_reasoning():
    data = _analysis(on_hold_reasoning="Revisit after Q3").to_dict()
    assert data["on_hold_reasoning"] == "Revisit after Q3"


def test_analysis_list_fields_are_immutable():
    analysis = _analysis()
    with pytest.raises(AttributeError):
        analysis.risks.append("Late change")
    assert analysis.risks == ("Scope creep",)
    assert _analysis().key_insights == ("High impact",)


def test_analysis_list_fields_default_to_empty_tuples():
    analysis = AnalysisResult(
        scores=_analysis().scores,
        priority_recommendation=PriorityRecommendation.ON_HOLD,
    )
    assert analysis.key_insights == ()
    assert analysis.risks == ()
    assert analysis.to_dict()["recommended_next_steps"] == []


# ─── TriageOutcome ──────────────────────────────────────────────────


def test_outcome_notes_summary_and_steps():
    notes = _outcome(_analysis()).notes
    assert notes.startswith("Worth doing next quarter.")
    assert "Next steps: Validate requirements; Size with engineering" in notes


def test_outcome_notes_on_hold():
    notes = _outcome(_analysis(on_hold_reasoning="Needs a second client")).notes
    assert "On hold: Needs a second client" in notes


def test_outcome_notes_without_analysis():
    assert _outcome(None).notes == "AI analysis unavailable - manual review needed"


def test_outcome_themes():
    assert _outcome(_analysis()).themes == ["Data Import"]
    assert _outcome(_analysis(), theme=THEME_NOT_IDENTIFIED).themes == []


def test_outcome_result_dict():
    result = _outcome(_analysis()).to_result_dict()
    assert result["theme"] == "Data Import"
    assert result["themeModelUsed"] == "Gemini Flash 2.0"
    assert result["modelUsed"] == "Claude Sonnet"
    assert result["failures"]["scoring"] == ["Gemini Flash 2.0: timed out after 30s"]
    assert result["effort"]["size"] == "M"
    assert result["analysis"]["scores"]["business_impact"] == 85


def test_outcome_result_dict_without_analysis():
    result = _outcome(None).to_result_dict()
    assert result["analysis"] is None
    assert result["modelUsed"] is None


def test_stage_report_succeeded():
    assert StageReport(model_used="Claude Sonnet", elapsed_ms=1).succeeded
    assert not StageReport(model_used=None, elapsed_ms=1).succeeded
