"""Analysis result — structured scoring parsed from a backend reply."""

from dataclasses import dataclass
from typing import Any

from jira_triage.domain.value_objects.enums import PriorityRecommendation


@dataclass(frozen=True)
class AnalysisScores:
    business_impact: int
    effort_size: str | None
    effort_score: int | None
    strategic_fit: int
    cross_client_value: int
    overall_priority: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "business_impact": self.business_impact,
            "effort_size": self.effort_size,
            "effort_score": self.effort_score,
            "strategic_fit": self.strategic_fit,
            "cross_client_value": self.cross_client_value,
            "overall_priority": self.overall_priority,
        }


@dataclass(frozen=True)
class AnalysisResult:
    scores: AnalysisScores
    priority_recommendation: PriorityRecommendation
    key_insights: tuple[str, ...] = ()
    risks: tuple[str, ...] = ()
    opportunities: tuple[str, ...] = ()
    recommended_next_steps: tuple[str, ...] = ()
    similar_features: str = ""
    executive_summary: str = ""
    on_hold_reasoning: str | None = None
    overall_computed_locally: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Render back to the JSON shape the backends are asked to produce."""
        data: dict[str, Any] = {
            "scores": self.scores.to_dict(),
            "priority_recommendation": self.priority_recommendation.value,
            "key_insights": list(self.key_insights),
            "risks": list(self.risks),
            "opportunities": list(self.opportunities),
            "similar_features": self.similar_features,
            "recommended_next_steps": list(self.recommended_next_steps),
            "executive_summary": self.executive_summary,
        }
        if self.on_hold_reasoning is not None:
            data["on_hold_reasoning"] = self.on_hold_reasoning
        return data
