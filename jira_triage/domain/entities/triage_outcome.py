"""TriageOutcome — the aggregated result of triaging one ticket."""

from dataclasses import dataclass, field
from typing import Any

from jira_triage.domain.entities.analysis import AnalysisResult
from jira_triage.domain.entities.effort_estimate import EffortEstimate
from jira_triage.domain.entities.product_context import ProductContext
from jira_triage.domain.value_objects.enums import (
    IssueClassification,
    PriorityRecommendation,
)
from jira_triage.domain.value_objects.theme import is_identified


@dataclass(frozen=True)
class StageReport:
    """Which backend answered one dispatch stage, and how long it took."""

    model_used: str | None
    elapsed_ms: int
    failures: tuple[str, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.model_used is not None


@dataclass(frozen=True)
class TriageOutcome:
    issue_key: str
    theme: str
    analysis: AnalysisResult | None
    theme_stage: StageReport
    scoring_stage: StageReport
    classification: IssueClassification
    similarity_group: str
    effort: EffortEstimate
    product_context: ProductContext
    recommendation: PriorityRecommendation
    importance: int
    confidence: float
    duplicate_keys: tuple[str, ...] = field(default_factory=tuple)

    @property
    def themes(self) -> list[str]:
        return [self.theme] if is_identified(self.theme) else []

    @property
    def notes(self) -> str:
        if self.analysis is None:
            return "AI analysis unavailable - manual review needed"
        parts = [self.analysis.executive_summary.strip()]
        if self.analysis.recommended_next_steps:
            steps = "; ".join(self.analysis.recommended_next_steps)
            parts.append(f"Next steps: {steps}")
        if self.analysis.on_hold_reasoning:
            parts.append(f"On hold: {self.analysis.on_hold_reasoning}")
        return "\n".join(p for p in parts if p)

    def to_result_dict(self) -> dict[str, Any]:
        """Detailed per-stage view, returned under ``result`` by the API."""
        return {
            "theme": self.theme,
            "themeModelUsed": self.theme_stage.model_used,
            "themeResponseTime": self.theme_stage.elapsed_ms,
            "modelUsed": self.scoring_stage.model_used,
            "responseTime": self.scoring_stage.elapsed_ms,
            "failures": {
                "theme": list(self.theme_stage.failures),
                "scoring": list(self.scoring_stage.failures),
            },
            "product": {
                "name": self.product_context.product.value,
                "confidence": self.product_context.confidence.value,
            },
            "effort": {
                "size": self.effort.size.value,
                "score": self.effort.score,
                "reasoning": self.effort.reasoning,
                "description": self.effort.size_description,
            },
            "analysis": self.analysis.to_dict() if self.analysis else None,
        }
