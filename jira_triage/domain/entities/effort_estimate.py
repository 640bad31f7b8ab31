"""Effort estimate — locally inferred implementation size for a ticket."""

from dataclasses import dataclass

from jira_triage.domain.value_objects.enums import EffortSize


@dataclass(frozen=True)
class EffortEstimate:
    size: EffortSize
    score: int
    reasoning: str
    size_description: str
