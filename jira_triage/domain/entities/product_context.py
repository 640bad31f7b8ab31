"""Product context — which product line a ticket belongs to, plus static knowledge."""

from dataclasses import dataclass

from jira_triage.domain.value_objects.enums import ConfidenceLevel, Product


@dataclass(frozen=True)
class ProductKnowledge:
    overview: str
    capabilities: tuple[str, ...]
    relevant_features: tuple[str, ...]
    themes: tuple[str, ...]


@dataclass(frozen=True)
class ProductContext:
    product: Product
    confidence: ConfidenceLevel
    knowledge: ProductKnowledge

    @property
    def themes(self) -> tuple[str, ...]:
        return self.knowledge.themes
