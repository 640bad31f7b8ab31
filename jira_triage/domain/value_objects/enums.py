"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class EffortSize(str, Enum):
    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"

    @property
    def score(self) -> int:
        return EFFORT_SCORES[self]


EFFORT_SCORES: dict[EffortSize, int] = {
    EffortSize.XS: 100,
    EffortSize.S: 80,
    EffortSize.M: 60,
    EffortSize.L: 40,
    EffortSize.XL: 20,
}


class PriorityRecommendation(str, Enum):
    FAST_TRACK = "Fast Track"
    STANDARD = "Standard"
    ON_HOLD = "On Hold"
    LOW = "Low"


class ConfidenceLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Product(str, Enum):
    CORE_PLATFORM = "Core Platform"
    MOBILE_APP = "Mobile App"
    ANALYTICS = "Analytics & Reporting"
    INTEGRATIONS = "Integrations & API"
    UNKNOWN = "Unknown"


class IssueClassification(str, Enum):
    FEATURE = "Feature"
    BUG = "Bug"


class TriageStage(str, Enum):
    THEME = "theme"
    SCORING = "scoring"
