"""EffortInferencePolicy — deterministic effort sizing from ticket wording."""

from __future__ import annotations

import re
from dataclasses import dataclass

from jira_triage.domain.entities.effort_estimate import EffortEstimate
from jira_triage.domain.entities.ticket import Ticket
from jira_triage.domain.value_objects.enums import EFFORT_SCORES, EffortSize

KEYWORD_WEIGHT = 10
PATTERN_WEIGHT = 15
COMPONENT_WEIGHT = 5

SIZE_DESCRIPTIONS: dict[EffortSize, str] = {
    EffortSize.XS: "1-2 weeks (simple config/UI change)",
    EffortSize.S: "2-4 weeks (single service change)",
    EffortSize.M: "1-2 months (multiple services, moderate complexity)",
    EffortSize.L: "2-4 months (architectural changes, complex logic)",
    EffortSize.XL: "4+ months (platform changes, major overhaul)",
}


@dataclass(frozen=True)
class _BucketSignals:
    keywords: tuple[str, ...]
    patterns: tuple[re.Pattern[str], ...]
    components: tuple[str, ...]


_SIGNALS: dict[EffortSize, _BucketSignals] = {
    EffortSize.XS: _BucketSignals(
        keywords=(
            "typo", "tooltip", "toggle", "wording", "copy change", "colour",
            "color", "icon", "rename", "placeholder", "minor ui",
        ),
        patterns=(
            re.compile(r"\b(change|update|fix)\s+(the\s+)?(text|label|wording|copy|colou?r|icon)\b"),
            re.compile(r"\badd\s+(an?\s+)?(\w+\s+){0,3}(toggle|tooltip|link|button)\b"),
        ),
        components=("ui", "user interface", "frontend", "design"),
    ),
    EffortSize.S: _BucketSignals(
        keywords=(
            "dark mode", "preference", "setting", "filter", "sort", "simple",
            "small", "enhancement", "email template", "validation",
        ),
        patterns=(
            re.compile(r"\b(add|new)\s+(an?\s+)?(\w+\s+){0,2}(option|setting|preference|filter|column)s?\b"),
            re.compile(r"\bsimple\s+(ui\s+)?(change|enhancement|fix)\b"),
        ),
        components=("user interface", "settings", "preferences"),
    ),
    EffortSize.M: _BucketSignals(
        keywords=(
            "import", "integration", "workflow", "notification", "dashboard",
            "report", "bulk", "search", "permission", "role", "webhook", "csv",
        ),
        patterns=(
            re.compile(r"\b(new|add)\s+(an?\s+)?(api|endpoint|report|dashboard|workflow)\b"),
            re.compile(r"\bintegrat(e|ion)\s+with\b"),
        ),
        components=("api", "data management", "reporting", "notifications", "integrations"),
    ),
    EffortSize.L: _BucketSignals(
        keywords=(
            "migration", "migrate", "redesign", "architecture", "performance",
            "scalability", "multi-tenant", "refactor", "real-time", "sso",
            "single sign-on", "audit trail", "encryption",
        ),
        patterns=(
            re.compile(r"\bre-?(design|architect)\w*\b"),
            re.compile(r"\bmigrat(e|ion)\s+(from|to)\b"),
            re.compile(r"\b(multiple|several|all)\s+services\b"),
        ),
        components=("security", "infrastructure", "database", "authentication"),
    ),
    EffortSize.XL: _BucketSignals(
        keywords=(
            "rewrite", "overhaul", "new platform", "new product", "microservices",
            "replatform", "from scratch", "entire system", "global rollout",
        ),
        patterns=(
            re.compile(r"\b(complete|full|total)\s+(rewrite|overhaul|rebuild)\b"),
            re.compile(r"\bplatform[- ]wide\b"),
        ),
        components=("platform", "core"),
    ),
}

BUG_WORDS = ("bug", "fix")
SEVERITY_WORDS = (
    "critical", "crash", "outage", "data loss", "urgent", "blocker",
    "production", "severe",
)
SECURITY_WORDS = (
    "security", "compliance", "vulnerability", "gdpr", "hipaa", "soc 2", "audit",
)

_ORDER = [EffortSize.XS, EffortSize.S, EffortSize.M, EffortSize.L, EffortSize.XL]


def _has_word_prefix(text: str, word: str) -> bool:
    """True if *word* starts a word in *text* ("preference" hits "preferences")."""
    return re.search(rf"\b{re.escape(word)}", text) is not None


def score_buckets(ticket: Ticket) -> dict[EffortSize, int]:
    """Weighted hit count per effort bucket."""
    text = " ".join([ticket.searchable_text(), *ticket.lowered_labels()])
    components = ticket.lowered_components()

    scores: dict[EffortSize, int] = {}
    for size in _ORDER:
        signals = _SIGNALS[size]
        score = 0
        score += KEYWORD_WEIGHT * sum(1 for kw in signals.keywords if _has_word_prefix(text, kw))
        score += PATTERN_WEIGHT * sum(1 for p in signals.patterns if p.search(text))
        score += COMPONENT_WEIGHT * sum(
            1 for c in signals.components
            if any(_has_word_prefix(component, c) for component in components)
        )
        scores[size] = score
    return scores


def _apply_overrides(ticket: Ticket, size: EffortSize) -> tuple[EffortSize, str | None]:
    text = " ".join([ticket.searchable_text(), *ticket.lowered_labels()])

    override: str | None = None
    is_bug = any(_has_word_prefix(text, w) for w in BUG_WORDS)
    if is_bug and any(_has_word_prefix(text, w) for w in SEVERITY_WORDS):
        size = EffortSize.S
        override = "severe bug fix scoped as a targeted fix"

    if any(_has_word_prefix(text, w) for w in SECURITY_WORDS):
        if _ORDER.index(size) < _ORDER.index(EffortSize.M):
            size = EffortSize.M
            override = "security/compliance work needs review and audit"

    return size, override


def infer_effort(ticket: Ticket) -> EffortEstimate:
    """Pure function: estimate effort size from the ticket content.

    Each bucket collects keyword hits (10), regex pattern hits (15) and
    component hits (5). The highest bucket wins; ties go to the smaller
    bucket, and a ticket with no signal at all is sized M. Override rules
    for severe bugs and security/compliance work run last.
    """
    scores = score_buckets(ticket)

    best = EffortSize.M
    best_score = 0
    for size in _ORDER:
        if scores[size] > best_score:
            best, best_score = size, scores[size]

    if best_score == 0:
        reasoning = "No sizing signals found; defaulting to medium effort"
    else:
        reasoning = f"Strongest sizing signals for {best.value} (score {best_score})"

    size, override = _apply_overrides(ticket, best)
    if override:
        reasoning = f"{reasoning}; overridden to {size.value}: {override}"

    return EffortEstimate(
        size=size,
        score=EFFORT_SCORES[size],
        reasoning=reasoning,
        size_description=SIZE_DESCRIPTIONS[size],
    )
