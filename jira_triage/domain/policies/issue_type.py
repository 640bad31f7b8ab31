"""IssueTypePolicy — decide whether a ticket reads as a Feature or a Bug."""

from __future__ import annotations

import re

from jira_triage.domain.entities.ticket import Ticket
from jira_triage.domain.value_objects.enums import IssueClassification

KEYWORD_WEIGHT = 2
PATTERN_WEIGHT = 1
LABEL_WEIGHT = 3

BUG_KEYWORDS = (
    "bug", "error", "crash", "broken", "fail", "defect", "exception",
    "regression", "incorrect", "wrong", "not working",
)
BUG_PATTERNS = (
    re.compile(r"\b(does|do|is|are)\s*(n't|not)\s+(work|load|save|display|show)"),
    re.compile(r"\b(500|502|503|404)\b"),
    re.compile(r"\bstack\s*trace\b"),
    re.compile(r"\bunable\s+to\b"),
    re.compile(r"\bsteps\s+to\s+reproduce\b"),
)
BUG_LABELS = frozenset({"bug", "defect", "regression", "incident"})

FEATURE_KEYWORDS = (
    "add", "feature", "request", "enhancement", "support for", "ability",
    "new", "improve", "allow", "option",
)
FEATURE_PATTERNS = (
    re.compile(r"\bwould\s+like\b"),
    re.compile(r"\bas\s+an?\s+\w+,?\s+i\s+want\b"),
    re.compile(r"\bit\s+would\s+be\s+(nice|great|helpful|useful)\b"),
    re.compile(r"\bcan\s+we\b"),
    re.compile(r"\bneeds?\s+to\s+be\s+able\s+to\b"),
)
FEATURE_LABELS = frozenset({"feature", "enhancement", "feature-request", "improvement", "story"})


def _score(text: str, labels: list[str], keywords, patterns, label_set) -> int:
    score = KEYWORD_WEIGHT * sum(
        1 for kw in keywords if re.search(rf"\b{re.escape(kw)}", text)
    )
    score += PATTERN_WEIGHT * sum(1 for p in patterns if p.search(text))
    score += LABEL_WEIGHT * sum(1 for label in labels if label in label_set)
    return score


def classify_issue_type(ticket: Ticket) -> IssueClassification:
    """Keyword scoring: keyword ×2, pattern ×1, exact label ×3. Ties → Feature."""
    text = ticket.searchable_text()
    labels = ticket.lowered_labels()

    bug = _score(text, labels, BUG_KEYWORDS, BUG_PATTERNS, BUG_LABELS)
    feature = _score(text, labels, FEATURE_KEYWORDS, FEATURE_PATTERNS, FEATURE_LABELS)

    return IssueClassification.BUG if bug > feature else IssueClassification.FEATURE
