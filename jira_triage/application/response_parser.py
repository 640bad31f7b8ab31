"""Parse free-text backend replies into structured results.

Model output is noisy: JSON may be wrapped in markdown fences, preceded by
prose, or cut off by the token ceiling. ``parse_analysis`` tolerates all of
those and returns either a fully validated ``AnalysisResult`` or ``None``;
a partially populated result never escapes.
"""

from __future__ import annotations

import json
import math
import logging
import re
from collections.abc import Iterable
from typing import Any

from jira_triage.domain.entities.analysis import AnalysisResult, AnalysisScores
from jira_triage.domain.policies.priority import compute_overall
from jira_triage.domain.value_objects.enums import PriorityRecommendation
from jira_triage.domain.value_objects.theme import THEME_NOT_IDENTIFIED

logger = logging.getLogger(__name__)

RAW_LOG_LIMIT = 500

# A fence may be left open when the reply was truncated, hence ``|$``.
JSON_FENCE_RE = re.compile(r"```json\b[ \t]*\n?(.*?)(?:```|$)", re.DOTALL | re.IGNORECASE)
ANY_FENCE_RE = re.compile(r"```[\w-]*[ \t]*\n?(.*?)(?:```|$)", re.DOTALL)

RECOMMENDATION_MAP: dict[str, PriorityRecommendation] = {
    r.value.lower(): r for r in PriorityRecommendation
}


# ── Extraction ──────────────────────────────────────────────────────


def extract_json_body(text: str) -> str:
    """Pick the JSON candidate out of *text*.

    Order: ```json fenced block, then any fenced block, then the raw text.
    Leading prose before the first ``{`` is dropped.
    """
    match = JSON_FENCE_RE.search(text)
    if match:
        body = match.group(1)
    else:
        match = ANY_FENCE_RE.search(text)
        body = match.group(1) if match else text

    body = body.strip()
    first_brace = body.find("{")
    if first_brace > 0:
        body = body[first_brace:]
    return body


def _matching_open_brace(text: str, close_index: int) -> int:
    """Scan backward from the ``}`` at *close_index*; -1 if it has no partner."""
    depth = 0
    for i in range(close_index, -1, -1):
        ch = text[i]
        if ch == "}":
            depth += 1
        elif ch == "{":
            depth -= 1
            if depth == 0:
                return i
    return -1


def _closing_suffix(text: str) -> str:
    """Closers for every bracket still open at the end of *text* (string-aware)."""
    stack: list[str] = []
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in "{[":
            stack.append("}" if ch == "{" else "]")
        elif ch in "}]" and stack:
            stack.pop()
    return "".join(reversed(stack))


def repair_truncated(body: str) -> str | None:
    """Recover the complete prefix of a reply cut off mid-object.

    Only applies when there are more ``{`` than ``}``. If the reply stopped
    cleanly between values, closing the open brackets is enough. Otherwise
    everything after the last complete ``}`` (the trailing incomplete
    object) is discarded and the brackets still open around it are closed.
    Returns ``None`` when no complete object survives.
    """
    if body.count("{") <= body.count("}"):
        return body

    closed = body + _closing_suffix(body)
    try:
        json.loads(closed)
    except (json.JSONDecodeError, RecursionError):
        pass
    else:
        return closed

    last_close = body.rfind("}")
    if last_close == -1 or _matching_open_brace(body, last_close) == -1:
        return None

    prefix = body[: last_close + 1]
    return prefix + _closing_suffix(prefix)


# ── Normalization ───────────────────────────────────────────────────


def _score_or_none(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return max(0, min(100, int(round(number))))


def _strings(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value.strip(),) if value.strip() else ()
    if not isinstance(value, Iterable) or isinstance(value, dict):
        return ()
    return tuple(item.strip() for item in value if isinstance(item, str) and item.strip())


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _build_result(data: dict[str, Any]) -> AnalysisResult | None:
    raw_scores = data.get("scores")
    raw_label = data.get("priority_recommendation")
    if not isinstance(raw_scores, dict) or not raw_label:
        logger.warning(
            "Missing required fields in AI response; available fields: %s",
            sorted(data.keys()),
        )
        return None

    recommendation = RECOMMENDATION_MAP.get(str(raw_label).strip().lower())
    if recommendation is None:
        logger.warning("Unknown priority_recommendation %r in AI response", raw_label)
        return None

    overall = _score_or_none(raw_scores.get("overall_priority"))
    computed_locally = overall is None
    if computed_locally:
        overall = compute_overall(raw_scores)
        logger.info("Calculated missing overall priority: %d", overall)

    effort_size = raw_scores.get("effort_size")
    scores = AnalysisScores(
        business_impact=_score_or_none(raw_scores.get("business_impact")) or 0,
        effort_size=str(effort_size).strip().upper() if effort_size else None,
        effort_score=_score_or_none(raw_scores.get("effort_score")),
        strategic_fit=_score_or_none(raw_scores.get("strategic_fit")) or 0,
        cross_client_value=_score_or_none(raw_scores.get("cross_client_value")) or 0,
        overall_priority=overall,
    )

    on_hold = _text(data.get("on_hold_reasoning"))
    return AnalysisResult(
        scores=scores,
        priority_recommendation=recommendation,
        key_insights=_strings(data.get("key_insights")),
        risks=_strings(data.get("risks")),
        opportunities=_strings(data.get("opportunities")),
        recommended_next_steps=_strings(data.get("recommended_next_steps")),
        similar_features=_text(data.get("similar_features")),
        executive_summary=_text(data.get("executive_summary")),
        on_hold_reasoning=on_hold or None,
        overall_computed_locally=computed_locally,
    )


# ── Public API ──────────────────────────────────────────────────────


def parse_analysis(raw_text: str | None) -> AnalysisResult | None:
    """Parse a scoring reply. Never raises; ``None`` means "unusable"."""
    if not raw_text or not raw_text.strip():
        return None

    logger.debug("Raw AI response: %s", raw_text[:RAW_LOG_LIMIT])

    body = repair_truncated(extract_json_body(raw_text))
    if body is None:
        logger.warning("AI response was truncated beyond repair")
        return None

    try:
        data = json.loads(body)
    except (json.JSONDecodeError, RecursionError) as e:
        logger.warning("Error parsing AI response: %s", e)
        logger.debug("Raw text that failed to parse: %s", raw_text[: RAW_LOG_LIMIT * 2])
        return None

    if not isinstance(data, dict):
        logger.warning("AI response JSON is a %s, expected an object", type(data).__name__)
        return None

    return _build_result(data)


THEME_STRIP_CHARS = " \t\"'`*-•.:;"
THEME_PREFIX_RE = re.compile(r"^(theme|answer)\s*:\s*", re.IGNORECASE)


def parse_theme(raw_text: str | None, vocabulary: Iterable[str]) -> str | None:
    """Map a classification reply onto the controlled vocabulary.

    Returns the canonical theme, the ``THEME NOT IDENTIFIED`` sentinel, or
    ``None`` when the reply is empty or names something outside both.
    """
    if not raw_text or not raw_text.strip():
        return None

    text = raw_text
    if "```" in text:
        match = ANY_FENCE_RE.search(text)
        text = match.group(1) if match else text

    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        return None
    candidate = THEME_PREFIX_RE.sub("", lines[0].strip(THEME_STRIP_CHARS))
    candidate = candidate.strip(THEME_STRIP_CHARS)

    canonical = {theme.lower(): theme for theme in vocabulary}
    canonical[THEME_NOT_IDENTIFIED.lower()] = THEME_NOT_IDENTIFIED

    theme = canonical.get(candidate.lower())
    if theme is None:
        logger.warning("Theme reply %r is not in the controlled vocabulary", candidate[:80])
    return theme
