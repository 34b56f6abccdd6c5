"""Fallback analyzer: rank the law corpus against a free-text situation.

Used when the generative-AI provider is unavailable. Pure and synchronous; the
corpus is never mutated and every call builds its own derived state.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, List, Optional

from pydantic import ValidationError

from nyaya_lite.analyzer.scoring import build_query, relevance_reason, score_record
from nyaya_lite.analyzer.severity import SEVERITY_ORDER, adjust_severity
from nyaya_lite.errors import InvalidArgumentError
from nyaya_lite.models import (
    Analysis,
    AnalysisResult,
    LawRecord,
    ScoredMatch,
    Severity,
    UrgencyLevel,
)

__all__ = ["MAX_MATCHES", "MAX_RELATED_ISSUES", "GENERAL_ISSUE", "analyze", "coerce_record"]

logger = logging.getLogger(__name__)

MAX_MATCHES = 5
MAX_RELATED_ISSUES = 2
GENERAL_ISSUE = "General"

_URGENCY_FOR_SEVERITY = {
    Severity.EMERGENCY: UrgencyLevel.EMERGENCY,
    Severity.HIGH: UrgencyLevel.HIGH,
    Severity.MEDIUM: UrgencyLevel.MEDIUM,
    Severity.LOW: UrgencyLevel.NORMAL,
}


def coerce_record(item: Any) -> Optional[LawRecord]:
    """Return ``item`` as a LawRecord, or None if it cannot be one."""
    if isinstance(item, LawRecord):
        return item
    if isinstance(item, Mapping):
        try:
            return LawRecord.model_validate(dict(item))
        except ValidationError as e:
            logger.warning("Skipping malformed law record %r: %d validation error(s)",
                           item.get("title"), e.error_count())
            return None
    logger.warning("Skipping law record of unexpected type %s", type(item).__name__)
    return None


def _urgency_level(matches: List[ScoredMatch]) -> UrgencyLevel:
    if not matches:
        return UrgencyLevel.NORMAL
    top = max((m.record.severity for m in matches), key=SEVERITY_ORDER.__getitem__)
    return _URGENCY_FOR_SEVERITY[top]


def _related_issues(matches: List[ScoredMatch], primary: str) -> List[str]:
    related: List[str] = []
    for m in matches[1:3]:
        category = m.record.category
        if category != primary and category not in related:
            related.append(category)
    return related[:MAX_RELATED_ISSUES]


def analyze(query: str, corpus: Sequence[Any]) -> AnalysisResult:
    """Score every record in ``corpus`` against ``query`` and keep the top five.

    Args:
        query: The user's description of their situation.
        corpus: LawRecord instances or plain mappings with the same fields.
            Entries that fail validation are skipped, not fatal.

    Returns:
        AnalysisResult. A blank query returns the empty sentinel
        (no matches, ``analysis`` None) without scoring anything.

    Raises:
        InvalidArgumentError: ``query`` is not a string or ``corpus`` is not a
            sequence.
    """
    if not isinstance(query, str):
        raise InvalidArgumentError(f"query must be a string, got {type(query).__name__}")
    if isinstance(corpus, (str, bytes)) or not isinstance(corpus, Sequence):
        raise InvalidArgumentError(f"corpus must be a sequence of law records, got {type(corpus).__name__}")
    if not query.strip():
        return AnalysisResult()

    features = build_query(query)

    scored: List[ScoredMatch] = []
    for item in corpus:
        record = coerce_record(item)
        if record is None:
            continue
        points = score_record(features, record)
        reason = relevance_reason(points)
        if reason is None:
            continue
        adjusted = record.with_severity(adjust_severity(record.severity, features.entities))
        scored.append(ScoredMatch(record=adjusted, score=points, relevance_reason=reason))

    # sorted() is stable, so ties keep corpus order
    top = sorted(scored, key=lambda m: -m.score)[:MAX_MATCHES]

    primary = top[0].record.category if top else GENERAL_ISSUE
    analysis = Analysis(
        primary_issue=primary,
        related_issues=_related_issues(top, primary),
        urgency_level=_urgency_level(top),
        entities_detected=features.entities,
        contexts=features.contexts,
        phrases_matched=features.phrases,
    )
    logger.debug("Fallback analysis: %d/%d records scored, primary=%s",
                 len(scored), len(corpus), primary)
    return AnalysisResult(scored=top, analysis=analysis)
