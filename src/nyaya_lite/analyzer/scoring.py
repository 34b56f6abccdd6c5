"""Multi-signal lexical scoring of one law record against one query.

A record's score is the sum of independent contributions:

  phrase      +20 keyword inside a matched phrase, +25 phrase inside the title
  keyword     +10 stemmed hit, else +8 per query token within edit distance 1
  title       +5 per title token whose stem is in the query
  context     +10..20 per (context, category/title) rule
  description +1 per description token whose stem is in the query
  child       +15 for "Child" categories when a child is mentioned

Scores are non-negative integers; zero means "not relevant".
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

from nyaya_lite.analyzer.entities import extract
from nyaya_lite.analyzer.text import edit_distance, stem, stem_set, tokenize
from nyaya_lite.models import EntitySignals, LawRecord, RelevanceReason

__all__ = [
    "PHRASE_KEYWORD_POINTS",
    "PHRASE_TITLE_POINTS",
    "KEYWORD_POINTS",
    "FUZZY_KEYWORD_POINTS",
    "TITLE_TOKEN_POINTS",
    "DESCRIPTION_TOKEN_POINTS",
    "CHILD_CATEGORY_POINTS",
    "CONTEXT_RULES",
    "QueryFeatures",
    "build_query",
    "score",
    "score_record",
    "relevance_reason",
]

PHRASE_KEYWORD_POINTS = 20
PHRASE_TITLE_POINTS = 25
KEYWORD_POINTS = 10
FUZZY_KEYWORD_POINTS = 8
FUZZY_MAX_DISTANCE = 1
TITLE_TOKEN_POINTS = 5
DESCRIPTION_TOKEN_POINTS = 1
CHILD_CATEGORY_POINTS = 15

# (context tag, record field, substring, points). Rules stack independently.
# Category needles are case-sensitive; title needles are checked lower-cased.
CONTEXT_RULES: List[Tuple[str, str, str, int]] = [
    ("workplace", "category", "Employment", 15),
    ("workplace", "category", "Harassment", 10),
    ("family", "category", "Family", 15),
    ("family", "category", "Harassment", 10),
    ("student", "title", "ragging", 20),
]


@dataclass(frozen=True)
class QueryFeatures:
    """Everything derived from the query text, computed once per analysis."""
    text: str
    tokens: List[str] = field(default_factory=list)
    stems: FrozenSet[str] = frozenset()
    entities: EntitySignals = field(default_factory=EntitySignals)
    contexts: List[str] = field(default_factory=list)
    phrases: List[str] = field(default_factory=list)


def build_query(text: str) -> QueryFeatures:
    entities, contexts, phrases = extract(text)
    tokens = tokenize(text)
    return QueryFeatures(
        text=text,
        tokens=tokens,
        stems=stem_set(tokens),
        entities=entities,
        contexts=contexts,
        phrases=phrases,
    )


def _phrase_points(query: QueryFeatures, record: LawRecord) -> int:
    points = 0
    keywords = [k.lower() for k in record.keywords]
    title = record.title.lower()
    for phrase in query.phrases:
        if any(k in phrase for k in keywords):
            points += PHRASE_KEYWORD_POINTS
        if phrase in title:
            points += PHRASE_TITLE_POINTS
    return points


def _keyword_points(query: QueryFeatures, record: LawRecord) -> int:
    points = 0
    for keyword in record.keywords:
        lowered = keyword.lower()
        if stem(lowered) in query.stems:
            points += KEYWORD_POINTS
            continue
        # one typo tolerated; every near-miss token counts
        for token in query.tokens:
            if edit_distance(token, lowered) <= FUZZY_MAX_DISTANCE:
                points += FUZZY_KEYWORD_POINTS
    return points


def _stem_overlap(text: str, stems: FrozenSet[str]) -> int:
    return sum(1 for token in tokenize(text) if stem(token) in stems)


def _context_points(query: QueryFeatures, record: LawRecord) -> int:
    points = 0
    title = record.title.lower()
    for context, source, needle, weight in CONTEXT_RULES:
        if context not in query.contexts:
            continue
        haystack = record.category if source == "category" else title
        if needle in haystack:
            points += weight
    return points


def score_record(query: QueryFeatures, record: LawRecord) -> int:
    total = _phrase_points(query, record)
    total += _keyword_points(query, record)
    total += TITLE_TOKEN_POINTS * _stem_overlap(record.title, query.stems)
    total += _context_points(query, record)
    total += DESCRIPTION_TOKEN_POINTS * _stem_overlap(record.description, query.stems)
    if query.entities.involves_child and "Child" in record.category:
        total += CHILD_CATEGORY_POINTS
    return total


def score(
    query: str,
    record: LawRecord,
    phrases: Optional[List[str]] = None,
    contexts: Optional[List[str]] = None,
    entities: Optional[EntitySignals] = None,
) -> int:
    """Score ``record`` against raw query text.

    Signals that are not supplied are extracted from ``query``. Prefer
    :func:`build_query` + :func:`score_record` when scoring a whole corpus.
    """
    base = build_query(query)
    features = QueryFeatures(
        text=base.text,
        tokens=base.tokens,
        stems=base.stems,
        entities=entities if entities is not None else base.entities,
        contexts=list(contexts) if contexts is not None else base.contexts,
        phrases=list(phrases) if phrases is not None else base.phrases,
    )
    return score_record(features, record)


def relevance_reason(points: int) -> Optional[RelevanceReason]:
    if points > 20:
        return RelevanceReason.STRONG
    if points > 10:
        return RelevanceReason.GOOD
    if points > 0:
        return RelevanceReason.PARTIAL
    return None
