"""Local deterministic fallback analyzer."""

from nyaya_lite.analyzer.entities import (
    detect_contexts,
    extract,
    extract_entities,
    match_phrases,
)
from nyaya_lite.analyzer.ranker import analyze
from nyaya_lite.analyzer.scoring import (
    build_query,
    relevance_reason,
    score,
    score_record,
)
from nyaya_lite.analyzer.severity import adjust_severity

__all__ = [
    "analyze",
    "extract",
    "extract_entities",
    "detect_contexts",
    "match_phrases",
    "build_query",
    "score",
    "score_record",
    "relevance_reason",
    "adjust_severity",
]
