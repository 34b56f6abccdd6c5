"""Entity, context and phrase extraction from a free-text situation.

Vocabulary lives in the module-level tables below; extend them freely. The
extraction code iterates the tables generically, so adding a term or a whole
context category never touches control flow.
"""
from __future__ import annotations

import re
from typing import Dict, List, Tuple

from nyaya_lite.models import EntitySignals

__all__ = [
    "CONTEXT_MAP",
    "SIGNAL_TERMS",
    "COMMON_PHRASES",
    "MONEY_RE",
    "extract",
    "extract_entities",
    "detect_contexts",
    "match_phrases",
]

# Relationship / setting keywords. Order here is the order of the output tags.
CONTEXT_MAP: Dict[str, List[str]] = {
    "workplace": ["boss", "manager", "employer", "colleague", "office", "workplace", "company"],
    "family": ["husband", "wife", "spouse", "father", "mother", "in-laws", "son", "daughter", "child"],
    "neighbor": ["neighbor", "neighbour", "next door", "building", "flat"],
    "public": ["stranger", "road", "street", "public", "unknown"],
    "student": ["college", "university", "school", "student", "senior", "ragging"],
}

# Boolean signals keyed by the EntitySignals field they set.
SIGNAL_TERMS: Dict[str, List[str]] = {
    "has_danger": ["weapon", "knife", "gun", "pistol", "acid", "threat", "kill", "murder", "hurt", "beat"],
    "involves_child": ["child", "kid", "minor", "baby", "infant", "teenager", "son", "daughter"],
    "time_urgent": ["immediately", "urgent", "emergency", "fast", "quick", "now", "asap"],
}

# Multi-word idioms checked before tokenization.
COMMON_PHRASES: List[str] = [
    "phone stolen", "mobile stolen", "hit and run", "chain snatching",
    "domestic violence", "sexual harassment", "fake job", "otp fraud",
    "account hacked", "identity theft", "child missing", "cyber bullying",
    "salary not paid", "wrongful termination", "builder fraud",
]

MONEY_RE = re.compile(r"(\d+)\s*(rupees?|rs\.?|inr|₹|thousand|lakh|crore)", re.IGNORECASE)


def _contains_any(lowered: str, terms: List[str]) -> bool:
    return any(term in lowered for term in terms)


def extract_entities(text: str) -> EntitySignals:
    """Pull the money amount and danger/child/urgency flags out of ``text``.

    Matching is plain substring search on the lower-cased text, so "threat"
    also fires on "threatening". Only the first money mention is captured.
    """
    if not text or not text.strip():
        return EntitySignals()
    lowered = text.lower()
    money = MONEY_RE.search(text)
    flags = {field: _contains_any(lowered, terms) for field, terms in SIGNAL_TERMS.items()}
    return EntitySignals(money_amount=money.group(1) if money else None, **flags)


def detect_contexts(text: str) -> List[str]:
    if not text:
        return []
    lowered = text.lower()
    return [tag for tag, keywords in CONTEXT_MAP.items() if _contains_any(lowered, keywords)]


def match_phrases(text: str) -> List[str]:
    if not text:
        return []
    lowered = text.lower()
    return [phrase for phrase in COMMON_PHRASES if phrase in lowered]


def extract(text: str) -> Tuple[EntitySignals, List[str], List[str]]:
    """Run every extractor once; returns (entities, contexts, phrases)."""
    return extract_entities(text), detect_contexts(text), match_phrases(text)
