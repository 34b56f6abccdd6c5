"""Tokenization, stemming and edit distance for lexical matching.

Queries and law text go through the same pipeline so morphological variants
meet on a shared stem ("harassing" and "harassment" both reduce to "harass").
"""
from __future__ import annotations

import functools
from typing import FrozenSet, List

from nltk.metrics.distance import edit_distance as _nltk_edit_distance
from nltk.stem import PorterStemmer
from nltk.tokenize import RegexpTokenizer

__all__ = ["tokenize", "stem", "stem_set", "edit_distance"]

_TOKENIZER = RegexpTokenizer(r"[a-z0-9]+")
_STEMMER = PorterStemmer()


def tokenize(text: str) -> List[str]:
    """Split text into lower-cased alphanumeric runs.

    Example:
        >>> tokenize("Phone stolen, near the in-laws' flat!")
        ['phone', 'stolen', 'near', 'the', 'in', 'laws', 'flat']
    """
    if not text:
        return []
    return _TOKENIZER.tokenize(text.lower())


@functools.lru_cache(maxsize=4096)
def stem(word: str) -> str:
    return _STEMMER.stem(word.lower())


def stem_set(tokens: List[str]) -> FrozenSet[str]:
    return frozenset(stem(t) for t in tokens)


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit insert/delete/substitute costs."""
    return _nltk_edit_distance(a, b, substitution_cost=1, transpositions=False)
