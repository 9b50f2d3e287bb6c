# src/troi/models.py
"""
Data models for the prediction engine.

Small, immutable containers only:

- SpellingVariant: a (mistake, correct) pair produced by the spelling rules.
- WordPrediction: one ranked result returned to callers.
- NgramRow / CrossWordformRow: rows of the two store tables, used when a
  store is built or seeded in memory.

Everything except the store rows lives for a single predict() call.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SpellingVariant:
    """
    A plausible misspelling of a word.

    Attributes
    ----------
    mistake : str
        The string a user might type. Never equal to ``correct``.
    correct : str
        The accent-stripped, lowercased form of the word the variant was
        generated from.
    """
    mistake: str
    correct: str


@dataclass(frozen=True, slots=True)
class WordPrediction:
    """
    One prediction as returned by Engine.predict().

    Attributes
    ----------
    wordform : str
        The predicted word, exactly as stored.
    score : int
        The ranking score (stored score scaled by context length).
    """
    wordform: str
    score: int


@dataclass(frozen=True, slots=True)
class NgramRow:
    context: str      # space-joined preceding words, "" for no context
    wordform: str
    score: int


@dataclass(frozen=True, slots=True)
class CrossWordformRow:
    wordform: str         # canonical form found in ngrams
    cross_wordform: str   # alternate surface form (e.g. a mutation)
    score: int
