"""
Welsh next-word prediction.

Predicts the word a user is typing from a precomputed n-gram frequency
table, widened by Welsh spelling knowledge:

- Digraph splitting of words into orthographic units (troi.digraphs)
- Spelling variants for fuzzy prefix search (troi.spellings, troi.wildcards)
- Context relaxation and ranking against the store (troi.search)
- Store lifecycle and the public API (troi.engine)

Example Usage:
    from troi import Engine

    eng = Engine()
    eng.initialize("sqlite:///literatim.sqlite")
    for p in eng.predict(["bore", "da", ""], 5):
        print(p.score, p.wordform)
    eng.cleanup()
"""

# src/troi/__init__.py
from .digraphs import split_word
from .engine import Engine
from .errors import NotInitializedError, StoreContractViolation, StoreIOError, TroiError
from .models import SpellingVariant, WordPrediction
from .spellings import generate_spellings
from .wildcards import build_wildcards

__version__ = "1.0.0"
__all__ = [
    "Engine",
    "WordPrediction",
    "SpellingVariant",
    "split_word",
    "generate_spellings",
    "build_wildcards",
    "TroiError",
    "NotInitializedError",
    "StoreIOError",
    "StoreContractViolation",
]
