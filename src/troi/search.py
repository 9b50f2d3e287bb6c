from __future__ import annotations
import logging
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from . import config as CFG
from .DB.api import NgramStore
from .errors import StoreContractViolation
from .models import WordPrediction
from .spellings import generate_spellings
from .wildcards import build_wildcards

log = logging.getLogger(__name__)

# rank key: (-len(context), score * len(context) * CONTEXT_LENGTH_MULTIPLIER)
Key = Tuple[int, int]


def _checked(rows: Iterable) -> Iterator[Tuple[str, int]]:
    """Yield (wordform, score) rows, rejecting anything else."""
    for row in rows:
        try:
            wordform, score = row
        except (TypeError, ValueError) as exc:
            raise StoreContractViolation(f"expected (wordform, score) row, got {row!r}") from exc
        if not isinstance(wordform, str):
            raise StoreContractViolation(f"wordform must be text, got {wordform!r}")
        if not isinstance(score, int) or isinstance(score, bool):
            raise StoreContractViolation(f"score must be an integer, got {score!r} for {wordform!r}")
        yield wordform, score


def spelling_prefixes(nextword: str) -> List[str]:
    """The typed prefix plus the mistake side of every spelling variant, sorted."""
    mistakes = {v.mistake for v in generate_spellings(nextword, nextword)}
    mistakes.add(nextword)
    return sorted(mistakes)


def prefix_patterns(prefixes: Sequence[str], min_wildcard_len: int = CFG.MIN_WILDCARD_LENGTH) -> List[str]:
    """
    Each prefix followed by its single-wildcard variants (only for prefixes
    of at least ``min_wildcard_len`` characters). Duplicates are dropped,
    first occurrence wins.
    """
    out: Dict[str, None] = {}
    for p in prefixes:
        out[p] = None
        if len(p) >= min_wildcard_len:
            out.update(dict.fromkeys(build_wildcards(p)))
    return list(out)


def _context_window(ngram: Sequence[str], size: int) -> List[str]:
    preceding = list(ngram[:-1])
    return preceding[max(0, len(preceding) - size):]


# /* ~~~ Keep the better key per wordform: smaller for ngrams, larger for cross_wordforms ~~~ */
def _merge_min(scores: Dict[str, Key], wordform: str, key: Key) -> None:
    cur = scores.get(wordform)
    if cur is None or key < cur:
        scores[wordform] = key


def _merge_max(scores: Dict[str, Key], wordform: str, key: Key) -> None:
    cur = scores.get(wordform)
    if cur is None or key > cur:
        scores[wordform] = key


def predict_next(
    store: NgramStore,
    ngram: Sequence[str],
    max_rows: int = CFG.TOP_K,
    *,
    max_context_words: int = CFG.MAX_CONTEXT_WORDS,
    context_multiplier: int = CFG.CONTEXT_LENGTH_MULTIPLIER,
    min_cross_prefix_len: int = CFG.MIN_CROSS_PREFIX_LENGTH,
) -> List[WordPrediction]:
    """
    Predict the word being typed from the words before it.

    ``ngram`` is the preceding words (oldest first) followed by the partial
    word, which is "" at the start of a new word: ["da", "iawn", ""].

    The store is queried with the full context window first, then with the
    oldest word dropped, until ``max_rows`` distinct wordforms are collected
    or the context is empty. Each hit is keyed by
    (-len(context), score * len(context) * context_multiplier):

      * ngrams hits keep the SMALLER key, so longer contexts win;
      * cross_wordforms hits keep the LARGER key.

    Results are ordered by key[0] ascending, key[1] descending, then by
    wordform, and truncated to ``max_rows``.
    """
    if max_rows < 0:
        raise ValueError("max_rows must be >= 0")

    nextword = ngram[-1] if ngram else ""
    patterns: List[str] = []
    cross_patterns: List[str] = []
    if nextword:
        patterns = prefix_patterns(spelling_prefixes(nextword))
        if len(nextword) >= min_cross_prefix_len:
            # literal prefix only, no spelling variants
            cross_patterns = [nextword] + build_wildcards(nextword)
    exact = nextword or None

    context = _context_window(ngram, max_context_words)
    scores: Dict[str, Key] = {}

    while True:
        limit = max_rows - len(scores)
        joined = " ".join(context)
        magnitude = -len(context)

        rows = store.query_ngrams(joined, patterns, exact=exact, limit=limit)
        for wordform, score in _checked(rows):
            _merge_min(scores, wordform, (magnitude, score * len(context) * context_multiplier))

        if cross_patterns:
            rows = store.query_cross_wordforms(joined, cross_patterns, exact=exact, limit=limit)
            for wordform, score in _checked(rows):
                _merge_max(scores, wordform, (magnitude, score * len(context) * context_multiplier))

        log.debug("context=%r limit=%d collected=%d", joined, limit, len(scores))

        if len(scores) >= max_rows or not context:
            break
        context = context[1:]

    ranked = sorted(scores.items(), key=lambda kv: (kv[1][0], -kv[1][1], kv[0]))
    return [WordPrediction(wordform, key[1]) for wordform, key in ranked[:max_rows]]
