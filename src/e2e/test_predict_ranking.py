# src/e2e/test_predict_ranking.py

import pytest

from troi.DB.memory_store import MemoryStore
from troi.engine import Engine
from troi.errors import NotInitializedError, StoreContractViolation
from troi.models import CrossWordformRow, NgramRow, WordPrediction
from troi.search import predict_next, prefix_patterns, spelling_prefixes
from troi.wildcards import build_wildcards


class CountingStore(MemoryStore):
    """MemoryStore that records the contexts it was asked about."""
    def __init__(self, *a, **kw):
        super().__init__(*a, **kw)
        self.contexts: list[str] = []

    def query_ngrams(self, context, patterns=(), *, exact=None, limit):
        self.contexts.append(context)
        return super().query_ngrams(context, patterns, exact=exact, limit=limit)


class BadRowStore(MemoryStore):
    """Returns a row whose score is not an integer."""
    def query_ngrams(self, context, patterns=(), *, exact=None, limit):
        return [("bore", "lots")]


def _engine(*ngrams, cross=()):
    eng = Engine()
    eng.attach_store(MemoryStore([NgramRow(*r) for r in ngrams], [CrossWordformRow(*c) for c in cross]))
    return eng


def test_build_wildcards_interior_positions_only():
    assert build_wildcards("bore") == ["b?ore", "bo?re"]
    assert build_wildcards("ab") == []
    assert build_wildcards("") == []


def test_prefix_patterns_skip_wildcards_for_short_prefixes():
    assert prefix_patterns(["da", "bore", "da"]) == ["da", "bore", "b?ore", "bo?re"]


def test_spelling_prefixes_include_typed_prefix():
    assert spelling_prefixes("d") == ["d", "dd", "t"]


def test_longer_context_ranks_first():
    eng = _engine(("da iawn", "bore", 100), ("iawn", "bore", 50))
    try:
        assert eng.predict(["da", "iawn", ""], 5) == [WordPrediction("bore", 2000)]
    finally:
        eng.cleanup()


def test_word_only_reachable_by_shorter_context_ranks_after():
    eng = _engine(("da iawn", "bore", 100), ("iawn", "bore", 50), ("iawn", "diolch", 900))
    try:
        rows = eng.predict(["da", "iawn", ""], 5)
        assert [r.wordform for r in rows] == ["bore", "diolch"]
        assert rows[1].score == 9000
    finally:
        eng.cleanup()


def test_prefix_uses_spelling_variants():
    store = MemoryStore([
        NgramRow("bore", "da", 100), NgramRow("bore", "dydd", 50),
        NgramRow("bore", "dda", 10), NgramRow("bore", "braf", 500),
    ])
    rows = predict_next(store, ["bore", "d"], 5)
    # "t" and "dd" are variants of "d"; "braf" does not match
    assert [(r.wordform, r.score) for r in rows] == [("da", 1000), ("dydd", 500), ("dda", 100)]


def test_exact_match_fetched_before_higher_scores():
    store = MemoryStore([NgramRow("x", "boreol", 100), NgramRow("x", "bore", 1)])
    assert predict_next(store, ["x", "bore"], 1) == [WordPrediction("bore", 10)]


def test_wildcard_tolerates_one_missing_letter():
    store = MemoryStore([NgramRow("x", "bore", 5)])
    assert "bore" in [r.wordform for r in predict_next(store, ["x", "bre"], 5)]


def test_cross_wordform_keeps_larger_key_even_at_shorter_context():
    store = MemoryStore(
        [NgramRow("a x", "mawr", 10), NgramRow("x", "mawr", 10)],
        [CrossWordformRow("mawr", "fawr", 5)],
    )
    # a x: ngrams (-2, 200), cross (-2, 300) -> (-2, 300)
    # x:   ngrams (-1, 100) loses to (-2, 300); cross (-1, 150) beats it
    assert predict_next(store, ["a", "x", "fa"], 5) == [WordPrediction("mawr", 150)]


def test_cross_wordforms_need_two_typed_chars():
    store = MemoryStore([NgramRow("x", "gwyn", 10)], [CrossWordformRow("gwyn", "wyn", 5)])
    assert predict_next(store, ["x", "w"], 5) == []
    assert predict_next(store, ["x", "wy"], 5) == [WordPrediction("gwyn", 150)]


def test_empty_context_scores_zero_and_ties_break_alphabetically():
    store = MemoryStore([NgramRow("", "yn", 90), NgramRow("", "a", 5), NgramRow("", "y", 50)])
    assert predict_next(store, [""], 5) == [
        WordPrediction("a", 0), WordPrediction("y", 0), WordPrediction("yn", 0),
    ]


def test_result_is_capped():
    store = MemoryStore([NgramRow("", f"w{i}", i) for i in range(20)]
                        + [NgramRow("x", f"w{i}", i) for i in range(3)])
    for k in (0, 1, 2, 5, 7):
        assert len(predict_next(store, ["x", ""], k)) <= k
    assert predict_next(store, ["x", ""], 0) == []


def test_negative_max_rows_rejected():
    with pytest.raises(ValueError):
        predict_next(MemoryStore(), [""], -1)


@pytest.mark.parametrize("ngram, expected", [
    ([""], [""]),
    (["a", ""], ["a", ""]),
    (["a", "b", "c", ""], ["a b c", "b c", "c", ""]),
    (["a", "b", "c", "d", "e", "f", ""], ["c d e f", "d e f", "e f", "f", ""]),
    ([], [""]),
])
def test_context_relaxation_terminates(ngram, expected):
    store = CountingStore()
    predict_next(store, ngram, 5)
    assert store.contexts == expected


def test_relaxation_stops_once_enough_rows():
    store = CountingStore([NgramRow("a b", "c", 1), NgramRow("a b", "d", 1)])
    predict_next(store, ["a", "b", ""], 2)
    assert store.contexts == ["a b"]


def test_predict_is_deterministic():
    eng = _engine(*[("", w, 3) for w in ["ac", "ab", "ad", "aa"]], ("x", "ab", 3), ("x", "ac", 3))
    try:
        first = eng.predict(["x", "a"], 3)
        assert first == eng.predict(["x", "a"], 3)
        assert [r.wordform for r in first] == ["ab", "ac", "aa"]
    finally:
        eng.cleanup()


def test_bad_row_is_contract_violation():
    eng = Engine()
    eng.attach_store(BadRowStore())
    try:
        with pytest.raises(StoreContractViolation):
            eng.predict(["x", ""], 5)
        assert eng.initialized
    finally:
        eng.cleanup()


def test_predict_before_initialize_fails():
    with pytest.raises(NotInitializedError):
        Engine().predict(["bore", ""], 5)


def test_closed_store_gives_empty_result():
    store = MemoryStore([NgramRow("", "bore", 1)])
    eng = Engine()
    eng.attach_store(store)
    store.close()
    assert eng.predict([""], 5) == []
    eng.cleanup()


def test_get_suggestions_from_text():
    eng = _engine(("bore da", "iawn", 10), ("bore da", "i", 10))
    try:
        assert [r.wordform for r in eng.get_suggestions("Helo! bore da i", "i")] == ["i", "iawn"]
        # gesture input ignores the partial word
        assert len(eng.get_suggestions("bore da ", "zz", gesture=True)) == 2
    finally:
        eng.cleanup()
