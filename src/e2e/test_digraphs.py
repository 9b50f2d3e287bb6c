# src/e2e/test_digraphs.py

import pytest

from troi.digraphs import split_word, splits_ng


WORDS = [
    "llong", "Bangor", "rhaw", "parhau", "anrheg", "arhythmia", "Llangollen",
    "tang", "tangiad", "nghangen", "LLONG", "", "a", "caf3é!", "Pengwern",
    "cangarŵ", "bwrdd", "ffordd", "Ffynnongroyw", "rhyngrwyd",
]
LEMMAS = [None, "Bangor", "arhythmia", "llong", "Llangollen"]


@pytest.mark.parametrize("lemma", LEMMAS)
@pytest.mark.parametrize("word", WORDS)
def test_units_concatenate_back_to_word(word, lemma):
    assert "".join(split_word(word, lemma)) == word


def test_default_rules_merge_ng_everywhere():
    assert split_word("llong", "llong") == ["ll", "o", "ng"]
    assert split_word("tangiad") == ["t", "a", "ng", "i", "a", "d"]


def test_split_ng_lemma_splits_interior_ng():
    assert split_word("Bangor", "Bangor") == ["B", "a", "n", "g", "o", "r"]
    assert split_word("Pengwern") == ["P", "e", "n", "g", "w", "e", "r", "n"]


def test_split_ng_lemma_set_is_case_sensitive():
    assert split_word("Bangor", "bangor") == ["B", "a", "ng", "o", "r"]


def test_split_ng_keeps_ng_at_word_edges():
    assert split_word("tang") == ["t", "a", "ng"]
    assert split_word("ngwyn", "Bangor") == ["ng", "w", "y", "n"]


def test_trigger_patterns_select_ng_splitting():
    assert splits_ng("Llangollen")       # Llan + g
    assert splits_ng("tangnefedd")       # tang, not tangiad
    assert not splits_ng("tangiad")
    assert splits_ng("meningitis")
    assert splits_ng("llawengar")        # ends n + gar
    assert not splits_ng("llong")
    assert split_word("Llangollen") == ["Ll", "a", "n", "g", "o", "ll", "e", "n"]


def test_rh_at_word_start_is_one_unit():
    assert split_word("rhaw", "rhaw")[0] == "rh"
    assert split_word("Rhyl")[0] == "Rh"


def test_rh_after_vowel_splits():
    units = split_word("parhau")
    assert units == ["p", "a", "r", "h", "a", "u"]


def test_rh_after_trigger_letter_merges():
    assert split_word("anrheg") == ["a", "n", "rh", "e", "g"]


def test_dont_split_rh_lemma_merges_interior_rh():
    assert split_word("arhythmia") == ["a", "rh", "y", "th", "m", "i", "a"]
    assert split_word("arhythmia", "foo") == ["a", "r", "h", "y", "th", "m", "i", "a"]


def test_case_insensitive_match_keeps_original_case():
    assert split_word("LLONG") == ["LL", "O", "NG"]
    assert split_word("cHwarae")[0] == "cH"


def test_unknown_characters_pass_through():
    assert split_word("") == []
    assert split_word("caf3é!") == ["c", "a", "f", "3", "é", "!"]
