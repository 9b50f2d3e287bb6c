"""
Welsh spelling variants.

generate_spellings() produces plausible misspellings of a word so that a
partially typed, misspelt word can still reach the right prediction:

  1. accents are stripped and the word is lowercased;
  2. each rule in COMMON_MISTAKES rewrites the first match (initial
     mutations, vowel digraph confusions, doubled consonants...);
  3. every interior orthographic unit is deleted in turn.
"""
from __future__ import annotations

import re
from typing import List, Optional, Set, Tuple

from .digraphs import split_word
from .models import SpellingVariant

# Precomposed characters only; combining accents pass through untouched.
UNACCENTED = str.maketrans({
    "â": "a", "ê": "e", "î": "i", "ô": "o", "û": "u", "ŵ": "w", "ŷ": "y",
    "á": "a", "é": "e", "í": "i", "ó": "o", "ú": "u", "ẃ": "w", "ý": "y",
    "à": "a", "è": "e", "ì": "i", "ò": "o", "ù": "u", "ẁ": "w", "ỳ": "y",
    "ä": "a", "ë": "e", "ï": "i", "ö": "o", "ü": "u", "ẅ": "w", "ÿ": "y",
    "Â": "A", "Ê": "E", "Î": "I", "Ô": "O", "Û": "U", "Ŵ": "W", "Ŷ": "Y",
    "Á": "A", "É": "E", "Í": "I", "Ó": "O", "Ú": "U", "Ẃ": "W", "Ý": "Y",
    "À": "A", "È": "E", "Ì": "I", "Ò": "O", "Ù": "U", "Ẁ": "W", "Ỳ": "Y",
    "Ä": "A", "Ë": "E", "Ï": "I", "Ö": "O", "Ü": "U", "Ẅ": "W", "Ÿ": "Y",
    "ç": "c", "Ç": "C", "ñ": "n", "Ñ": "N", "ś": "s", "Ś": "S", "ć": "c", "Ć": "C",
})

# (pattern, replacements); only the first match of each pattern is rewritten
_RULES: List[Tuple[str, Tuple[str, ...]]] = [
    # initial consonant mutations
    (r"^t(?!h)", ("d", "nh")),
    (r"^d(?!d)", ("dd", "t")),
    (r"^dd", ("d",)),
    (r"^c(?!h)", ("g", "ngh")),
    (r"^g", ("", "c", "ng")),
    (r"^p(?!h)", ("b", "mh")),
    (r"^b", ("f", "p", "m")),
    (r"^f", ("b", "m")),
    (r"^m(?!h)", ("f", "mh")),
    (r"^ng(?!h)", ("ngh",)),
    (r"^(?=[aeiouwy])", ("h",)),
    # vowel digraphs and consonant confusions
    (r"ae", ("ai", "au", "ay")),
    (r"ai", ("ae", "au", "ay")),
    (r"au", ("ae", "ai", "ay")),
    (r"ch", ("c",)),
    (r"dd", ("th",)),
    (r"ei", ("eu", "ey")),
    (r"eu", ("ei", "ey")),
    (r"ey", ("ei", "eu")),
    (r"(?<!f)f(?!f)", ("v", "ff")),
    (r"ff", ("f",)),
    (r"i(?![aeiouwy])", ("u", "y")),
    (r"ll", ("l",)),
    (r"nn", ("n", "nh")),
    (r"oe", ("oi", "oy")),
    (r"oi", ("oe", "oy")),
    (r"oy", ("oe", "oi")),
    (r"ph", ("ff",)),
    (r"rr", ("r", "rh")),
    (r"rh", ("r", "rh")),
    (r"u", ("i", "y")),
    (r"w(?![aeiouwy])", ("u", "oo", "y")),
    (r"(?<![aeiouwy])y", ("u", "w")),
    (r"yn", ("in",)),
    (r"wy", ("wi", "oi")),
    (r"y", ("i", "u", "w")),
]

COMMON_MISTAKES: List[Tuple[re.Pattern, Tuple[str, ...]]] = [
    (re.compile(pattern), replacements) for pattern, replacements in _RULES
]


def remove_accents(letters: str) -> str:
    """Replace accented letters with their base letter."""
    return letters.translate(UNACCENTED)


def normalize_word(wordform: str) -> str:
    """The form every variant is generated from: unaccented, lowercase."""
    return remove_accents(wordform).lower()


def _rule_variants(word: str) -> Set[SpellingVariant]:
    out: Set[SpellingVariant] = set()
    for regex, replacements in COMMON_MISTAKES:
        m = regex.search(word)
        if m is None:
            continue
        for replacement in replacements:
            mistake = word[:m.start()] + replacement + word[m.end():]
            if mistake != word:
                out.add(SpellingVariant(mistake, word))
    return out


def _deletion_variants(word: str, lemma: str) -> Set[SpellingVariant]:
    # first and last units are never deleted
    units = split_word(word, lemma)
    return {
        SpellingVariant("".join(units[:i] + units[i + 1:]), word)
        for i in range(1, len(units) - 1)
    }


def generate_spellings(wordform: str, lemma: Optional[str] = None) -> Set[SpellingVariant]:
    """
    Return the set of (mistake, correct) variants for ``wordform``.

    ``correct`` is always the normalized wordform; ``lemma`` (defaults to
    the wordform) selects the digraph rules used for deletions.
    """
    word = normalize_word(wordform)
    lemma = wordform if lemma is None else lemma
    return _rule_variants(word) | _deletion_variants(word, lemma)
