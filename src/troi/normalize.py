from __future__ import annotations
import re
from typing import List

# Splits running text into phrases: dangling hyphens, punctuation other than
# apostrophes, and any token containing a digit all end a phrase.
PHRASE_SEPARATOR = re.compile(r"(?:-+(?!\w)|(?<!\w)-+|[^-\w'’\s]|\S*[0-9]+\S*)+")

_PARTIAL = re.compile(r"\S*\Z")


def phrases(line: str) -> List[List[str]]:
    """Split one line into phrases, each a list of words."""
    return [words for words in (p.split() for p in PHRASE_SEPARATOR.split(line)) if words]


def partial_word(text: str) -> str:
    """
    The word being typed at the end of ``text``.

    Empty right after a space or a phrase separator, so "bore da," starts a
    new word rather than continuing "da,".
    """
    return PHRASE_SEPARATOR.split(_PARTIAL.search(text).group())[-1]


def context_words(text: str, partial: str = "") -> List[str]:
    """
    Turn the text before the caret into the word list predict() expects.

    The partial word is removed from the end of ``text`` if present and
    appended as the final element, even when empty:

        context_words("Bore da, sut mae ", "")   -> ["sut", "mae", ""]
        context_words("diolch yn f", "f")        -> ["diolch", "yn", "f"]
    """
    line = text[text.rfind("\n") + 1:].strip()
    if partial and line.endswith(partial):
        line = line[:-len(partial)].strip()
    words = PHRASE_SEPARATOR.split(line)[-1].split()
    return words + [partial]
