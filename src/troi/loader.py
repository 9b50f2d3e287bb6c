from __future__ import annotations
import csv
import logging
import os
from collections import Counter
from typing import Iterable, Iterator, List, Tuple

from .config import MAX_CONTEXT_WORDS
from .models import CrossWordformRow, NgramRow
from .normalize import phrases

log = logging.getLogger(__name__)

PROGRESS_EVERY_FILES = 500


def _iter_txt_files(roots: Iterable[str]) -> Iterable[str]:
    """Yield paths of *.txt files recursively under each root, in a stable order."""
    for root in roots:
        root = os.path.abspath(root)
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            for fn in sorted(filenames):
                if fn.lower().endswith(".txt"):
                    yield os.path.join(dirpath, fn)


def count_ngrams(lines: Iterable[str], max_context: int = MAX_CONTEXT_WORDS) -> Counter:
    """
    Count (context, wordform) pairs in running text.

    Every word is counted once with an empty context and once with each of
    the 1..max_context words before it, within the same phrase. Words are
    lowercased first, so a sentence-initial "Bore" counts as "bore".
    """
    counts: Counter = Counter()
    for line in lines:
        for words in phrases(line.lower()):
            for i, word in enumerate(words):
                for n in range(0, min(i, max_context) + 1):
                    counts[(" ".join(words[i - n:i]), word)] += 1
    return counts


def load_ngrams(roots: List[str], max_context: int = MAX_CONTEXT_WORDS) -> List[NgramRow]:
    """Scan roots for *.txt and return one NgramRow per (context, wordform), scored by frequency."""
    counts: Counter = Counter()
    file_count = 0
    for path in _iter_txt_files(roots):
        try:
            with open(path, "r", encoding="utf-8", errors="ignore") as f:
                counts.update(count_ngrams(f, max_context))
        except OSError as exc:
            log.warning("skipping %s: %s", path, exc)
            continue
        file_count += 1
        if file_count % PROGRESS_EVERY_FILES == 0:
            log.info("[scanned] files=%d ngrams=%d", file_count, len(counts))

    log.info("[done] files=%d ngrams=%d", file_count, len(counts))
    return [NgramRow(context, wordform, score) for (context, wordform), score in sorted(counts.items())]


def _parse_cross_row(fields: List[str], where: Tuple[str, int]) -> CrossWordformRow:
    if len(fields) != 3:
        raise ValueError(f"{where[0]}:{where[1]}: expected 3 tab-separated fields, got {len(fields)}")
    wordform, cross_wordform, score = fields
    try:
        return CrossWordformRow(wordform, cross_wordform, int(score))
    except ValueError as exc:
        raise ValueError(f"{where[0]}:{where[1]}: score is not an integer: {score!r}") from exc


def load_cross_wordforms(path: str) -> Iterator[CrossWordformRow]:
    """Read wordform<TAB>cross_wordform<TAB>score lines; blank lines and '#' comments are skipped."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        for line_no, fields in enumerate(csv.reader(f, delimiter="\t"), start=1):
            if not fields or fields[0].startswith("#"):
                continue
            yield _parse_cross_row(fields, (path, line_no))
