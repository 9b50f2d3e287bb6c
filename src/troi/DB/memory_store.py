# troi/DB/memory_store.py
from __future__ import annotations

import re
from collections import defaultdict
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..errors import StoreIOError
from ..models import CrossWordformRow, NgramRow
from .api import NgramStore, Row


def _glob_class(body: str, negate: bool) -> Optional[str]:
    members, k = [], 0
    while k < len(body):
        if k + 2 < len(body) and body[k + 1] == "-":
            lo, hi = body[k], body[k + 2]
            if lo <= hi:  # SQLite: a reversed range matches nothing
                members.append(f"{re.escape(lo)}-{re.escape(hi)}")
            k += 3
        else:
            members.append(re.escape(body[k]))
            k += 1
    if not members:
        return "." if negate else None
    return ("[^" if negate else "[") + "".join(members) + "]"


@lru_cache(maxsize=1024)
def _glob_prefix(pattern: str) -> Optional[re.Pattern]:
    """
    Compile ``pattern`` the way SQLite reads ``value GLOB pattern||'*'``.

    ``*`` and ``?`` are wildcards. ``[...]`` is a character class, negated by
    a leading ``^`` (``!`` is an ordinary member), and a ``]`` right after the
    opening bracket is a member too. Returns None when nothing can match,
    e.g. for an unclosed ``[``.
    """
    out, i, n = [], 0, len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c == "*":
            out.append(".*")
        elif c == "?":
            out.append(".")
        elif c == "[":
            negate = i < n and pattern[i] == "^"
            start = i + 1 if negate else i
            end = pattern.find("]", start + 1)
            if end < 0:
                return None
            cls = _glob_class(pattern[start:end], negate)
            if cls is None:
                return None
            out.append(cls)
            i = end + 1
        else:
            out.append(re.escape(c))
    return re.compile("".join(out), re.DOTALL)


def _starts_with_any(value: str, patterns: Sequence[str]) -> bool:
    if not patterns:
        return True
    return any(rx.match(value) for rx in map(_glob_prefix, patterns) if rx is not None)


def _ordered(rows: List[Tuple[str, int, str]], exact: Optional[str], limit: int) -> List[Row]:
    # rows: (wordform, score, matched column)
    rows.sort(key=lambda r: (exact is not None and r[2] != exact, -r[1], r[0]))
    return [(w, s) for w, s, _ in rows[:max(0, limit)]]


class MemoryStore(NgramStore):
    """Simple in-memory store (useful for tests or ephemeral runs)."""

    def __init__(
        self,
        ngrams: Iterable[NgramRow] = (),
        cross_wordforms: Iterable[CrossWordformRow] = (),
    ) -> None:
        self._ngrams: Dict[str, Dict[str, int]] = defaultdict(dict)  # context -> wordform -> score
        self._cross: List[CrossWordformRow] = []
        self._closed = False
        self.add_ngrams(ngrams)
        self.add_cross_wordforms(cross_wordforms)

    # C
    def add_ngrams(self, rows: Iterable[NgramRow]) -> int:
        n = 0
        for r in rows:
            self._ngrams[r.context][r.wordform] = r.score; n += 1
        return n

    def add_cross_wordforms(self, rows: Iterable[CrossWordformRow]) -> int:
        before = len(self._cross)
        self._cross.extend(rows)
        return len(self._cross) - before

    # R
    def query_ngrams(
        self, context: str, patterns: Sequence[str] = (), *, exact: Optional[str] = None, limit: int
    ) -> List[Row]:
        self._check_open()
        rows = [
            (w, s, w) for w, s in self._ngrams.get(context, {}).items()
            if _starts_with_any(w, patterns)
        ]
        return _ordered(rows, exact, limit)

    def query_cross_wordforms(
        self, context: str, patterns: Sequence[str], *, exact: Optional[str] = None, limit: int
    ) -> List[Row]:
        self._check_open()
        in_context = self._ngrams.get(context, {})
        rows = [
            (cw.wordform, cw.score + in_context[cw.wordform], cw.cross_wordform)
            for cw in self._cross
            if cw.wordform in in_context and _starts_with_any(cw.cross_wordform, patterns)
        ]
        return _ordered(rows, exact, limit)

    def count(self) -> int:
        return sum(len(forms) for forms in self._ngrams.values())

    # lifecycle
    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True
        self._ngrams.clear()
        self._cross.clear()

    def _check_open(self) -> None:
        if self._closed:
            raise StoreIOError("memory store is closed")
