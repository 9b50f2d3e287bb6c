# troi/DB/api.py
from __future__ import annotations

from typing import List, Optional, Protocol, Sequence, Tuple

Row = Tuple[str, int]


class NgramStore(Protocol):
    """
    Read-only query contract over the two store tables:

      ngrams(context, wordform, score)
      cross_wordforms(wordform, cross_wordform, score)

    ``patterns`` are GLOB-style prefixes: each one matches a value that
    starts with it, where '?' stands for exactly one character. An empty
    ``patterns`` applies no prefix filter. Rows whose matched column equals
    ``exact`` come first, then by score descending, then by wordform.
    """
    # Read
    def query_ngrams(
        self, context: str, patterns: Sequence[str] = (), *, exact: Optional[str] = None, limit: int
    ) -> List[Row]: ...
    def query_cross_wordforms(
        self, context: str, patterns: Sequence[str], *, exact: Optional[str] = None, limit: int
    ) -> List[Row]: ...
    def count(self) -> int: ...
    # lifecycle
    @property
    def closed(self) -> bool: ...
    def close(self) -> None: ...


def make_store(dsn: str) -> NgramStore:
    """
    Factory:
      - sqlite:///path -> SQLiteStore (opened read-only; must already exist)
      - memory://      -> MemoryStore (empty; seed it with add_ngrams())
      - any other string is taken as a path to a SQLite file
    """
    if dsn.startswith("memory://"):
        from .memory_store import MemoryStore
        return MemoryStore()

    if "://" in dsn and not dsn.startswith("sqlite:///"):
        raise ValueError(f"Unsupported store DSN: {dsn}")

    # Lazy import to avoid a circular import
    from .sqlite_store import SQLiteStore
    return SQLiteStore(dsn.removeprefix("sqlite:///"))
