# troi/DB/sqlite_store.py
from __future__ import annotations

import logging
import os
import sqlite3
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..errors import StoreIOError
from ..models import CrossWordformRow, NgramRow
from .api import NgramStore, Row

log = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS ngrams (
  context TEXT NOT NULL,
  wordform TEXT NOT NULL,
  score INTEGER NOT NULL,
  PRIMARY KEY (context, wordform)
);
CREATE TABLE IF NOT EXISTS cross_wordforms (
  wordform TEXT NOT NULL,
  cross_wordform TEXT NOT NULL,
  score INTEGER NOT NULL,
  PRIMARY KEY (wordform, cross_wordform)
);
CREATE INDEX IF NOT EXISTS ngrams_wordform ON ngrams(wordform);
CREATE INDEX IF NOT EXISTS cross_wordforms_cross ON cross_wordforms(cross_wordform);
"""

_REQUIRED_TABLES = {"ngrams", "cross_wordforms"}


def _glob_any(column: str, n: int) -> str:
    # one "starts with" GLOB per pattern; '?' inside a pattern is a single-char wildcard
    return "(" + " OR ".join(f"{column} GLOB ?||'*'" for _ in range(n)) + ")"


class SQLiteStore(NgramStore):
    """Read-only n-gram store backed by a SQLite file."""

    def __init__(self, db_path: str) -> None:
        self.db_path = os.path.abspath(db_path)
        self._closed = False
        if not os.path.isfile(self.db_path):
            raise StoreIOError(f"n-gram store not found: {self.db_path}")
        uri = f"{Path(self.db_path).as_uri()}?mode=ro"
        try:
            self.conn = sqlite3.connect(uri, uri=True, check_same_thread=False)
        except sqlite3.Error as exc:
            raise StoreIOError(f"cannot open n-gram store {self.db_path}: {exc}") from exc
        try:
            self._check_schema()
        except StoreIOError:
            self.conn.close()
            raise
        except sqlite3.Error as exc:
            self.conn.close()
            raise StoreIOError(f"{self.db_path} is not a readable n-gram store: {exc}") from exc
        log.info("Opened n-gram store %s (read-only)", self.db_path)

    @classmethod
    def build(
        cls,
        db_path: str,
        ngrams: Iterable[NgramRow],
        cross_wordforms: Iterable[CrossWordformRow] = (),
    ) -> "SQLiteStore":
        """Write a fresh store file (atomically replacing any old one) and open it."""
        db_path = os.path.abspath(db_path)
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)

        tmp = f"{db_path}.tmp"
        if os.path.exists(tmp):
            os.remove(tmp)
        conn = sqlite3.connect(tmp)
        try:
            conn.executescript(_SCHEMA)
            conn.executemany(
                "INSERT OR REPLACE INTO ngrams(context, wordform, score) VALUES (?,?,?)",
                ((r.context, r.wordform, r.score) for r in ngrams),
            )
            conn.executemany(
                "INSERT OR REPLACE INTO cross_wordforms(wordform, cross_wordform, score) VALUES (?,?,?)",
                ((r.wordform, r.cross_wordform, r.score) for r in cross_wordforms),
            )
            conn.commit()
        finally:
            conn.close()
        os.replace(tmp, db_path)
        return cls(db_path)

    # ---- Read ----
    def query_ngrams(
        self, context: str, patterns: Sequence[str] = (), *, exact: Optional[str] = None, limit: int
    ) -> List[Row]:
        sql = "SELECT wordform, score FROM ngrams WHERE context=?"
        args: list = [context]
        if patterns:
            sql += " AND " + _glob_any("wordform", len(patterns))
            args += patterns
        if exact is not None:
            sql += " ORDER BY CASE WHEN wordform=? THEN 0 ELSE 1 END, score DESC, wordform"
            args.append(exact)
        else:
            sql += " ORDER BY score DESC, wordform"
        sql += " LIMIT ?"
        args.append(int(limit))
        return self._fetch(sql, args)

    def query_cross_wordforms(
        self, context: str, patterns: Sequence[str], *, exact: Optional[str] = None, limit: int
    ) -> List[Row]:
        sql = (
            "SELECT n.wordform, cw.score + n.score AS cmb_score "
            "FROM cross_wordforms cw "
            "INNER JOIN ngrams n ON cw.wordform=n.wordform "
            "WHERE n.context=?"
        )
        args: list = [context]
        if patterns:
            sql += " AND " + _glob_any("cw.cross_wordform", len(patterns))
            args += patterns
        if exact is not None:
            sql += " ORDER BY CASE WHEN cw.cross_wordform=? THEN 0 ELSE 1 END, cmb_score DESC, n.wordform"
            args.append(exact)
        else:
            sql += " ORDER BY cmb_score DESC, n.wordform"
        sql += " LIMIT ?"
        args.append(int(limit))
        return self._fetch(sql, args)

    def count(self) -> int:
        return self._fetch("SELECT COUNT(*) FROM ngrams", [])[0][0]

    # ---- lifecycle ----
    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.conn.close()
        log.info("Closed n-gram store %s", self.db_path)

    # ---- internals ----
    def _check_schema(self) -> None:
        names = {
            row[0] for row in self.conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        }
        missing = _REQUIRED_TABLES - names
        if missing:
            raise StoreIOError(f"{self.db_path} is missing tables: {', '.join(sorted(missing))}")

    def _fetch(self, sql: str, args: list) -> List[Row]:
        if self._closed:
            raise StoreIOError(f"n-gram store {self.db_path} is closed")
        try:
            return self.conn.execute(sql, args).fetchall()
        except sqlite3.Error as exc:
            raise StoreIOError(f"query failed on {self.db_path}: {exc}") from exc
