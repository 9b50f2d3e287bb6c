from __future__ import annotations
import argparse, json, logging, sys
from typing import List

from .config import DEFAULT_DSN, TOP_K
from .DB.sqlite_store import SQLiteStore
from .engine import Engine
from .errors import StoreIOError
from .loader import load_cross_wordforms, load_ngrams
from .models import WordPrediction
from .normalize import partial_word


def _print_table(rows: List[WordPrediction]) -> None:
    if not rows:
        print("(no predictions)"); return
    print("#  Score     Wordform")
    for i, r in enumerate(rows, 1):
        print(f"{i:<2} {r.score:<9} {r.wordform}")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Welsh next-word prediction CLI")
    p.add_argument("--db", default=DEFAULT_DSN, help="Store: sqlite:///path, a path, or memory://")
    p.add_argument("--build", action="store_true", help="Build the SQLite store at --db from --roots first")
    p.add_argument("--roots", nargs="+", default=[], help="Folders to scan for .txt when building")
    p.add_argument("--cross", default=None, help="TSV of wordform, cross_wordform, score rows to include when building")
    p.add_argument("-k", type=int, default=TOP_K, help="Maximum predictions")
    p.add_argument("--q", default=None, help="Text before the caret, e.g. 'bore da ' or 'diolch yn f'")
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    if args.build:
        if not args.roots:
            p.error("--build requires --roots")
        if args.db.startswith("memory://"):
            p.error("--build needs a SQLite --db")
        cross = list(load_cross_wordforms(args.cross)) if args.cross else []
        SQLiteStore.build(args.db.removeprefix("sqlite:///"), load_ngrams(args.roots), cross).close()

    eng = Engine()
    try:
        try:
            eng.initialize(args.db)
        except StoreIOError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2

        def run_query(q: str):
            rows = eng.get_suggestions(q, partial_word(q), max_results=args.k)
            if args.json:
                print(json.dumps([{"wordform": r.wordform, "score": r.score} for r in rows],
                                 ensure_ascii=False, indent=2))
            else:
                _print_table(rows)

        if args.q is not None:
            run_query(args.q)

        if args.repl:
            print("Type the text before the caret (end with a space for a new word; empty line to exit).")
            while True:
                try:
                    q = input("> ")
                except (EOFError, KeyboardInterrupt):
                    break
                if not q:
                    break
                run_query(q)

        return 0
    finally:
        eng.cleanup()


if __name__ == "__main__":
    sys.exit(main())
