from __future__ import annotations
import argparse
import logging
from flask import Flask, request, jsonify
from troi.config import DEFAULT_DSN, TOP_K
from troi.engine import Engine
from troi.errors import NotInitializedError
from troi.normalize import partial_word

app = Flask(__name__)
_engine: Engine | None = None

# ---------- API ----------
@app.get("/api/predict")
def api_predict():
    """q is the text before the caret; a trailing space means a new word."""
    q = request.args.get("q", "", type=str)
    k = request.args.get("k", TOP_K, type=int)
    if k < 0:
        return jsonify({"error": "k must be a non-negative integer"}), 400
    if _engine is None:
        return jsonify({"error": "engine not initialized"}), 503
    try:
        rows = _engine.get_suggestions(q, partial_word(q), max_results=k)
    except NotInitializedError:
        return jsonify({"error": "engine not initialized"}), 503
    return jsonify([{"wordform": r.wordform, "score": r.score} for r in rows])


@app.get("/api/health")
def api_health():
    ok = _engine is not None and _engine.initialized
    return jsonify({"ok": ok}), (200 if ok else 503)


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the prediction JSON API on top of Engine")
    ap.add_argument("--db", dest="db", default=DEFAULT_DSN)  # "sqlite:///path" or a path
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    global _engine
    _engine = Engine()
    _engine.initialize(args.db)
    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.cleanup()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
