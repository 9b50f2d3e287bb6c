# troi/engine.py
from __future__ import annotations

import logging
import threading
from typing import List, Optional, Sequence

from . import config as CFG
from .DB.api import NgramStore, make_store
from .errors import NotInitializedError, StoreIOError
from .models import WordPrediction
from .normalize import context_words
from .search import predict_next

log = logging.getLogger(__name__)


class Engine:
    """
    Owns the n-gram store and runs predictions against it.

    Public API (used by CLI/Flask):
      * initialize(store_location): open the store; repeated calls are no-ops
      * predict(context_words, max_results): ranked next-word predictions
      * get_suggestions(text, partial_word): predict() from raw editor text
      * cleanup(): close the store and return to the uninitialized state

    Store locations (via troi.DB.api.make_store):
      - "sqlite:///path/to/literatim.sqlite" or a bare path
      - "memory://"

    One lock guards the store handle, so a single Engine may be shared
    between worker threads; calls are serialized.
    """

    # ------------- lifecycle -------------

    def __init__(
        self,
        *,
        max_context_words: int = CFG.MAX_CONTEXT_WORDS,
        context_multiplier: int = CFG.CONTEXT_LENGTH_MULTIPLIER,
    ) -> None:
        self.max_context_words = max_context_words
        self.context_multiplier = context_multiplier
        self._store: Optional[NgramStore] = None
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._store is not None

    @property
    def store(self) -> Optional[NgramStore]:
        return self._store

    # /* ~~~ Open the store once; later calls keep the existing handle ~~~ */
    def initialize(self, store_location: str = CFG.DEFAULT_DSN) -> None:
        with self._lock:
            if self._store is not None:
                log.debug("initialize(%s): already initialized", store_location)
                return
            # StoreIOError propagates and leaves the engine uninitialized
            self._store = make_store(store_location)
            log.info("Engine initialized: store=%s", store_location)

    def attach_store(self, store: NgramStore) -> None:
        """Use an already opened store (e.g. a seeded MemoryStore)."""
        with self._lock:
            if self._store is not None:
                raise RuntimeError("Engine already has a store; call cleanup() first")
            self._store = store

    # ------------- query -------------

    def predict(self, context_words: Sequence[str], max_results: int = CFG.TOP_K) -> List[WordPrediction]:
        """
        Rank the words that may complete ``context_words``.

        The last element is the partially typed word ("" for a new word);
        the ones before it are the context, oldest first.
        """
        with self._lock:
            store = self._store
            if store is None:
                raise NotInitializedError("Engine not initialized. Call initialize() first.")
            if store.closed:
                log.warning("predict(): store is closed, returning no predictions")
                return []
            try:
                return predict_next(
                    store,
                    list(context_words),
                    max_results,
                    max_context_words=self.max_context_words,
                    context_multiplier=self.context_multiplier,
                )
            except StoreIOError as exc:
                log.warning("predict(): store unavailable (%s), returning no predictions", exc)
                return []

    def get_suggestions(
        self,
        text: str,
        partial_word: str = "",
        *,
        gesture: bool = False,
        max_results: int = CFG.SUGGESTION_ROWS,
    ) -> List[WordPrediction]:
        """Predict from the text before the caret and the word being composed."""
        if gesture:
            # gesture input has no typed prefix to filter on
            partial_word = ""
        return self.predict(context_words(text, partial_word), max_results)

    # ------------- teardown -------------

    # /* ~~~ Close underlying resources ~~~ */
    def cleanup(self) -> None:
        with self._lock:
            try:
                if self._store is not None:
                    self._store.close()
            finally:
                self._store = None
                log.info("Engine cleanup complete")
