# Default number of predictions returned by predict()
TOP_K: int = 5

# Rows requested when suggestions are pulled from raw editor text
SUGGESTION_ROWS: int = 5

# Context window: at most this many words precede the word being typed
MAX_CONTEXT_WORDS: int = 4

# Ranking formula tuning (empirically chosen, treat as configuration)
CONTEXT_LENGTH_MULTIPLIER: int = 10
FULL_WORD_MULTIPLIER: int = 2   # reserved for exact-match boosting; not applied by the ranking

# /* ~~~ fuzzy search caps ~~~ */
MIN_WILDCARD_LENGTH: int = 3        # spelling prefixes shorter than this get no '?' variants
MIN_CROSS_PREFIX_LENGTH: int = 2    # cross_wordforms lookup needs at least this many typed chars

# Store
DATABASE_FILE_NAME: str = "literatim.sqlite"
DEFAULT_DSN: str = f"sqlite:///{DATABASE_FILE_NAME}"
