from __future__ import annotations


class TroiError(Exception):
    """Base class for prediction engine errors."""


class NotInitializedError(TroiError, RuntimeError):
    """predict() was called before initialize() succeeded."""


class StoreIOError(TroiError, OSError):
    """The n-gram store is missing, unreadable, or not a valid store."""


class StoreContractViolation(TroiError, ValueError):
    """A store row did not have the (wordform: str, score: int) shape."""
