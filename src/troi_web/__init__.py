"""JSON API for the prediction engine."""
from .web import app, main

__all__ = ["app", "main"]
