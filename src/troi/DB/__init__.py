from .api import NgramStore, make_store

__all__ = ["NgramStore", "make_store"]
