from __future__ import annotations

from typing import List

WILDCARD = "?"


def build_wildcards(s: str) -> List[str]:
    """
    Insert a single-character wildcard at each interior position of ``s``.

    "bore" -> ["b?ore", "bo?re"]. Neither the first nor the last character
    boundary gets one, so strings shorter than 3 yield nothing.
    """
    return [s[:i] + WILDCARD + s[i:] for i in range(1, len(s) - 1)]
