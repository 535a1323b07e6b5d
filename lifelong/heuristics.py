# -*- coding: utf-8 -*-
"""
Heuristic registry: name -> pure function (Coordinate, Coordinate) -> int.
"""

from __future__ import annotations

import math
from typing import Dict, Union

from .core import Coordinate, Heuristic
from .errors import UnknownHeuristic


def manhattan(a: Coordinate, b: Coordinate) -> int:
    """
    Grid distance in unit moves. With 8-connected unit-cost steps a diagonal
    counts as one move, so this is the larger of the two axis offsets:
    manhattan((3, 4), (9, 9)) == 6.
    """
    return max(abs(a.x - b.x), abs(a.y - b.y))


def euclidean(a: Coordinate, b: Coordinate) -> int:
    dx = a.x - b.x
    dy = a.y - b.y
    return math.isqrt(dx * dx + dy * dy)  # floor of the exact root


# Mapping used by the engine and config validation
HEURISTICS: Dict[str, Heuristic] = {
    "manhattan": manhattan,
    "euclidean": euclidean,
}


def get_heuristic(heuristic: Union[str, Heuristic]) -> Heuristic:
    """Resolve a registry name; callables are passed through unchanged."""
    if callable(heuristic):
        return heuristic
    try:
        return HEURISTICS[heuristic]
    except KeyError:
        raise UnknownHeuristic(heuristic, HEURISTICS.keys()) from None


__all__ = ["HEURISTICS", "get_heuristic", "manhattan", "euclidean"]
