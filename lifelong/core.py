#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
core.py
-------
Value types shared by the LPA* engine:

- Coordinate : integer cell id (x = column, y = row) with 8-neighbourhood
- LpState    : immutable snapshot of one cell (g, r, blocked flag)
- Key        : two-component lexicographic priority of a cell

Costs are plain ints. INFINITY is the 32-bit signed maximum and acts as the
"unreached" sentinel; all additions go through saturating_add so that
INFINITY + 1 stays INFINITY.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Tuple, Union

COST: int = 1
INFINITY: int = 2_147_483_647

# Neighbour deltas (dx, dy), row-major with the centre omitted
DELTAS_8: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (0, -1), (+1, -1),
    (-1,  0),          (+1,  0),
    (-1, +1), (0, +1), (+1, +1),
)


def cost() -> int:
    """Uniform step cost between two neighbouring cells."""
    return COST


def infinity() -> int:
    return INFINITY


def saturating_add(a: int, b: int) -> int:
    if a >= INFINITY or b >= INFINITY:
        return INFINITY
    return min(a + b, INFINITY)


@dataclass(frozen=True)
class Coordinate:
    x: int
    y: int

    def neighbours(self) -> List["Coordinate"]:
        """The eight cells at Chebyshev distance 1 (bounds are not checked)."""
        return [Coordinate(self.x + dx, self.y + dy) for dx, dy in DELTAS_8]

    def to_rc(self) -> Tuple[int, int]:
        """(row, col) index into a numpy grid."""
        return (self.y, self.x)

    @classmethod
    def from_rc(cls, rc: Sequence[int]) -> "Coordinate":
        r, c = rc
        return cls(int(c), int(r))

    def __str__(self) -> str:
        return f"[x = {self.x}, y = {self.y}]"


CoordinateLike = Union[Coordinate, Tuple[int, int]]


def as_coordinate(value: CoordinateLike) -> Coordinate:
    """Accept a Coordinate or an (x, y) pair."""
    if isinstance(value, Coordinate):
        return value
    x, y = value
    return Coordinate(int(x), int(y))


@dataclass(frozen=True)
class LpState:
    """Snapshot of one cell. Equality ignores the blocked flag."""
    coordinate: Coordinate
    g: int = INFINITY
    r: int = INFINITY
    is_blocked: bool = field(default=False, compare=False)

    @property
    def is_consistent(self) -> bool:
        return self.g == self.r

    def __str__(self) -> str:
        flag = " blocked" if self.is_blocked else ""
        return f"{self.coordinate} g={self.g} r={self.r}{flag}"


Heuristic = Callable[[Coordinate, Coordinate], int]


@dataclass(frozen=True, order=True)
class Key:
    """
    Priority of a cell: k2 = min(g, r), k1 = k2 + h(cell, goal).
    Ordering is lexicographic on (k1, k2).
    """
    k1: int
    k2: int

    @classmethod
    def of(cls, state: LpState, heuristic: Heuristic, goal: Coordinate) -> "Key":
        k2 = min(state.g, state.r)
        return cls(saturating_add(k2, heuristic(state.coordinate, goal)), k2)
