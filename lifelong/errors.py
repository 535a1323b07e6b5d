# -*- coding: utf-8 -*-
"""
Error kinds raised by the planner core.

An unreachable goal is a result, not an error: compute_shortest_path returns
`False` and path returns `None`.
"""

from __future__ import annotations


class PlanningError(Exception):
    """Base class for every error the planner core raises."""


class OutOfBounds(PlanningError, IndexError):
    """A coordinate lies outside the matrix."""

    def __init__(self, coordinate, rows: int, cols: int):
        self.coordinate = coordinate
        self.rows = rows
        self.cols = cols
        super().__init__(f"{coordinate} is outside a {rows}x{cols} matrix")


class UnknownHeuristic(PlanningError, ValueError):
    """The requested heuristic name is not in the registry."""

    def __init__(self, name, available):
        self.name = name
        self.available = sorted(available)
        super().__init__(f"Unknown heuristic '{name}', expected one of {self.available}")


class Underflow(PlanningError, IndexError):
    """Pop or top on an empty priority queue."""
