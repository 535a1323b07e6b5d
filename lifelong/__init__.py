# -*- coding: utf-8 -*-
"""
Incremental grid path planning with Lifelong Planning A*.

    core = LpAstarCore(rows, cols, start, goal, "manhattan", blocked)
    core.compute_shortest_path()   # -> bool (False = no path)
    core.set_blocked(c, True)      # edit, then compute again to repair
    core.path()                    # -> list[Coordinate] or None
"""

from __future__ import annotations

from .config import DEFAULT_HEURISTIC, PlannerConfig
from .core import (COST, INFINITY, Coordinate, Key, LpState, as_coordinate,
                   cost, infinity, saturating_add)
from .errors import OutOfBounds, PlanningError, Underflow, UnknownHeuristic
from .heuristics import HEURISTICS, euclidean, get_heuristic, manhattan
from .lp_astar import CellStatus, LpAstarCore, SearchStats
from .matrix import Cell, Matrix
from .priority_queue import PriorityQueue

__all__ = [
    "COST", "INFINITY", "cost", "infinity", "saturating_add",
    "Coordinate", "as_coordinate", "LpState", "Key",
    "HEURISTICS", "get_heuristic", "manhattan", "euclidean",
    "PriorityQueue", "Matrix", "Cell",
    "LpAstarCore", "CellStatus", "SearchStats",
    "PlannerConfig", "DEFAULT_HEURISTIC",
    "PlanningError", "OutOfBounds", "UnknownHeuristic", "Underflow",
]
