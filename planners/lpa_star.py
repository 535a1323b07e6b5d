#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LPA* behind the unified planner API.

plan(grid, start, goal) builds a fresh engine from the occupancy grid;
replan(edits) feeds cell edits to that same engine and repairs the solution
incrementally. Both return {'success': bool, 'path': list[(r,c)] or None,
'expansions': int} where expansions counts the work of that call only.

Grid convention: grid[r, c] == True means blocked; start/goal are (r, c).
"""

from __future__ import annotations
from typing import Dict, Iterable, Optional, Tuple

import numpy as np

from lifelong import LpAstarCore, PlannerConfig
from lifelong.config import DEFAULT_HEURISTIC


class LpaStarPlanner:
    def __init__(self, heuristic=DEFAULT_HEURISTIC, connectivity: int = 8):
        # The engine is 8-connected only; the argument exists for registry symmetry
        assert connectivity == 8
        self.conn = connectivity
        self.heuristic = heuristic
        self.core: Optional[LpAstarCore] = None

    def _result(self, found: bool, expansions_before: int) -> Dict:
        path = self.core.path() if found else None
        return {
            'success': path is not None,
            'path': [c.to_rc() for c in path] if path is not None else None,
            'expansions': self.core.stats.expansions - expansions_before,
        }

    def plan(self, grid: np.ndarray, start: Tuple[int, int], goal: Tuple[int, int]) -> Dict:
        H, W = grid.shape
        sr, sc = start; gr, gc = goal
        if not (0 <= sr < H and 0 <= sc < W and 0 <= gr < H and 0 <= gc < W):
            return {'success': False, 'path': None, 'expansions': 0}
        if grid[sr, sc] or grid[gr, gc]:
            return {'success': False, 'path': None, 'expansions': 0}

        config = PlannerConfig.from_grid(np.asarray(grid, dtype=bool), start, goal, self.heuristic)
        self.core = LpAstarCore.from_config(config)
        return self._result(self.core.compute_shortest_path(), 0)

    def replan(self, edits: Iterable) -> Dict:
        """Apply Edit(coordinate, blocked) records to the live engine and repair."""
        if self.core is None:
            raise RuntimeError("replan() called before plan()")
        before = self.core.stats.expansions
        return self._result(self.core.replan(edits), before)
