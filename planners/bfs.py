#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Breadth-First Search planner (unweighted shortest hops).
- Works on 4- or 8-connected grids.
- Every move costs 1 (diagonals included), the same cost model as the LPA*
  engine, so on 8-connected grids its hop count is the true optimum.
- Neighbours are tried in the engine's fixed order.
"""

from __future__ import annotations
from collections import deque
from typing import Dict, List, Optional, Tuple

import numpy as np

from envs.generator import DELTAS_4, DELTAS_8


class BFSPlanner:
    def __init__(self, connectivity: int = 8):
        assert connectivity in (4, 8)
        self.conn = connectivity
        self.deltas = DELTAS_8 if connectivity == 8 else DELTAS_4

    @staticmethod
    def _reconstruct(parent: np.ndarray, start: Tuple[int, int],
                     goal: Tuple[int, int]) -> List[Tuple[int, int]]:
        W = parent.shape[1]
        path = [goal]
        r, c = goal
        while (r, c) != start:
            r, c = divmod(int(parent[r, c]), W)
            path.append((r, c))
        path.reverse()
        return path

    def _search(self, grid: np.ndarray, start: Tuple[int, int],
                goal: Tuple[int, int]) -> Optional[List[Tuple[int, int]]]:
        H, W = grid.shape
        visited = np.zeros((H, W), dtype=bool)
        parent = np.full((H, W), -1, dtype=np.int64)  # flat index of predecessor

        dq = deque([start])
        visited[start] = True
        while dq:
            r, c = dq.popleft()
            if (r, c) == goal:
                return self._reconstruct(parent, start, goal)
            for dr, dc in self.deltas:
                nr, nc = r + int(dr), c + int(dc)
                if nr < 0 or nr >= H or nc < 0 or nc >= W:
                    continue
                if visited[nr, nc] or grid[nr, nc]:
                    continue
                visited[nr, nc] = True
                parent[nr, nc] = r * W + c
                dq.append((nr, nc))
        return None

    def plan(self, grid: np.ndarray, start: Tuple[int, int], goal: Tuple[int, int]) -> Dict:
        H, W = grid.shape
        start = (int(start[0]), int(start[1]))
        goal = (int(goal[0]), int(goal[1]))
        sr, sc = start; gr, gc = goal
        if not (0 <= sr < H and 0 <= sc < W and 0 <= gr < H and 0 <= gc < W):
            return {'success': False, 'path': None}
        if grid[sr, sc] or grid[gr, gc]:
            return {'success': False, 'path': None}
        path = self._search(grid, start, goal)
        return {'success': path is not None, 'path': path}
