# -*- coding: utf-8 -*-
"""
Planners on grid maps with a unified API:
planner.plan(grid: np.ndarray[bool], start: (r,c), goal: (r,c))
  -> {'success': bool, 'path': List[(r,c)] or None}
"""

from __future__ import annotations
from typing import Dict, Type

from .bfs import BFSPlanner
from .lpa_star import LpaStarPlanner

# Mapping used by factories and tests
PLANNERS: Dict[str, Type] = {
    "bfs": BFSPlanner,
    "lpa_star": LpaStarPlanner,
}

__all__ = [
    "BFSPlanner",
    "LpaStarPlanner",
    "PLANNERS",
]
