# -*- coding: utf-8 -*-
"""
Planner configuration: everything needed to construct an LpAstarCore.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Tuple, Union

import numpy as np

from .core import Coordinate, CoordinateLike, Heuristic, as_coordinate
from .errors import OutOfBounds
from .heuristics import get_heuristic

DEFAULT_HEURISTIC = "manhattan"


@dataclass(frozen=True)
class PlannerConfig:
    rows: int
    cols: int
    start: Coordinate
    goal: Coordinate
    heuristic: Union[str, Heuristic] = DEFAULT_HEURISTIC
    blocked: FrozenSet[Coordinate] = field(default_factory=frozenset)

    @classmethod
    def build(cls, rows: int, cols: int,
              start: CoordinateLike, goal: CoordinateLike,
              heuristic: Union[str, Heuristic] = DEFAULT_HEURISTIC,
              blocked: Iterable[CoordinateLike] = ()) -> "PlannerConfig":
        return cls(rows=int(rows), cols=int(cols),
                   start=as_coordinate(start), goal=as_coordinate(goal),
                   heuristic=heuristic,
                   blocked=frozenset(as_coordinate(b) for b in blocked))

    @classmethod
    def from_grid(cls, grid: np.ndarray,
                  start: Tuple[int, int], goal: Tuple[int, int],
                  heuristic: Union[str, Heuristic] = DEFAULT_HEURISTIC) -> "PlannerConfig":
        """
        Build from a boolean occupancy grid (True = blocked) with start/goal
        given as (r, c), the grid convention used throughout `envs`.
        """
        H, W = grid.shape
        rr, cc = np.nonzero(grid)
        blocked = frozenset(Coordinate(int(c), int(r)) for r, c in zip(rr, cc))
        return cls(rows=H, cols=W,
                   start=Coordinate.from_rc(start), goal=Coordinate.from_rc(goal),
                   heuristic=heuristic, blocked=blocked)

    def in_bounds(self, c: Coordinate) -> bool:
        return 0 <= c.x < self.cols and 0 <= c.y < self.rows

    def validate(self) -> None:
        """Raise on any violated construction precondition."""
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Grid needs positive dimensions, got {self.rows}x{self.cols}")
        for c in (self.start, self.goal, *self.blocked):
            if not self.in_bounds(c):
                raise OutOfBounds(c, self.rows, self.cols)
        if self.start in self.blocked:
            raise ValueError(f"Start {self.start} is blocked")
        if self.goal in self.blocked:
            raise ValueError(f"Goal {self.goal} is blocked")
        get_heuristic(self.heuristic)

    def as_settings(self) -> Dict:
        """Plain-dict record of the configuration (for provenance/logging)."""
        name = self.heuristic if isinstance(self.heuristic, str) else getattr(
            self.heuristic, "__name__", repr(self.heuristic))
        return dict(
            rows=self.rows, cols=self.cols,
            start=(self.start.x, self.start.y), goal=(self.goal.x, self.goal.y),
            heuristic=name, n_blocked=len(self.blocked),
        )
