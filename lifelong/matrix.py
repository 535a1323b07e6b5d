# -*- coding: utf-8 -*-
"""
Dense rows x cols cell store backed by numpy arrays.

Arrays are indexed [y, x] (row, col), the same convention as the occupancy
grids in `envs`. Cells are addressed by Coordinate(x, y).
"""

from __future__ import annotations

from typing import Iterator, Tuple

import numpy as np

from .core import INFINITY, Coordinate, LpState
from .errors import OutOfBounds


class Cell:
    """Live, mutable view of one matrix cell."""

    __slots__ = ("_matrix", "coordinate", "_rc")

    def __init__(self, matrix: "Matrix", coordinate: Coordinate):
        self._matrix = matrix
        self.coordinate = coordinate
        self._rc = coordinate.to_rc()

    @property
    def g(self) -> int:
        return int(self._matrix.g[self._rc])

    @g.setter
    def g(self, value: int) -> None:
        self._matrix.g[self._rc] = value

    @property
    def r(self) -> int:
        return int(self._matrix.r[self._rc])

    @r.setter
    def r(self, value: int) -> None:
        self._matrix.r[self._rc] = value

    @property
    def is_blocked(self) -> bool:
        return bool(self._matrix.blocked[self._rc])

    @is_blocked.setter
    def is_blocked(self, value: bool) -> None:
        self._matrix.blocked[self._rc] = bool(value)

    def state(self) -> LpState:
        return LpState(self.coordinate, self.g, self.r, self.is_blocked)

    def __repr__(self) -> str:
        return f"Cell({self.state()})"


class Matrix:
    def __init__(self, rows: int, cols: int):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Matrix needs positive dimensions, got {rows}x{cols}")
        self.g = np.full((rows, cols), INFINITY, dtype=np.int64)
        self.r = np.full((rows, cols), INFINITY, dtype=np.int64)
        self.blocked = np.zeros((rows, cols), dtype=bool)

    def rows(self) -> int:
        return self.g.shape[0]

    def cols(self) -> int:
        return self.g.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.g.shape

    def in_bounds(self, c: Coordinate) -> bool:
        return 0 <= c.x < self.cols() and 0 <= c.y < self.rows()

    def check(self, c: Coordinate) -> None:
        if not self.in_bounds(c):
            raise OutOfBounds(c, self.rows(), self.cols())

    def at(self, c: Coordinate) -> Cell:
        self.check(c)
        return Cell(self, c)

    def state(self, c: Coordinate) -> LpState:
        return self.at(c).state()

    def coordinates(self) -> Iterator[Coordinate]:
        """All coordinates, row-major."""
        for y in range(self.rows()):
            for x in range(self.cols()):
                yield Coordinate(x, y)

    def reset_costs(self) -> None:
        """Forget all g/r values; blocked flags are kept."""
        self.g.fill(INFINITY)
        self.r.fill(INFINITY)

    def __repr__(self) -> str:
        return f"Matrix({self.rows()}x{self.cols()}, blocked={int(self.blocked.sum())})"
