#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Lifelong Planning A* (LPA*) on an 8-connected grid with unit step cost.

Every cell keeps two estimates of its distance from the start:
- g : the value settled by the last expansion of the cell
- r : one-step lookahead, min over free neighbours n of (n.g + 1); r(start) = 0

A cell with g == r is locally consistent. Every inconsistent free cell sits in
the priority queue exactly once (as a snapshot), ordered by Key. When cells
get blocked or unblocked only the affected cells are updated, and the next
compute_shortest_path() call repairs the solution from there.

Grid convention: Coordinate(x, y) with 0 <= x < cols, 0 <= y < rows.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .config import DEFAULT_HEURISTIC, PlannerConfig
from .core import (COST, INFINITY, Coordinate, CoordinateLike, Heuristic, Key,
                   LpState, as_coordinate, saturating_add)
from .heuristics import HEURISTICS, get_heuristic
from .matrix import Matrix
from .priority_queue import PriorityQueue

logger = logging.getLogger(__name__)


class CellStatus(Enum):
    UNREACHED = "unreached"
    CONSISTENT = "consistent"
    OVERCONSISTENT = "overconsistent"
    UNDERCONSISTENT = "underconsistent"
    BLOCKED = "blocked"


@dataclass
class SearchStats:
    expansions: int = 0
    vertex_updates: int = 0
    edits: int = 0
    searches: int = 0

    def reset(self) -> None:
        self.expansions = self.vertex_updates = self.edits = self.searches = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


class LpAstarCore:
    def __init__(self, rows: int, cols: int,
                 start: CoordinateLike, goal: CoordinateLike,
                 heuristic: Union[str, Heuristic] = DEFAULT_HEURISTIC,
                 blocked: Iterable[CoordinateLike] = ()):
        config = PlannerConfig.build(rows, cols, start, goal, heuristic, blocked)
        config.validate()
        self.config = config
        self.start = config.start
        self.goal = config.goal
        self.heuristics = HEURISTICS
        self.heuristic = get_heuristic(config.heuristic)

        self.matrix = Matrix(config.rows, config.cols)
        for c in config.blocked:
            self.matrix.at(c).is_blocked = True

        self.q: PriorityQueue[LpState] = PriorityQueue(self._compare)
        self.stats = SearchStats()
        self._seed()
        logger.debug("LPA* initialised: %s", config.as_settings())

    @classmethod
    def from_config(cls, config: PlannerConfig) -> "LpAstarCore":
        return cls(config.rows, config.cols, config.start, config.goal,
                   config.heuristic, config.blocked)

    def _seed(self) -> None:
        self.matrix.at(self.start).r = 0
        self.q.push(self.matrix.state(self.start))

    # ------------------------------- keys ---------------------------------- #

    def key(self, state: LpState) -> Key:
        return Key.of(state, self.heuristic, self.goal)

    def _compare(self, a: LpState, b: LpState) -> bool:
        return self.key(a) < self.key(b)

    def goal_key(self) -> Key:
        return self.key(self.matrix.state(self.goal))

    # ------------------------------ helpers -------------------------------- #

    def _free_neighbours(self, c: Coordinate) -> List[Coordinate]:
        m = self.matrix
        return [n for n in c.neighbours()
                if m.in_bounds(n) and not m.blocked[n.y, n.x]]

    def _dequeue(self, c: Coordinate) -> None:
        # Queued snapshots may carry outdated g/r, so match on coordinate only
        self.q.remove_if(lambda s: s.coordinate == c)

    # ------------------------------- core ---------------------------------- #

    def update_vertex(self, u: CoordinateLike) -> None:
        u = as_coordinate(u)
        cell = self.matrix.at(u)
        self.stats.vertex_updates += 1
        self._dequeue(u)
        if cell.is_blocked:
            return
        if u != self.start:
            g = self.matrix.g
            best = INFINITY
            for n in self._free_neighbours(u):
                best = min(best, saturating_add(int(g[n.y, n.x]), COST))
            cell.r = best
        if cell.g != cell.r:
            self.q.push(cell.state())

    def _search_done(self, goal) -> bool:
        if not self.q:
            return True
        if self.key(self.q.top()) < self.goal_key() or goal.r != goal.g:
            return False
        # An inadmissible heuristic can stop with a stale cell on the traced path
        return goal.g >= INFINITY or self._trace() is not None

    def compute_shortest_path(self) -> bool:
        """
        Expand cells until the goal is locally consistent, no queued key is
        smaller than the goal's, and a path can be traced back from the goal.
        Returns True when the goal is reachable.
        """
        goal = self.matrix.at(self.goal)
        expansions = 0
        while not self._search_done(goal):
            u = self.q.pop()
            c = self.matrix.at(u.coordinate)
            expansions += 1
            if c.g > c.r:
                c.g = c.r
                for n in self._free_neighbours(c.coordinate):
                    self.update_vertex(n)
            else:
                c.g = INFINITY
                self.update_vertex(c.coordinate)
                for n in self._free_neighbours(c.coordinate):
                    self.update_vertex(n)

        self.stats.expansions += expansions
        self.stats.searches += 1
        found = goal.g < INFINITY
        logger.debug("search #%d: %d expansions, goal g=%s, queue=%d, totals %s",
                     self.stats.searches, expansions,
                     goal.g if found else "inf", len(self.q), self.stats.as_dict())
        return found

    # ------------------------------- edits --------------------------------- #

    def set_blocked(self, c: CoordinateLike, blocked: bool = True) -> None:
        """
        Record that cell `c` became blocked (or free). The caller re-runs
        compute_shortest_path() to repair the solution.
        """
        c = as_coordinate(c)
        cell = self.matrix.at(c)
        blocked = bool(blocked)
        if cell.is_blocked == blocked:
            return
        if blocked and c == self.start:
            raise ValueError(f"Cannot block the start cell {c}")

        self.stats.edits += 1
        logger.debug("%s %s", "block" if blocked else "unblock", c)
        cell.is_blocked = blocked
        if blocked:
            cell.g = INFINITY
            cell.r = INFINITY
            self._dequeue(c)
        else:
            self.update_vertex(c)
        for n in self._free_neighbours(c):
            self.update_vertex(n)

    def apply_edits(self, edits: Iterable[Tuple[CoordinateLike, bool]]) -> int:
        """Apply (coordinate, blocked) pairs in order. Returns how many were given."""
        n = 0
        for c, blocked in edits:
            self.set_blocked(c, blocked)
            n += 1
        return n

    def replan(self, edits: Iterable[Tuple[CoordinateLike, bool]] = ()) -> bool:
        self.apply_edits(edits)
        return self.compute_shortest_path()

    def reset(self) -> None:
        """Drop all search state and start over on the current blocked set."""
        self.matrix.reset_costs()
        self.q.reset()
        self.stats.reset()
        self._seed()

    # ------------------------------- path ---------------------------------- #

    def _trace(self) -> Optional[List[Coordinate]]:
        """
        Step back from the goal to the free neighbour with the smallest
        g + cost (first in neighbour order on ties), then reverse. Returns
        None when g stops decreasing, which only happens at a cell that is
        still inconsistent.
        """
        g = self.matrix.g
        trace = [self.goal]
        current = self.goal
        while current != self.start:
            best, best_cost = None, INFINITY
            for n in self._free_neighbours(current):
                step = saturating_add(int(g[n.y, n.x]), COST)
                if step < best_cost:
                    best, best_cost = n, step
            if best is None or best_cost > g[current.y, current.x]:
                logger.debug("path trace stalled at %s (%s)",
                             current, self.cell_status(current).value)
                return None
            current = best
            trace.append(current)
            assert len(trace) <= self.matrix.rows() * self.matrix.cols(), "path trace loops"
        trace.reverse()
        return trace

    def path(self) -> Optional[List[Coordinate]]:
        """
        Start-to-goal path read off the g values, or None when there is no
        path. Call compute_shortest_path() after edits first.
        """
        if self.matrix.g[self.goal.y, self.goal.x] >= INFINITY:
            return None
        trace = self._trace()
        if trace is None:
            logger.warning("no path could be traced to %s; g values are not repaired yet",
                           self.goal)
        return trace

    def path_cost(self) -> Optional[int]:
        g = self.matrix.at(self.goal).g
        return None if g >= INFINITY else g

    # ----------------------------- inspection ------------------------------ #

    def cell(self, c: CoordinateLike) -> LpState:
        return self.matrix.state(as_coordinate(c))

    def cell_status(self, c: CoordinateLike) -> CellStatus:
        s = self.cell(c)
        if s.is_blocked:
            return CellStatus.BLOCKED
        if s.g > s.r:
            return CellStatus.OVERCONSISTENT
        if s.g < s.r:
            return CellStatus.UNDERCONSISTENT
        return CellStatus.UNREACHED if s.g >= INFINITY else CellStatus.CONSISTENT

    def queue_size(self) -> int:
        return len(self.q)

    def queue_empty(self) -> bool:
        return self.q.empty()

    def __repr__(self) -> str:
        h = self.config.as_settings()["heuristic"]
        return (f"LpAstarCore({self.config.rows}x{self.config.cols}, h={h!r}, "
                f"start={self.start}, goal={self.goal}, queue={len(self.q)})")


__all__ = ["LpAstarCore", "CellStatus", "SearchStats"]
