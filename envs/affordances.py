#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
affordances.py
--------------
Environment perturbations expressed as per-cell edits.

Every affordance returns the modified environment together with the list of
Edit(coordinate, blocked) records that reproduce the change, so the same
perturbation can be fed to a live LpAstarCore (set_blocked / replan) and to a
from-scratch planner on the new grid.

- remove_obstacles : free every cell of the given obstacle ids
- add_obstacle     : block a set of cells as one new obstacle
- random_edits     : random block/unblock toggles (never start or goal)

Functional by default; pass inplace=True to mutate `env`.
"""

from __future__ import annotations

from typing import Iterable, List, NamedTuple, Optional, Tuple

import numpy as np

from envs.generator import GridEnvironment, Obstacle, rebuild_objects_from_grid
from lifelong.core import Coordinate, CoordinateLike, as_coordinate


class Edit(NamedTuple):
    coordinate: Coordinate
    blocked: bool


def apply_edits_to_grid(grid: np.ndarray, edits: Iterable[Edit]) -> np.ndarray:
    """Write edits into a (r, c) occupancy grid in place and return it."""
    for c, blocked in edits:
        grid[c.y, c.x] = bool(blocked)
    return grid


def remove_obstacles(env: GridEnvironment,
                     obstacle_ids: Iterable[int],
                     *,
                     inplace: bool = False) -> Tuple[GridEnvironment, List[Edit]]:
    """
    Free every cell of the listed obstacles. Unknown or already removed ids
    are ignored. Removed obstacles keep their id with empty coords.
    """
    new_env = env if inplace else env.copy()
    edits: List[Edit] = []
    for oid in sorted(set(int(i) for i in obstacle_ids)):
        if oid < 1 or oid > len(new_env.obstacles):
            continue
        ob = new_env.obstacles[oid - 1]
        if ob.coords.size == 0:
            continue
        rr, cc = ob.coords[:, 0], ob.coords[:, 1]
        new_env.grid[rr, cc] = False
        new_env.obj_map[rr, cc] = 0
        edits.extend(Edit(c, False) for c in ob.cells())
        new_env.obstacles[oid - 1] = Obstacle(id=oid, coords=np.zeros((0, 2), dtype=int))
    return new_env, edits


def add_obstacle(env: GridEnvironment,
                 cells: Iterable[CoordinateLike],
                 *,
                 inplace: bool = False,
                 relabel_after: bool = False) -> Tuple[GridEnvironment, List[Edit]]:
    """
    Block `cells` (engine coordinates) as a new obstacle. Cells that are
    already blocked, out of bounds, or the start/goal are skipped.
    """
    new_env = env if inplace else env.copy()
    H, W = new_env.H, new_env.W
    protected = {Coordinate.from_rc(new_env.start), Coordinate.from_rc(new_env.goal)}

    edits: List[Edit] = []
    for c in dict.fromkeys(as_coordinate(v) for v in cells):
        if not (0 <= c.x < W and 0 <= c.y < H) or c in protected:
            continue
        if new_env.grid[c.y, c.x]:
            continue
        edits.append(Edit(c, True))
    if not edits:
        return new_env, edits

    apply_edits_to_grid(new_env.grid, edits)
    if relabel_after:
        new_env = rebuild_objects_from_grid(new_env)
    else:
        oid = len(new_env.obstacles) + 1
        coords = np.array([c.to_rc() for c, _ in edits], dtype=int)
        new_env.obj_map[coords[:, 0], coords[:, 1]] = oid
        new_env.obstacles.append(Obstacle(id=oid, coords=coords))
    return new_env, edits


def random_edits(env: GridEnvironment,
                 n: int,
                 *,
                 rng: Optional[np.random.Generator] = None,
                 block_prob: float = 0.5) -> List[Edit]:
    """
    Sample `n` toggles against the evolving grid: with probability
    `block_prob` block a free cell, otherwise free a blocked one (falling back
    to the other kind when none is available). env is not modified.
    """
    rng = rng or env.rng
    grid = env.grid.copy()
    protected = np.zeros_like(grid)
    protected[env.start] = True
    protected[env.goal] = True

    edits: List[Edit] = []
    for _ in range(int(n)):
        free = np.argwhere(~grid & ~protected)
        blocked = np.argwhere(grid)
        want_block = rng.random() < block_prob
        pool = free if (want_block and len(free)) or not len(blocked) else blocked
        if not len(pool):
            break
        r, c = pool[int(rng.integers(0, len(pool)))]
        edit = Edit(Coordinate(int(c), int(r)), not bool(grid[r, c]))
        grid[r, c] = edit.blocked
        edits.append(edit)
    return edits


__all__ = ["Edit", "apply_edits_to_grid", "remove_obstacles", "add_obstacle", "random_edits"]
