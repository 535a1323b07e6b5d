#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
generator.py
------------
Random occupancy-grid environments for exercising the incremental planner.

- Obstacles are object-level: each one is a single 8-connected component
  with a stable integer id, so affordances can add/remove whole objects and
  turn that into per-cell edits for the engine.
- Placement keeps a free moat around every object (scipy binary_dilation).
- ensure_status="failure" cuts every free path between start and goal.
- Reproducible through an explicit np.random.Generator.

Grid convention: grid[r, c] == True means blocked. start/goal are (r, c).
Engine coordinates are Coordinate(x=c, y=r); see blocked_coordinates().

Dependencies:
    numpy
    scipy.ndimage   (connected-component labeling & binary dilation)
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

import numpy as np
from scipy.ndimage import binary_dilation
from scipy.ndimage import label as cc_label

from lifelong.core import Coordinate

logger = logging.getLogger(__name__)


# ------------------------------- Data classes ------------------------------- #

@dataclass
class Obstacle:
    """One connected obstacle; coords are (row, col) pairs, shape (N, 2)."""
    id: int
    coords: np.ndarray

    @property
    def area(self) -> int:
        return int(self.coords.shape[0])

    def cells(self) -> List[Coordinate]:
        return [Coordinate(int(c), int(r)) for r, c in self.coords]


@dataclass
class GridEnvironment:
    grid: np.ndarray            # (H, W) bool: True = blocked
    obj_map: np.ndarray         # (H, W) int32: 0 = free, k > 0 = obstacle id
    obstacles: List[Obstacle]   # ids are 1..len(obstacles); removed ones have no coords
    start: Tuple[int, int]
    goal: Tuple[int, int]
    settings: Dict              # generator settings, for provenance
    rng: np.random.Generator

    @property
    def shape(self) -> Tuple[int, int]:
        return self.grid.shape

    @property
    def H(self) -> int:
        return self.grid.shape[0]

    @property
    def W(self) -> int:
        return self.grid.shape[1]

    def copy(self) -> "GridEnvironment":
        return GridEnvironment(
            grid=self.grid.copy(),
            obj_map=self.obj_map.copy(),
            obstacles=list(self.obstacles),
            start=self.start, goal=self.goal,
            settings=dict(self.settings),
            rng=self.rng,
        )


# ------------------------------ Utility helpers ----------------------------- #

# (dr, dc) in the same order as Coordinate.neighbours()
DELTAS_8 = np.array([
    (-1, -1), (-1, 0), (-1, +1),
    ( 0, -1),          ( 0, +1),
    (+1, -1), (+1, 0), (+1, +1),
], dtype=np.int8)

DELTAS_4 = np.array([
    (-1, 0), (1, 0), (0, -1), (0, 1)
], dtype=np.int8)


def blocked_coordinates(grid: np.ndarray) -> Set[Coordinate]:
    """Blocked cells of a (r, c) grid as engine coordinates."""
    rr, cc = np.nonzero(grid)
    return {Coordinate(int(c), int(r)) for r, c in zip(rr, cc)}


def _bfs_parents(grid: np.ndarray,
                 start: Tuple[int, int],
                 goal: Tuple[int, int],
                 connectivity: int = 8) -> Tuple[bool, np.ndarray]:
    """
    Breadth-first search over free cells. Returns (found, parent) where
    parent[r, c] holds the flat index of the predecessor (-1 = none).
    """
    H, W = grid.shape
    sr, sc = start
    gr, gc = goal
    parent = np.full((H, W), -1, dtype=np.int64)
    if grid[sr, sc] or grid[gr, gc]:
        return False, parent

    deltas = DELTAS_8 if connectivity == 8 else DELTAS_4
    visited = np.zeros((H, W), dtype=bool)
    visited[sr, sc] = True
    q = deque([(sr, sc)])
    while q:
        r, c = q.popleft()
        if (r, c) == (gr, gc):
            return True, parent
        for dr, dc in deltas:
            nr, nc = r + int(dr), c + int(dc)
            if 0 <= nr < H and 0 <= nc < W and not visited[nr, nc] and not grid[nr, nc]:
                visited[nr, nc] = True
                parent[nr, nc] = r * W + c
                q.append((nr, nc))
    return False, parent


def _free_bfs_has_path(grid: np.ndarray,
                       start: Tuple[int, int],
                       goal: Tuple[int, int],
                       connectivity: int = 8) -> bool:
    found, _ = _bfs_parents(grid, start, goal, connectivity)
    return found


def _free_bfs_shortest_path(grid: np.ndarray,
                            start: Tuple[int, int],
                            goal: Tuple[int, int],
                            connectivity: int = 8) -> Optional[List[Tuple[int, int]]]:
    """One minimum-hop free path as (r, c) tuples, or None."""
    found, parent = _bfs_parents(grid, start, goal, connectivity)
    if not found:
        return None
    W = grid.shape[1]
    path = [tuple(goal)]
    r, c = goal
    while (r, c) != tuple(start):
        r, c = divmod(int(parent[r, c]), W)
        path.append((r, c))
    path.reverse()
    return path


def _dilate_bool(img: np.ndarray, iters: int = 1) -> np.ndarray:
    if iters <= 0:
        return img
    structure = np.ones((3, 3), dtype=bool)
    return binary_dilation(img, structure=structure, iterations=int(iters))


def _label_to_obstacles(grid: np.ndarray) -> Tuple[np.ndarray, List[Obstacle]]:
    structure = np.ones((3, 3), dtype=np.uint8)
    obj_map, num = cc_label(grid.astype(np.uint8), structure=structure)
    obstacles = [Obstacle(id=oid, coords=np.column_stack(np.nonzero(obj_map == oid)))
                 for oid in range(1, num + 1)]
    return obj_map.astype(np.int32), obstacles


def _stamp_mask(grid: np.ndarray,
                top_left: Tuple[int, int],
                mask: np.ndarray,
                moat: int) -> bool:
    """
    Stamp `mask` onto `grid` at `top_left` unless it overlaps an obstacle or
    comes within `moat` cells of one. Returns True when stamped.
    """
    H, W = grid.shape
    r0, c0 = top_left
    r1, c1 = r0 + mask.shape[0], c0 + mask.shape[1]
    if r0 < 0 or c0 < 0 or r1 > H or c1 > W:
        return False

    if moat > 0:
        # Test the dilated footprint on a padded window of the grid
        canvas = np.zeros((H + 2 * moat, W + 2 * moat), dtype=bool)
        canvas[r0 + moat:r1 + moat, c0 + moat:c1 + moat] = mask
        ring = _dilate_bool(canvas, iters=moat)[moat:moat + H, moat:moat + W]
        if (grid & ring).any():
            return False
    elif (grid[r0:r1, c0:c1] & mask).any():
        return False

    grid[r0:r1, c0:c1] |= mask
    return True


def _random_rectangle_mask(rng: np.random.Generator,
                           rect_size: Tuple[Tuple[int, int], Tuple[int, int]]) -> np.ndarray:
    (min_h, max_h), (min_w, max_w) = rect_size
    h = max(1, int(rng.integers(min_h, max_h + 1)))
    w = max(1, int(rng.integers(min_w, max_w + 1)))
    return np.ones((h, w), dtype=bool)


def _random_blob_mask(rng: np.random.Generator, min_cells: int, max_cells: int) -> np.ndarray:
    """Connected blob grown cell by cell from a seed; returns its tight bbox mask."""
    n = max(1, int(rng.integers(min_cells, max_cells + 1)))
    side = 2 * n + 1
    canvas = np.zeros((side, side), dtype=bool)
    canvas[n, n] = True
    cells = [(n, n)]
    while len(cells) < n:
        br, bc = cells[int(rng.integers(0, len(cells)))]
        dr, dc = DELTAS_4[int(rng.integers(0, len(DELTAS_4)))]
        nr, nc = br + int(dr), bc + int(dc)
        if not canvas[nr, nc]:
            canvas[nr, nc] = True
            cells.append((nr, nc))
    ys, xs = np.nonzero(canvas)
    return canvas[ys.min():ys.max() + 1, xs.min():xs.max() + 1]


# ------------------------------- Core generator ----------------------------- #

def generate_environment(
    H: int = 32,
    W: int = 32,
    *,
    density: Optional[float] = 0.18,
    n_objects: Optional[int] = None,
    start: Tuple[int, int] = (0, 0),
    goal: Optional[Tuple[int, int]] = None,
    moat: int = 1,
    rect_size: Tuple[Tuple[int, int], Tuple[int, int]] = ((1, 4), (1, 6)),
    blob_cells: Tuple[int, int] = (3, 10),
    rect_prob: float = 0.6,
    ensure_status: str = "any",              # "any" | "failure"
    connectivity: int = 8,
    rng: Optional[np.random.Generator] = None,
    max_place_tries: int = 2000,
) -> GridEnvironment:
    """
    Create a grid with object-level obstacles.

    1) Place random rectangles and blobs until the target density or object
       count is reached (or the try budget runs out), keeping a moat.
    2) With ensure_status="failure", repeatedly plug the middle of the current
       shortest free path with a single cell until no path remains.

    Start and goal are always left free.
    """
    if connectivity not in (4, 8):
        raise ValueError(f"connectivity must be 4 or 8, got {connectivity}")
    if ensure_status not in ("any", "failure"):
        raise ValueError(f"Unknown ensure_status '{ensure_status}'")
    if goal is None:
        goal = (H - 1, W - 1)
    start = (int(start[0]), int(start[1]))
    goal = (int(goal[0]), int(goal[1]))
    for name, (r, c) in (("start", start), ("goal", goal)):
        if not (0 <= r < H and 0 <= c < W):
            raise ValueError(f"{name} {(r, c)} outside a {H}x{W} grid")

    rng = rng or np.random.default_rng()
    grid = np.zeros((H, W), dtype=bool)
    settings = dict(
        H=H, W=W, density=density, n_objects=n_objects, start=start, goal=goal,
        moat=moat, rect_size=rect_size, blob_cells=blob_cells, rect_prob=rect_prob,
        ensure_status=ensure_status, connectivity=connectivity,
        max_place_tries=max_place_tries,
    )

    target_cells = None
    if density is not None:
        target_cells = int(round(float(np.clip(density, 0.0, 0.9)) * H * W))

    placed = 0
    for _ in range(max_place_tries):
        if target_cells is not None and int(grid.sum()) >= target_cells:
            break
        if n_objects is not None and placed >= int(n_objects):
            break
        if rng.random() < rect_prob:
            mask = _random_rectangle_mask(rng, rect_size)
        else:
            mask = _random_blob_mask(rng, *blob_cells)
        mr, mc = mask.shape
        if mr > H or mc > W:
            continue
        top_left = (int(rng.integers(0, H - mr + 1)), int(rng.integers(0, W - mc + 1)))
        if _stamp_mask(grid, top_left, mask, moat=moat):
            placed += 1

    grid[start] = False
    grid[goal] = False

    if ensure_status == "failure":
        while True:
            path = _free_bfs_shortest_path(grid, start, goal, connectivity)
            if path is None:
                break
            if len(path) <= 2:
                # start and goal touch; nothing in between to plug
                break
            grid[path[len(path) // 2]] = True

    obj_map, obstacles = _label_to_obstacles(grid)
    logger.debug("generated %dx%d grid: %d objects, %d blocked cells, status=%s",
                 H, W, len(obstacles), int(grid.sum()), ensure_status)
    return GridEnvironment(grid=grid, obj_map=obj_map, obstacles=obstacles,
                           start=start, goal=goal, settings=settings, rng=rng)


# ------------------------------ Maintenance ops ----------------------------- #

def rebuild_objects_from_grid(env: GridEnvironment) -> GridEnvironment:
    """New environment with obj_map/obstacles relabelled from env.grid."""
    obj_map, obstacles = _label_to_obstacles(env.grid)
    new_env = env.copy()
    new_env.obj_map = obj_map
    new_env.obstacles = obstacles
    return new_env


def active_obstacles(env: GridEnvironment) -> List[Obstacle]:
    """Obstacles that still occupy at least one cell."""
    return [ob for ob in env.obstacles if ob.coords.size > 0]
