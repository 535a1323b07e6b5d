# -*- coding: utf-8 -*-
"""
Environment generation and edit affordances.
Exposes:
- GridEnvironment, Obstacle (dataclasses from generator.py)
- generate_environment(...), rebuild_objects_from_grid(...), blocked_coordinates(...)
- Edit and the affordances that produce edits (from affordances.py)
"""

from __future__ import annotations

from .generator import (GridEnvironment, Obstacle, active_obstacles,
                        blocked_coordinates, generate_environment,
                        rebuild_objects_from_grid)
from .affordances import (Edit, add_obstacle, apply_edits_to_grid,
                          random_edits, remove_obstacles)

__all__ = [
    "GridEnvironment",
    "Obstacle",
    "generate_environment",
    "rebuild_objects_from_grid",
    "active_obstacles",
    "blocked_coordinates",
    "Edit",
    "apply_edits_to_grid",
    "remove_obstacles",
    "add_obstacle",
    "random_edits",
]
