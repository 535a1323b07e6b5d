import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import numpy as np
import pytest
from envs.generator import _free_bfs_shortest_path, generate_environment
from envs.affordances import apply_edits_to_grid, random_edits, remove_obstacles
from planners import PLANNERS


def path_is_valid(grid, path, start, goal):
    if path[0] != tuple(start) or path[-1] != tuple(goal):
        return False
    for (r0, c0), (r1, c1) in zip(path, path[1:]):
        if max(abs(r0 - r1), abs(c0 - c1)) != 1:
            return False
    return not any(grid[r, c] for r, c in path)


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_all_planners_agree(seed):
    rng = np.random.default_rng(seed)
    env = generate_environment(H=30, W=30, density=0.18, ensure_status="any", rng=rng)

    results = {}
    for name, cls in PLANNERS.items():
        planner = cls(connectivity=8)
        res = planner.plan(env.grid, env.start, env.goal)
        if res['success']:
            assert path_is_valid(env.grid, res['path'], env.start, env.goal)
        results[name] = res

    assert results["bfs"]['success'] == results["lpa_star"]['success']
    if results["bfs"]['success']:
        assert len(results["lpa_star"]['path']) == len(results["bfs"]['path'])


def test_failure_environment_fails_everywhere():
    env = generate_environment(H=30, W=30, density=0.2, ensure_status="failure",
                               rng=np.random.default_rng(8))
    for cls in PLANNERS.values():
        res = cls().plan(env.grid, env.start, env.goal)
        assert not res['success'] and res['path'] is None


def test_lpa_star_replan_matches_bfs_after_edits():
    env = generate_environment(H=24, W=24, density=0.2, rng=np.random.default_rng(6))
    lpa = PLANNERS["lpa_star"]()
    bfs = PLANNERS["bfs"]()
    first = lpa.plan(env.grid, env.start, env.goal)
    assert first['expansions'] > 0

    grid = env.grid.copy()
    for batch in range(5):
        edits = random_edits(env, 6, rng=np.random.default_rng(batch))
        apply_edits_to_grid(grid, edits)
        env.grid[...] = grid

        res = lpa.replan(edits)
        ref = bfs.plan(grid, env.start, env.goal)
        assert res['success'] == ref['success']
        if res['success']:
            assert path_is_valid(grid, res['path'], env.start, env.goal)
            assert len(res['path']) == len(ref['path'])


def test_lpa_star_replan_after_obstacle_removal_opens_path():
    env = generate_environment(H=30, W=30, density=0.2, ensure_status="failure",
                               rng=np.random.default_rng(12))
    lpa = PLANNERS["lpa_star"]()
    assert not lpa.plan(env.grid, env.start, env.goal)['success']

    ids = [ob.id for ob in env.obstacles]
    env2, edits = remove_obstacles(env, ids)
    assert not env2.grid.any()
    res = lpa.replan(edits)
    assert res['success']
    assert len(res['path']) - 1 == max(abs(env.goal[0] - env.start[0]),
                                       abs(env.goal[1] - env.start[1]))


def test_lpa_star_replan_requires_plan():
    with pytest.raises(RuntimeError):
        PLANNERS["lpa_star"]().replan([])


def test_planners_reject_out_of_bounds_and_blocked_endpoints():
    grid = np.zeros((5, 5), dtype=bool)
    grid[4, 4] = True
    for cls in PLANNERS.values():
        planner = cls()
        assert not planner.plan(grid, (0, 0), (5, 0))['success']
        assert not planner.plan(grid, (0, 0), (4, 4))['success']
        assert planner.plan(grid, (2, 2), (2, 2))['path'] == [(2, 2)]


@pytest.mark.parametrize("connectivity", [4, 8])
def test_bfs_planner_matches_free_space_oracle(connectivity):
    for seed in range(5):
        env = generate_environment(H=20, W=20, density=0.25, rng=np.random.default_rng(seed))
        res = PLANNERS["bfs"](connectivity=connectivity).plan(env.grid, env.start, env.goal)
        ref = _free_bfs_shortest_path(env.grid, env.start, env.goal, connectivity)
        assert res['success'] == (ref is not None)
        if ref is not None:
            assert len(res['path']) == len(ref)
            assert res['path'][0] == env.start and res['path'][-1] == env.goal


def test_lpa_star_euclidean_replan_succeeds_whenever_bfs_does():
    env = generate_environment(H=14, W=14, density=0.25, rng=np.random.default_rng(2))
    lpa = PLANNERS["lpa_star"](heuristic="euclidean")
    bfs = PLANNERS["bfs"]()
    lpa.plan(env.grid, env.start, env.goal)

    grid = env.grid.copy()
    rng = np.random.default_rng(40)
    for _ in range(8):
        edits = random_edits(env, 4, rng=rng)
        apply_edits_to_grid(grid, edits)
        env.grid[...] = grid
        res = lpa.replan(edits)
        assert res['success'] == bfs.plan(grid, env.start, env.goal)['success']
        if res['success']:
            assert path_is_valid(grid, res['path'], env.start, env.goal)
