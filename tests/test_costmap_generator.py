from __future__ import annotations

import numpy as np
import pytest

from generators.costmap_generator import CostMapGeneratorParams, get_cost_map, print_cost_map
from navigation.costmap import CostMap, CostMapPose, OBSTACLE_COST


def test_same_seed_gives_same_map():
    params = CostMapGeneratorParams(width=20, height=15, seed=3)
    a = get_cost_map(params)
    b = get_cost_map(params)
    assert np.array_equal(a.grid, b.grid)
    assert a.resolution == params.resolution


def test_outer_walls():
    cost_map = get_cost_map(CostMapGeneratorParams(width=10, height=8, obstacle_count=0, seed=1))
    grid = cost_map.grid
    assert np.all(grid[0, :] == OBSTACLE_COST)
    assert np.all(grid[-1, :] == OBSTACLE_COST)
    assert np.all(grid[:, 0] == OBSTACLE_COST)
    assert np.all(grid[:, -1] == OBSTACLE_COST)


def test_inflation_decays_away_from_obstacles():
    params = CostMapGeneratorParams(
        width=11,
        height=11,
        obstacle_count=0,
        outer_walls=True,
        inflation_radius=2,
        inflation_cost=80,
        seed=0,
    )
    grid = get_cost_map(params).grid
    assert grid[1, 5] == 80
    assert grid[2, 5] == 40
    assert grid[3, 5] == 0
    assert grid[5, 5] == 0
    assert grid.max() == OBSTACLE_COST
    assert not np.any((grid > 80) & (grid < OBSTACLE_COST))


def test_no_inflation():
    params = CostMapGeneratorParams(width=6, height=6, obstacle_count=0, inflation_radius=0, seed=0)
    grid = get_cost_map(params).grid
    assert set(np.unique(grid)) == {0, OBSTACLE_COST}


@pytest.mark.parametrize(
    "params",
    [
        CostMapGeneratorParams(width=2, height=10),
        CostMapGeneratorParams(inflation_cost=OBSTACLE_COST),
    ],
)
def test_invalid_params(params):
    with pytest.raises(ValueError):
        get_cost_map(params)


def test_print_cost_map_marks_path(capsys):
    grid = np.zeros((2, 3), dtype=int)
    grid[0, 2] = OBSTACLE_COST
    grid[1, 2] = 10
    print_cost_map(CostMap(grid), [CostMapPose(0, 0)])
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["()  ██", "    ░░"]
