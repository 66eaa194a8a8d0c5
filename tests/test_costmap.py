from __future__ import annotations

import math

import numpy as np
import pytest

from core.algebra import Vector3
from navigation.costmap import CostMap, CostMapPose, OBSTACLE_COST, is_obstacle_cost


@pytest.fixture
def small_map():
    grid = np.zeros((3, 4), dtype=int)
    grid[1, 1] = OBSTACLE_COST
    grid[0, 2] = 101
    grid[2, 2] = 50
    return CostMap(grid, resolution=0.5)


def test_pose_geometry():
    a = CostMapPose(1, 2)
    b = a.offset_by(3, -2)
    assert b == CostMapPose(4, 0)
    assert a.squared_distance_to(b) == 13
    assert math.isclose(a.distance_to(b), math.sqrt(13))
    assert hash(CostMapPose(1, 2)) == hash(a)


def test_pose_to_world_is_cell_centre():
    assert CostMapPose(2, 3).to_world(0.5, 1.0) == Vector3(1.25, 1.75, 1.0)


def test_dimensions_and_costs(small_map):
    assert small_map.width == 4
    assert small_map.height == 3
    assert small_map.get_cost(CostMapPose(2, 0)) == 101
    assert small_map.is_obstacle(CostMapPose(1, 1))
    assert not small_map.is_obstacle(CostMapPose(0, 0))
    assert len(list(small_map.all_poses())) == 12


def test_out_of_bounds_is_obstacle(small_map):
    outside = CostMapPose(4, 0)
    assert not small_map.in_bounds(outside)
    assert small_map.get_cost(outside) == OBSTACLE_COST
    assert small_map.is_obstacle(CostMapPose(-1, -1))


def test_neighbors_skip_obstacles_and_expensive_cells(small_map):
    neighbors = set(small_map.neighbors_for(CostMapPose(2, 1), 100))
    assert neighbors == {
        CostMapPose(1, 0),
        CostMapPose(3, 0),
        CostMapPose(3, 1),
        CostMapPose(1, 2),
        CostMapPose(2, 2),
        CostMapPose(3, 2),
    }
    assert CostMapPose(2, 0) in small_map.neighbors_for(CostMapPose(2, 1), 120)


def test_corner_has_three_neighbors():
    cost_map = CostMap(np.zeros((5, 5), dtype=int))
    assert len(cost_map.neighbors_for(CostMapPose(0, 0), 100)) == 3


def test_world_conversion_round_trip(small_map):
    pose = CostMapPose(3, 2)
    assert small_map.world_to_pose(small_map.pose_to_world(pose)) == pose
    assert small_map.world_to_pose(Vector3(100.0, -5.0, 0.0)) == CostMapPose(3, 0)


def test_nearest_free_pose(small_map):
    assert small_map.nearest_free_pose(CostMapPose(0, 0)) == CostMapPose(0, 0)
    free = small_map.nearest_free_pose(CostMapPose(1, 1))
    assert not small_map.is_obstacle(free)
    assert free.squared_distance_to(CostMapPose(1, 1)) <= 2


def test_nearest_free_pose_with_no_free_cells():
    cost_map = CostMap(np.full((2, 2), OBSTACLE_COST))
    assert cost_map.nearest_free_pose(CostMapPose(0, 0)) == CostMapPose(0, 0)


@pytest.mark.parametrize(
    "grid",
    [
        np.zeros((0, 3)),
        np.zeros(4),
        np.array([[0, 128]]),
        np.array([[0, -1]]),
        np.array([[0.5, 1.0]]),
    ],
)
def test_invalid_grids_are_rejected(grid):
    with pytest.raises(ValueError):
        CostMap(grid)


def test_non_positive_resolution_is_rejected():
    with pytest.raises(ValueError):
        CostMap(np.zeros((2, 2), dtype=int), resolution=0.0)


def test_is_obstacle_cost():
    assert is_obstacle_cost(OBSTACLE_COST)
    assert not is_obstacle_cost(OBSTACLE_COST - 1)
