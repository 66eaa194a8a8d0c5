"""
Grid cost map used by the navigation planners.

Costs are byte-valued in ``[FREE_COST, OBSTACLE_COST]``. A cell at
``OBSTACLE_COST`` cannot be traversed; anything below is traversable with a
penalty proportional to its cost. The grid is indexed ``grid[y, x]``.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterator, List
import math
import numpy as np

from core.algebra import Vector3


FREE_COST = 0
OBSTACLE_COST = 127

NEIGHBOR_OFFSETS = [
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
]


def is_obstacle_cost(cost: int) -> bool:
    return cost >= OBSTACLE_COST


@dataclass(frozen=True)
class CostMapPose:
    x: int
    y: int

    def offset_by(self, dx: int, dy: int) -> CostMapPose:
        return CostMapPose(self.x + dx, self.y + dy)

    def squared_distance_to(self, other: CostMapPose) -> int:
        dx = other.x - self.x
        dy = other.y - self.y
        return dx * dx + dy * dy

    def distance_to(self, other: CostMapPose) -> float:
        return math.sqrt(self.squared_distance_to(other))

    def to_world(self, resolution: float, z: float = 0.0) -> Vector3:
        """Centre of the cell in world coordinates."""
        return Vector3((self.x + 0.5) * resolution, (self.y + 0.5) * resolution, z)


class CostMap:
    def __init__(self, grid: np.ndarray, resolution: float = 1.0) -> None:
        arr = np.asarray(grid)
        if arr.ndim != 2 or arr.shape[0] == 0 or arr.shape[1] == 0:
            raise ValueError(f"cost grid must be a non-empty 2D array, got shape {arr.shape}")
        if not np.issubdtype(arr.dtype, np.integer):
            if not np.all(np.equal(np.mod(arr, 1), 0)):
                raise ValueError("cost grid must contain integer costs")
        if arr.min() < FREE_COST or arr.max() > OBSTACLE_COST:
            raise ValueError(f"costs must be within [{FREE_COST}, {OBSTACLE_COST}]")
        if resolution <= 0.0:
            raise ValueError("resolution must be positive")

        self.grid: np.ndarray = arr.astype(np.int16)
        self.resolution = float(resolution)

    @property
    def width(self) -> int:
        return int(self.grid.shape[1])

    @property
    def height(self) -> int:
        return int(self.grid.shape[0])

    def in_bounds(self, pose: CostMapPose) -> bool:
        return 0 <= pose.x < self.width and 0 <= pose.y < self.height

    def get_cost(self, pose: CostMapPose) -> int:
        if not self.in_bounds(pose):
            return OBSTACLE_COST
        return int(self.grid[pose.y, pose.x])

    def is_obstacle(self, pose: CostMapPose) -> bool:
        return is_obstacle_cost(self.get_cost(pose))

    def all_poses(self) -> Iterator[CostMapPose]:
        for y in range(self.height):
            for x in range(self.width):
                yield CostMapPose(x, y)

    def neighbors_for(self, pose: CostMapPose, cost_limit: int) -> List[CostMapPose]:
        """8-connected neighbours that are in bounds, free and not above ``cost_limit``."""
        neighbors = []
        for dx, dy in NEIGHBOR_OFFSETS:
            n = pose.offset_by(dx, dy)
            if not self.in_bounds(n):
                continue
            cost = int(self.grid[n.y, n.x])
            if is_obstacle_cost(cost) or cost > cost_limit:
                continue
            neighbors.append(n)
        return neighbors

    def world_to_pose(self, pos: Vector3) -> CostMapPose:
        """
        Convert a world position to the cell containing it, clipped to the map.
        """
        x = int(math.floor(pos.x / self.resolution))
        y = int(math.floor(pos.y / self.resolution))
        x = int(np.clip(x, 0, self.width - 1))
        y = int(np.clip(y, 0, self.height - 1))
        return CostMapPose(x, y)

    def pose_to_world(self, pose: CostMapPose, z: float = 0.0) -> Vector3:
        return pose.to_world(self.resolution, z)

    def nearest_free_pose(self, pose: CostMapPose) -> CostMapPose:
        """
        Find the closest non-obstacle cell using BFS.

        Returns ``pose`` itself when it is already free or no free cell exists.
        """
        if not self.in_bounds(pose) or not self.is_obstacle(pose):
            return pose

        visited = {pose}
        q = deque([pose])
        while q:
            p = q.popleft()
            for dx, dy in NEIGHBOR_OFFSETS:
                n = p.offset_by(dx, dy)
                if not self.in_bounds(n) or n in visited:
                    continue
                if not self.is_obstacle(n):
                    return n
                visited.add(n)
                q.append(n)
        return pose
