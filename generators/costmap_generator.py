from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Set
import numpy as np

from navigation.costmap import CostMap, CostMapPose, FREE_COST, OBSTACLE_COST


@dataclass
class CostMapGeneratorParams:
    width: int = 40
    height: int = 30
    resolution: float = 0.25
    obstacle_count: int = 12
    max_obstacle_size: int = 5
    # Cells within this many steps of an obstacle get an inflated cost.
    inflation_radius: int = 2
    inflation_cost: int = 90
    outer_walls: bool = True
    seed: Optional[int] = None


def _place_obstacles(grid: np.ndarray, params: CostMapGeneratorParams, rng: np.random.Generator) -> None:
    h, w = grid.shape
    for _ in range(params.obstacle_count):
        ow = int(rng.integers(1, params.max_obstacle_size + 1))
        oh = int(rng.integers(1, params.max_obstacle_size + 1))
        x0 = int(rng.integers(0, max(1, w - ow + 1)))
        y0 = int(rng.integers(0, max(1, h - oh + 1)))
        grid[y0 : y0 + oh, x0 : x0 + ow] = OBSTACLE_COST


def _add_outer_walls(grid: np.ndarray) -> None:
    h, w = grid.shape
    grid[0, :] = OBSTACLE_COST
    grid[h - 1, :] = OBSTACLE_COST
    grid[:, 0] = OBSTACLE_COST
    grid[:, w - 1] = OBSTACLE_COST


def _inflate_obstacles(grid: np.ndarray, radius: int, peak_cost: int) -> np.ndarray:
    """
    Raise the cost of free cells near obstacles. Cost decays linearly from
    ``peak_cost`` next to the obstacle down to zero past ``radius``.
    """
    if radius <= 0:
        return grid

    h, w = grid.shape
    result = grid.copy()
    obstacle = grid >= OBSTACLE_COST
    for ring in range(1, radius + 1):
        cost = int(round(peak_cost * (radius - ring + 1) / radius))
        for dy in range(-ring, ring + 1):
            for dx in range(-ring, ring + 1):
                if max(abs(dx), abs(dy)) != ring or abs(dy) >= h or abs(dx) >= w:
                    continue
                shifted = np.zeros_like(obstacle)
                src_y = slice(max(0, -dy), h - max(0, dy))
                dst_y = slice(max(0, dy), h - max(0, -dy))
                src_x = slice(max(0, -dx), w - max(0, dx))
                dst_x = slice(max(0, dx), w - max(0, -dx))
                shifted[dst_y, dst_x] = obstacle[src_y, src_x]
                mask = shifted & ~obstacle
                result[mask] = np.maximum(result[mask], cost)
    return result


def get_cost_map(params: Optional[CostMapGeneratorParams] = None) -> CostMap:
    params = params if params is not None else CostMapGeneratorParams()
    if params.width < 3 or params.height < 3:
        raise ValueError("cost map must be at least 3x3")
    if not 0 <= params.inflation_cost < OBSTACLE_COST:
        raise ValueError(f"inflation_cost must be within [0, {OBSTACLE_COST})")

    rng = np.random.default_rng(params.seed)
    grid = np.full((params.height, params.width), FREE_COST, dtype=np.int16)

    _place_obstacles(grid, params, rng)
    if params.outer_walls:
        _add_outer_walls(grid)
    grid = _inflate_obstacles(grid, params.inflation_radius, params.inflation_cost)

    return CostMap(grid, params.resolution)


def print_cost_map(cost_map: CostMap, path: Optional[Iterable[CostMapPose]] = None):
    wall_char = "██"
    near_char = "░░"
    path_char = "()"
    empty_char = "  "

    on_path: Set[CostMapPose] = set(path) if path is not None else set()

    lines = []
    for y in range(cost_map.height):
        row_chars = []
        for x in range(cost_map.width):
            pose = CostMapPose(x, y)
            val = cost_map.get_cost(pose)
            if pose in on_path:
                row_chars.append(path_char)
            elif val >= OBSTACLE_COST:
                row_chars.append(wall_char)
            elif val > FREE_COST:
                row_chars.append(near_char)
            else:
                row_chars.append(empty_char)
        lines.append("".join(row_chars))
    print("\n".join(lines))
