from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path

import numpy as np

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.astar import a_star_search
from generators.costmap_generator import CostMapGeneratorParams, get_cost_map, print_cost_map
from navigation.costmap import CostMap, CostMapPose
from navigation.dijkstra import DijkstraParams, DijkstraPathFinder


YELLOW_COLOR = "\033[93m"
RESET_COLOR = "\033[0m"


def pick_random_free_pose(cost_map: CostMap, avoid: CostMapPose | None = None, min_dist: int = 0):
    candidates = []
    for pose in cost_map.all_poses():
        if cost_map.get_cost(pose) != 0:
            continue
        if avoid is not None and abs(pose.x - avoid.x) + abs(pose.y - avoid.y) < min_dist:
            continue
        candidates.append(pose)
    if not candidates:
        return None
    return random.choice(candidates)


def main():
    parser = argparse.ArgumentParser(description="Plan a path on a random cost map")
    parser.add_argument("--width", type=int, default=40)
    parser.add_argument("--height", type=int, default=24)
    parser.add_argument("--obstacles", type=int, default=14)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    if args.seed is not None:
        random.seed(args.seed)

    cost_map = get_cost_map(
        CostMapGeneratorParams(
            width=args.width,
            height=args.height,
            obstacle_count=args.obstacles,
            seed=args.seed,
        )
    )

    origin = pick_random_free_pose(cost_map)
    target = pick_random_free_pose(cost_map, avoid=origin, min_dist=(args.width + args.height) // 3)
    if origin is None or target is None:
        print(f"[{YELLOW_COLOR}Demo{RESET_COLOR}] No free cells to plan between")
        return

    print(f"[{YELLOW_COLOR}Demo{RESET_COLOR}] Planning from {origin} to {target}")

    finder = DijkstraPathFinder(DijkstraParams())
    finder.set_cost_map(cost_map)
    path = finder.compute_plan(origin, target)
    print_cost_map(cost_map, path)

    # Same request on the bare occupancy grid (rows are y, cols are x)
    occupancy = (np.asarray(cost_map.grid) != 0).astype(int).tolist()
    cells = a_star_search(occupancy, (origin.y, origin.x), (target.y, target.x))
    if cells is not None:
        print_cost_map(cost_map, [CostMapPose(c, r) for r, c in cells])


if __name__ == "__main__":
    main()
