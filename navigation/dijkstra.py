from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional
import math

from core.heap import UpdatableMinHeap
from .costmap import CostMap, CostMapPose


RED_COLOR = "\033[91m"
BLUE_COLOR = "\033[94m"
RESET_COLOR = "\033[0m"

TAG = "Dijkstra"


@dataclass
class DijkstraParams:
    # Neighbours costing more than this are treated as occupied.
    neighbor_cost_limit: int = 100
    # Brings costs [0, 127] to a range comparable to the step distance [1, 1.4].
    cost_scale_factor: float = 0.1
    verbose: bool = True


class DijkstraPathFinder:
    """Cost-aware shortest path over a CostMap."""

    def __init__(self, params: Optional[DijkstraParams] = None) -> None:
        self.params = params if params is not None else DijkstraParams()
        self.cost_map: Optional[CostMap] = None

    def set_cost_map(self, cost_map: CostMap) -> None:
        self.cost_map = cost_map

    def _log(self, msg: str, color: str = BLUE_COLOR) -> None:
        if self.params.verbose:
            print(f"[{color}{TAG}{RESET_COLOR}] {msg}")

    def _reject(self, msg: str) -> None:
        self._log(f"{RED_COLOR}{msg}{RESET_COLOR}", RED_COLOR)

    def _check_pose(self, pose: CostMapPose, label: str) -> bool:
        if not self.cost_map.in_bounds(pose):
            self._reject(f"{label} is out of bounds, {label}={pose}")
            return False
        if self.cost_map.is_obstacle(pose):
            self._reject(f"{label} is in obstacle, {label}={pose}")
            return False
        return True

    def _step_cost(self, current: CostMapPose, neighbor: CostMapPose) -> float:
        return self.params.cost_scale_factor * self.cost_map.get_cost(current) + current.distance_to(neighbor)

    def _search(
        self,
        origin: CostMapPose,
        target: Optional[CostMapPose],
    ) -> tuple[UpdatableMinHeap[CostMapPose], Dict[CostMapPose, CostMapPose], bool]:
        # One heap per run: its score ledger only describes this search.
        heap: UpdatableMinHeap[CostMapPose] = UpdatableMinHeap()
        previous: Dict[CostMapPose, CostMapPose] = {}

        for pose in self.cost_map.all_poses():
            heap.set_score(pose, math.inf)
        heap.set_score(origin, 0.0)

        limit = self.params.neighbor_cost_limit
        while not heap.is_empty():
            current = heap.pop()
            score = heap.get_score(current)
            if math.isinf(score):
                # everything left in the frontier is unreachable
                break
            if current == target:
                return heap, previous, True

            for neighbor in self.cost_map.neighbors_for(current, limit):
                if neighbor not in heap:
                    continue
                updated = score + self._step_cost(current, neighbor)
                if updated < heap.get_score(neighbor):
                    heap.set_score(neighbor, updated)
                    previous[neighbor] = current

        return heap, previous, False

    def compute_plan(self, origin: CostMapPose, target: CostMapPose) -> Optional[List[CostMapPose]]:
        """
        Find the cheapest path from ``origin`` to ``target``.

        Returns the poses from origin to target inclusive, or None when no
        path exists or the request is invalid.
        """
        if self.cost_map is None:
            self._reject("no cost map set")
            return None
        if not self._check_pose(origin, "origin") or not self._check_pose(target, "target"):
            return None

        if origin == target:
            return [origin]

        heap, previous, found = self._search(origin, target)
        if not found:
            self._reject(f"Path not found from {origin} to {target}")
            return None

        path = [target]
        pose = target
        while pose in previous:
            pose = previous[pose]
            path.append(pose)
        path.reverse()

        self._log(f"Path computed ({len(path)} poses, cost {heap.get_score(target):.3f})")
        return path

    def compute_distances(self, origin: CostMapPose) -> Dict[CostMapPose, float]:
        """Distance from ``origin`` to every reachable pose."""
        if self.cost_map is None:
            raise ValueError("no cost map set")
        if not self._check_pose(origin, "origin"):
            return {}

        heap, _, _ = self._search(origin, None)
        return {pose: d for pose, d in heap.scores().items() if not math.isinf(d)}
