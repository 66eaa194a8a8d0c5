"""
Waypoint graph planner.

Nodes are recorded positions (e.g. from a teach-and-repeat run). Nodes closer
than the connection distance are linked, and plans are found with Dijkstra on
an UpdatableMinHeap. The path is rebuilt from the heap's score ledger, walking
back from the target through the neighbour whose distance plus edge length
is lowest.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set
import math

from core.algebra import Vector3
from core.heap import UpdatableMinHeap


RED_COLOR = "\033[91m"
BLUE_COLOR = "\033[94m"
YELLOW_COLOR = "\033[93m"
RESET_COLOR = "\033[0m"

TAG = "PathGraph"


class PathNode:
    """A graph vertex. Hashed by identity, so two nodes at one position stay distinct."""

    def __init__(self, position: Vector3) -> None:
        self.position = position
        self._close_distances: Dict[PathNode, float] = {}

    def __repr__(self) -> str:
        return f"PathNode({self.position.x:.2f}, {self.position.y:.2f})"

    def close_distance_count(self) -> int:
        return len(self._close_distances)

    def clear_close_distances(self) -> None:
        self._close_distances.clear()

    def close_nodes(self) -> Set[PathNode]:
        return set(self._close_distances)

    def close_distances(self) -> Dict[PathNode, float]:
        return dict(self._close_distances)

    def put_close_distance(self, other: PathNode, distance: float) -> None:
        if other is None:
            raise ValueError("other node must not be None")
        if other is self:
            raise ValueError("Used self as a next path node")
        if distance < 0:
            raise ValueError(f"Distance is less than 0: {distance}")
        self._close_distances[other] = float(distance)

    def remove_close_distance(self, other: PathNode) -> None:
        self._close_distances.pop(other, None)


@dataclass
class PathGraphParams:
    # Squared planar distance below which two nodes are connected.
    connection_distance: float = 1.0
    verbose: bool = True


class PathGraph:
    def __init__(self, params: Optional[PathGraphParams] = None) -> None:
        self.params = params if params is not None else PathGraphParams()
        self.nodes: List[PathNode] = []

    def _log(self, msg: str, color: str = BLUE_COLOR) -> None:
        if self.params.verbose:
            print(f"[{color}{TAG}{RESET_COLOR}] {msg}")

    def _warn(self, msg: str) -> None:
        self._log(f"{YELLOW_COLOR}Warning: {msg}{RESET_COLOR}", YELLOW_COLOR)

    def add_node(self, position: Vector3, force_nodes: Iterable[PathNode] = ()) -> PathNode:
        """
        Add a node and connect it to every close node, plus ``force_nodes``
        regardless of distance.
        """
        node = PathNode(position)
        forced = set(force_nodes)
        for other in self.nodes:
            dist_sq = other.position.planar_distance_squared_to(position)
            if dist_sq < self.params.connection_distance or other in forced:
                dist = math.sqrt(dist_sq)
                node.put_close_distance(other, dist)
                other.put_close_distance(node, dist)
        self.nodes.append(node)
        return node

    def remove_node(self, node: PathNode) -> None:
        for other in node.close_nodes():
            other.remove_close_distance(node)
        node.clear_close_distances()
        self.nodes.remove(node)

    def connected_nodes(self, start: PathNode) -> Set[PathNode]:
        seen = {start}
        stack = [start]
        while stack:
            n = stack.pop()
            for nn in n.close_nodes():
                if nn not in seen:
                    seen.add(nn)
                    stack.append(nn)
        return seen

    def generate_plan(self, current: PathNode, target: PathNode) -> Optional[List[PathNode]]:
        """
        Plan from ``current`` to ``target``.

        Returns the nodes to follow including both ends, or None if the target
        cannot be reached.
        """
        if current not in self.nodes or target not in self.nodes:
            raise ValueError("current and target must belong to the graph")

        if self.nodes and len(self.connected_nodes(self.nodes[0])) != len(self.nodes):
            self._warn("node list is not complete in generate plan")

        heap: UpdatableMinHeap[PathNode] = UpdatableMinHeap()
        for n in self.nodes:
            heap.set_score(n, math.inf)
        heap.set_score(current, 0.0)

        while not heap.is_empty():
            n = heap.pop()
            score = heap.get_score(n)
            if math.isinf(score):
                # Unreached nodes pop last, still at infinity
                continue
            for nn, dist in n.close_distances().items():
                n_score = dist + score
                if n_score < heap.get_score(nn):
                    heap.set_score(nn, n_score)

        if any(math.isinf(heap.get_score(n)) for n in self.nodes):
            self._warn("node graph not complete!")

        if math.isinf(heap.get_score(target)):
            self._log(f"{RED_COLOR}No route to target, score is maxed{RESET_COLOR}", RED_COLOR)
            return None

        path = [target]
        visited = {target}
        f = target
        while f is not current:
            # The predecessor on a shortest path satisfies score(nn) + edge == score(f)
            next_node = None
            best = math.inf
            for nn, dist in f.close_distances().items():
                if nn in visited:
                    continue
                via = heap.get_score(nn) + dist
                if next_node is None or via < best:
                    next_node = nn
                    best = via
            if next_node is None or math.isinf(best):
                self._log(f"{RED_COLOR}stuck at empty node!{RESET_COLOR}", RED_COLOR)
                return None
            f = next_node
            visited.add(f)
            path.append(f)
        path.reverse()

        self._log(f"Path computed ({len(path)} nodes, length {heap.get_score(target):.3f})")
        return path
