"""
Navigation package.
Contains the cost map and the planners that search it.
"""

from .costmap import CostMap, CostMapPose, FREE_COST, OBSTACLE_COST, is_obstacle_cost
from .dijkstra import DijkstraParams, DijkstraPathFinder
from .path_graph import PathGraph, PathGraphParams, PathNode

__all__ = [
    'CostMap',
    'CostMapPose',
    'FREE_COST',
    'OBSTACLE_COST',
    'is_obstacle_cost',
    'DijkstraParams',
    'DijkstraPathFinder',
    'PathGraph',
    'PathGraphParams',
    'PathNode',
]
