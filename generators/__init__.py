"""
Generators package.
Contains cost map generation utilities.
"""

from .costmap_generator import CostMapGeneratorParams, get_cost_map, print_cost_map

__all__ = ['CostMapGeneratorParams', 'get_cost_map', 'print_cost_map']
