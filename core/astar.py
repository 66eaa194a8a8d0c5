# A* search on an occupancy grid, using UpdatableMinHeap as the open list
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .heap import UpdatableMinHeap


RED_COLOR = "\033[91m"
BLUE_COLOR = "\033[94m"
RESET_COLOR = "\033[0m"

DIRECTIONS = [(0, 1), (0, -1), (1, 0), (-1, 0),
              (1, 1), (1, -1), (-1, 1), (-1, -1)]

Cell = Tuple[int, int]


class CellDetails:
    def __init__(self):
        self.parent_i = 0
        self.parent_j = 0
        self.g = float('inf')
        self.h = 0.0


def is_valid(row, col, grid):
    return (row >= 0) and (row < len(grid)) and (col >= 0) and (col < len(grid[0]))


def is_unblocked(grid, row, col):
    return grid[row][col] == 0


def is_destination(row, col, dest):
    return row == dest[0] and col == dest[1]


def calculate_h_value(row, col, dest):
    # Chebyshev distance: exact cost on an empty 8-connected grid with unit steps
    return float(max(abs(row - dest[0]), abs(col - dest[1])))


def trace_path(cell_details, dest) -> List[Cell]:
    path = []
    row = dest[0]
    col = dest[1]

    while not (cell_details[row][col].parent_i == row and cell_details[row][col].parent_j == col):
        path.append((row, col))
        temp_row = cell_details[row][col].parent_i
        temp_col = cell_details[row][col].parent_j
        row = temp_row
        col = temp_col

    path.append((row, col))
    path.reverse()
    return path


def _fail(message: str, verbose: bool) -> None:
    if verbose:
        print(f"[{RED_COLOR}A*Algorithm{RESET_COLOR}] {RED_COLOR}{message}{RESET_COLOR}")


def a_star_search(grid: Sequence[Sequence[int]], src: Cell, dest: Cell, verbose: bool = True) -> Optional[List[Cell]]:
    """
    Find a path on ``grid`` (0 = free, anything else = blocked) from ``src`` to
    ``dest`` moving in 8 directions at unit cost.

    Returns the list of (row, col) cells including both ends, or None.
    """
    if len(grid) == 0 or len(grid[0]) == 0:
        raise ValueError("grid must have at least one row and one column")

    if not is_valid(src[0], src[1], grid) or not is_valid(dest[0], dest[1], grid):
        _fail("Source or destination is invalid", verbose)
        return None

    if not is_unblocked(grid, src[0], src[1]) or not is_unblocked(grid, dest[0], dest[1]):
        _fail("Source or the destination is blocked", verbose)
        return None

    if is_destination(src[0], src[1], dest):
        _fail("The start position IS the end position!", verbose)
        return None

    rows = len(grid)
    cols = len(grid[0])
    closed_list = [[False for _ in range(cols)] for _ in range(rows)]
    cell_details = [[CellDetails() for _ in range(cols)] for _ in range(rows)]

    i, j = src
    cell_details[i][j].g = 0.0
    cell_details[i][j].h = 0.0
    cell_details[i][j].parent_i = i
    cell_details[i][j].parent_j = j

    # f-scores live in the heap; improving one moves the cell instead of duplicating it
    open_list: UpdatableMinHeap[Cell] = UpdatableMinHeap()
    open_list.set_score((i, j), 0.0)

    while not open_list.is_empty():
        i, j = open_list.pop()
        closed_list[i][j] = True

        if is_destination(i, j, dest):
            path = trace_path(cell_details, dest)
            if verbose:
                print(f"[{BLUE_COLOR}A*Algorithm{RESET_COLOR}] Path computed ({len(path)} cells)")
            return path

        for d_i, d_j in DIRECTIONS:
            new_i = i + d_i
            new_j = j + d_j

            if not is_valid(new_i, new_j, grid) or not is_unblocked(grid, new_i, new_j):
                continue
            if closed_list[new_i][new_j]:
                continue

            g_new = cell_details[i][j].g + 1.0
            if g_new >= cell_details[new_i][new_j].g:
                continue

            h_new = calculate_h_value(new_i, new_j, dest)
            details = cell_details[new_i][new_j]
            details.g = g_new
            details.h = h_new
            details.parent_i = i
            details.parent_j = j
            open_list.set_score((new_i, new_j), g_new + h_new)

    _fail("Failed to find the destination cell", verbose)
    return None
