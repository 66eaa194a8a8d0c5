from __future__ import annotations

import pytest

from core.astar import a_star_search


def assert_valid_path(grid, path, src, dest):
    assert path[0] == src
    assert path[-1] == dest
    for (r0, c0), (r1, c1) in zip(path, path[1:]):
        assert max(abs(r1 - r0), abs(c1 - c0)) == 1
        assert grid[r1][c1] == 0


def test_straight_line_on_empty_grid():
    grid = [[0] * 5 for _ in range(5)]
    path = a_star_search(grid, (0, 0), (0, 4), verbose=False)
    assert len(path) == 5
    assert_valid_path(grid, path, (0, 0), (0, 4))


def test_diagonal_is_shortest_on_empty_grid():
    grid = [[0] * 6 for _ in range(6)]
    path = a_star_search(grid, (0, 0), (5, 5), verbose=False)
    assert len(path) == 6
    assert_valid_path(grid, path, (0, 0), (5, 5))


def test_goes_around_a_wall():
    grid = [
        [0, 0, 0, 0, 0],
        [1, 1, 1, 1, 0],
        [0, 0, 0, 0, 0],
    ]
    path = a_star_search(grid, (0, 0), (2, 0), verbose=False)
    assert_valid_path(grid, path, (0, 0), (2, 0))
    assert (1, 4) in path
    assert len(path) == 9


def test_unreachable_destination_returns_none(capsys):
    grid = [
        [0, 1, 0],
        [1, 1, 0],
        [0, 0, 0],
    ]
    assert a_star_search(grid, (0, 0), (2, 2)) is None
    assert "Failed to find the destination cell" in capsys.readouterr().out


@pytest.mark.parametrize(
    "src, dest, message",
    [
        ((-1, 0), (1, 1), "invalid"),
        ((0, 0), (3, 3), "invalid"),
        ((0, 1), (1, 1), "blocked"),
        ((1, 1), (1, 1), "IS the end position"),
    ],
)
def test_rejected_requests(capsys, src, dest, message):
    grid = [
        [0, 1, 0],
        [0, 0, 0],
        [0, 0, 0],
    ]
    assert a_star_search(grid, src, dest) is None
    assert message in capsys.readouterr().out


def test_quiet_mode_prints_nothing(capsys):
    grid = [[0, 0], [0, 0]]
    assert a_star_search(grid, (0, 0), (1, 1), verbose=False) == [(0, 0), (1, 1)]
    assert capsys.readouterr().out == ""


def test_empty_grid_raises():
    with pytest.raises(ValueError):
        a_star_search([], (0, 0), (0, 0))
