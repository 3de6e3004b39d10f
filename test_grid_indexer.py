#!/usr/bin/env python3
"""
Tests for flat grid index math
"""

import pytest

from grid_indexer import coords_to_index, in_bounds, index_to_coords, neighbors_at_distance


def test_coordinate_conversions():
    """Index and (row, col) convert both ways"""
    assert index_to_coords(0, 5) == (0, 0)
    assert index_to_coords(7, 5) == (1, 2)
    assert index_to_coords(24, 5) == (4, 4)
    assert coords_to_index(1, 2, 5) == 7

    for index in range(4 * 6):
        row, col = index_to_coords(index, 6)
        assert coords_to_index(row, col, 6) == index


def test_neighbors_order_is_up_right_down_left():
    assert neighbors_at_distance(4, 3, 3, 1) == [1, 5, 7, 3]
    assert neighbors_at_distance(12, 5, 5, 2) == [2, 14, 22, 10]


def test_neighbors_default_distance_is_two():
    assert neighbors_at_distance(0, 5, 5) == [2, 10]


@pytest.mark.parametrize("index, expected", [
    (0, [1, 3]),      # top-left corner
    (2, [5, 1]),      # top-right corner, no wrap onto row 1
    (3, [0, 4, 6]),   # left edge, no wrap onto row 0
    (5, [2, 8, 4]),   # right edge, no wrap onto row 2
    (8, [5, 7]),      # bottom-right corner
])
def test_neighbors_do_not_wrap_rows(index, expected):
    assert neighbors_at_distance(index, 3, 3, 1) == expected


def test_neighbors_stay_in_bounds():
    """No negative or past-the-end index at any edge cell"""
    for rows, cols in [(1, 1), (1, 7), (7, 1), (4, 6), (9, 9)]:
        for distance in (1, 2):
            for index in range(rows * cols):
                row = index // cols
                for neighbor in neighbors_at_distance(index, rows, cols, distance):
                    assert in_bounds(neighbor, rows, cols)
                    n_row, n_col = index_to_coords(neighbor, cols)
                    # Same row or same column, exactly distance away
                    if n_row == row:
                        assert abs(neighbor - index) == distance
                    else:
                        assert n_col == index % cols
                        assert abs(n_row - row) == distance


def test_single_cell_has_no_neighbors():
    assert neighbors_at_distance(0, 1, 1, 1) == []
    assert neighbors_at_distance(0, 1, 1, 2) == []


def test_neighbors_are_idempotent():
    first = neighbors_at_distance(17, 6, 7, 1)
    second = neighbors_at_distance(17, 6, 7, 1)
    assert first == second
