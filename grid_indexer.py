#!/usr/bin/env python3
"""
Grid index math for flat row-major maze grids
- Cells are stored in a flat list indexed row * cols + col
- Neighbors are looked up at a given distance (2 for carving, 1 for walking)
"""

from typing import List, Tuple


def index_to_coords(index: int, cols: int) -> Tuple[int, int]:
    """Convert a flat index to (row, col)"""
    return index // cols, index % cols


def coords_to_index(row: int, col: int, cols: int) -> int:
    """Convert (row, col) to a flat index"""
    return row * cols + col


def neighbors_at_distance(index: int, rows: int, cols: int, distance: int = 2) -> List[int]:
    """
    Get neighbor indices at the given distance, ordered up, right, down, left.

    Left/right candidates must stay on the same row as index so that moves
    never wrap around a row boundary.
    """
    size = rows * cols
    row = index // cols
    neighbors = []

    top = index - cols * distance
    right = index + distance
    bottom = index + cols * distance
    left = index - distance

    if 0 <= top < size:
        neighbors.append(top)
    if right < size and right // cols == row:
        neighbors.append(right)
    if 0 <= bottom < size:
        neighbors.append(bottom)
    if left >= 0 and left // cols == row:
        neighbors.append(left)

    return neighbors


def in_bounds(index: int, rows: int, cols: int) -> bool:
    """Check that a flat index lies inside the grid"""
    return 0 <= index < rows * cols
