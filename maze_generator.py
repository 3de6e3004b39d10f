#!/usr/bin/env python3
"""
Maze Generator using Randomized Prim's Algorithm
- Grid is a flat list of booleans (True passage, False wall)
- Carving works at distance 2 so the cell in between two carved cells
  acts as the wall or passage that separates them
- Start is always index 0, goal is the parity-adjusted bottom-right cell
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

import numpy as np

from maze_errors import InvalidDimension, InvalidMaze, check_dimensions
from grid_indexer import index_to_coords, neighbors_at_distance

logger = logging.getLogger(__name__)

WALL_CHAR = '#'
PASSAGE_CHARS = ('.', ' ', 'S', 'G')


def random_source(rng) -> Callable[[], float]:
    """Float source from an object with a random() method or a bare callable"""
    return getattr(rng, 'random', rng)


def rand_int(draw: Callable[[], float], upper: int) -> int:
    """Uniform integer in [0, upper) from a float source in [0, 1)"""
    return int(draw() * upper)


def goal_index_for(rows: int, cols: int) -> int:
    """Bottom-right cell, moved back a row/column when that dimension is even"""
    goal_index = rows * cols - 1
    if rows % 2 == 0:
        goal_index -= cols
    if cols % 2 == 0:
        goal_index -= 1
    return goal_index


@dataclass(frozen=True)
class Maze:
    """Generated (or hand-authored) maze handed read-only to the solver"""
    grid: tuple
    rows: int
    cols: int
    goal_index: int
    start_index: int = 0
    seed: Optional[int] = field(default=None, compare=False)

    def __post_init__(self):
        # Accept any sequence but always store an immutable tuple of bools
        object.__setattr__(self, 'grid', tuple(bool(cell) for cell in self.grid))

    def is_passage(self, index: int) -> bool:
        return 0 <= index < len(self.grid) and self.grid[index]

    @property
    def passage_count(self) -> int:
        return sum(self.grid)

    def as_array(self) -> np.ndarray:
        """2D uint8 view, 1 for passage and 0 for wall"""
        return np.array(self.grid, dtype=np.uint8).reshape(self.rows, self.cols)

    def to_rows(self, path: Sequence[int] = ()) -> List[str]:
        """Text rows: '#' wall, '.' passage, 'S' start, 'G' goal, '*' path"""
        on_path = set(path)
        lines = []
        for row in range(self.rows):
            chars = []
            for col in range(self.cols):
                index = row * self.cols + col
                if index == self.start_index:
                    chars.append('S')
                elif index == self.goal_index:
                    chars.append('G')
                elif index in on_path:
                    chars.append('*')
                else:
                    chars.append('.' if self.grid[index] else WALL_CHAR)
            lines.append(''.join(chars))
        return lines

    def to_dict(self) -> Dict[str, Any]:
        start_row, start_col = index_to_coords(self.start_index, self.cols)
        goal_row, goal_col = index_to_coords(self.goal_index, self.cols)
        return {
            'rows': self.rows,
            'cols': self.cols,
            'grid': [int(cell) for cell in self.grid],
            'start_index': self.start_index,
            'goal_index': self.goal_index,
            'start': [start_row, start_col],
            'goal': [goal_row, goal_col],
            'seed': self.seed
        }

    @classmethod
    def from_grid(cls, grid: Sequence[Any], rows: int, cols: int,
                  start_index: int = 0, goal_index: Optional[int] = None) -> 'Maze':
        """Wrap an existing flat grid, checking it against its dimensions"""
        check_dimensions(rows, cols)
        if len(grid) != rows * cols:
            raise InvalidMaze(
                f"Grid has {len(grid)} cells, expected {rows * cols} for {rows}x{cols}",
                {'grid_length': len(grid), 'rows': rows, 'cols': cols})
        if goal_index is None:
            goal_index = goal_index_for(rows, cols)
        return cls(grid=tuple(grid), rows=rows, cols=cols,
                   start_index=start_index, goal_index=goal_index)

    @classmethod
    def from_rows(cls, lines: Sequence[str], **kwargs) -> 'Maze':
        """Build a hand-authored maze from text rows of '#' walls and '.' passages"""
        for line in lines:
            if not isinstance(line, str):
                raise InvalidMaze(f"Maze rows must be text, got {type(line).__name__}",
                                  {'row_type': type(line).__name__})
        lines = [line.rstrip('\r\n') for line in lines]
        # Trailing blank lines are a text file artefact, interior ones are not
        while lines and not lines[-1]:
            lines.pop()
        if not lines:
            raise InvalidDimension("Maze text has no rows")
        cols = len(lines[0])
        for number, line in enumerate(lines):
            if len(line) != cols:
                raise InvalidMaze(
                    f"Row {number} has {len(line)} cells, expected {cols}",
                    {'row': number, 'length': len(line), 'cols': cols})

        grid = []
        for line in lines:
            for char in line:
                if char == WALL_CHAR:
                    grid.append(False)
                elif char in PASSAGE_CHARS:
                    grid.append(True)
                else:
                    raise InvalidMaze(f"Unknown maze character {char!r}", {'char': char})

        rows = len(lines)
        text = ''.join(lines)
        if 'S' in text and 'start_index' not in kwargs:
            kwargs['start_index'] = text.index('S')
        if 'G' in text and 'goal_index' not in kwargs:
            kwargs['goal_index'] = text.index('G')
        return cls.from_grid(grid, rows, cols, **kwargs)


class MazeGenerator:
    """Maze generator using randomized Prim's algorithm on the doubled grid"""

    def __init__(self, rows: int, cols: int, rng=None, seed: Optional[int] = None):
        check_dimensions(rows, cols)
        self.rows = rows
        self.cols = cols
        self.seed = seed
        if rng is None:
            rng = random.Random(seed)
        self.rng = rng
        self.draw = random_source(rng)

    def iter_steps(self, grid: Optional[List[bool]] = None) -> Iterator[int]:
        """
        Carve the maze, yielding each index as it becomes a passage.

        Yields the seed cell, then for every frontier cell picked the cell
        itself followed by the in-between cell that links it to the maze.
        The grid list is only owned by this iterator, so closing it early
        leaves nothing half-built anywhere else.
        """
        rows, cols = self.rows, self.cols
        if grid is None:
            grid = [False] * (rows * cols)

        seed_index = 0
        grid[seed_index] = True
        yield seed_index

        # Frontier cells are walls at distance 2 from a passage
        frontier = neighbors_at_distance(seed_index, rows, cols)
        in_frontier = set(frontier)

        while frontier:
            frontier_cell = frontier.pop(rand_int(self.draw, len(frontier)))
            in_frontier.discard(frontier_cell)

            grid[frontier_cell] = True
            yield frontier_cell

            neighbors = neighbors_at_distance(frontier_cell, rows, cols)
            for neighbor in neighbors:
                if not grid[neighbor] and neighbor not in in_frontier:
                    frontier.append(neighbor)
                    in_frontier.add(neighbor)

            passages = [neighbor for neighbor in neighbors if grid[neighbor]]
            linked = passages[rand_int(self.draw, len(passages))]

            # Open the wall between the frontier cell and the maze
            between = (frontier_cell + linked) // 2
            grid[between] = True
            yield between

    def generate(self) -> Maze:
        """Generate a complete maze in one call"""
        grid = [False] * (self.rows * self.cols)
        carved = 0
        for _ in self.iter_steps(grid):
            carved += 1

        maze = Maze(grid=tuple(grid), rows=self.rows, cols=self.cols,
                    goal_index=goal_index_for(self.rows, self.cols), seed=self.seed)
        logger.debug(f"Maze generated: {self.rows}x{self.cols}, "
                     f"{maze.passage_count} passages, {carved} carve steps")
        return maze


def generate_maze(rows: int, cols: int, rng=None, seed: Optional[int] = None) -> Maze:
    """Generate a maze over a rows x cols grid"""
    return MazeGenerator(rows, cols, rng=rng, seed=seed).generate()
