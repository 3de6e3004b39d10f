#!/usr/bin/env python3
"""
Maze Solver using Randomized Depth-First Search
- Walks real (distance 1) adjacency over passage cells only
- Records every visit, flagging the visits that ended in a dead end
- Trace is meant to be replayed step by step by a renderer
"""

import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from maze_errors import InvalidMaze, Unreachable
from grid_indexer import in_bounds, neighbors_at_distance
from maze_generator import Maze, rand_int, random_source

logger = logging.getLogger(__name__)


@dataclass
class TravelStep:
    """One DFS visit; backtracking means the solver retreated after it"""
    index: int
    backtracking: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {'index': self.index, 'backtracking': self.backtracking}


class MazeSolver:
    """Randomized DFS from maze start to maze goal"""

    def __init__(self, maze: Maze, rows: Optional[int] = None, cols: Optional[int] = None,
                 rng=None, seed: Optional[int] = None):
        self.maze = maze
        self.rows = maze.rows if rows is None else rows
        self.cols = maze.cols if cols is None else cols
        if rng is None:
            rng = random.Random(seed)
        self.rng = rng
        self.draw = random_source(rng)
        self._validate()

    def _validate(self):
        """Check the maze against the dimensions the caller solves it with"""
        maze, rows, cols = self.maze, self.rows, self.cols
        if len(maze.grid) != rows * cols:
            raise InvalidMaze(
                f"Grid has {len(maze.grid)} cells, expected {rows * cols} for {rows}x{cols}",
                {'grid_length': len(maze.grid), 'rows': rows, 'cols': cols})

        for name, index in (('start', maze.start_index), ('goal', maze.goal_index)):
            if not in_bounds(index, rows, cols):
                raise InvalidMaze(f"{name} index {index} is outside the grid",
                                  {f'{name}_index': index})
            if not maze.is_passage(index):
                raise InvalidMaze(f"{name} index {index} is a wall",
                                  {f'{name}_index': index})

    def iter_travel(self) -> Iterator[TravelStep]:
        """
        Run the DFS, yielding each step once its backtracking flag is final.

        A step is held back until the solver knows whether it moves forward
        or retreats from it. Visited cells and the stack live only inside
        this iterator.
        """
        maze = self.maze
        goal = maze.goal_index
        start = maze.start_index

        stack = [start]
        visited = [False] * len(maze.grid)
        visited[start] = True
        current = TravelStep(start)

        while True:
            if current.index == goal:
                yield current
                return

            # Neighbours that are open and not visited yet
            candidates = [
                cell for cell in neighbors_at_distance(stack[-1], self.rows, self.cols, 1)
                if maze.is_passage(cell) and not visited[cell]
            ]

            if not candidates:
                # Dead end
                current.backtracking = True
                yield current
                stack.pop()
                if not stack:
                    raise Unreachable(
                        f"Goal {goal} is not reachable from start {start}",
                        {'start_index': start, 'goal_index': goal,
                         'visited': sum(visited)})
                current = TravelStep(stack[-1])
            else:
                next_cell = candidates[rand_int(self.draw, len(candidates))]
                stack.append(next_cell)
                visited[next_cell] = True
                yield current
                current = TravelStep(next_cell)

    def solve(self) -> List[TravelStep]:
        """Return the complete travel trace from start to goal"""
        travel = list(self.iter_travel())
        backtracks = sum(1 for step in travel if step.backtracking)
        logger.debug(f"Maze solved: {len(travel)} steps, {backtracks} backtracking")
        return travel


def solve_maze(maze: Maze, rows: Optional[int] = None, cols: Optional[int] = None,
               rng=None, seed: Optional[int] = None) -> List[TravelStep]:
    """Solve a maze with randomized DFS, returning the travel trace"""
    return MazeSolver(maze, rows, cols, rng=rng, seed=seed).solve()


def path_from_trace(travel: List[TravelStep]) -> List[int]:
    """Replay a trace to recover the start-to-goal path the DFS ended on"""
    path = []
    for position, step in enumerate(travel):
        if position > 0 and travel[position - 1].backtracking:
            # Retreated onto the cell already on top of the path
            path.pop()
        else:
            path.append(step.index)
    return path
