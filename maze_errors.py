#!/usr/bin/env python3
"""
Error taxonomy for maze generation and solving
- InvalidDimension: non-positive or out-of-range rows/cols
- InvalidMaze: grid that does not match its dimensions or endpoints
- Unreachable: start and goal are not connected
"""

from typing import Any, Dict, Optional

class MazeError(Exception):
    """Base class for maze failures reported to callers"""

    status_code = 500

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'error': type(self).__name__,
            'message': self.message,
            'context': self.context
        }


class InvalidDimension(MazeError, ValueError):
    """Rows or cols are not usable grid dimensions"""

    status_code = 400


class InvalidMaze(MazeError, ValueError):
    """Maze grid does not agree with the dimensions or endpoints given"""

    status_code = 400


class Unreachable(MazeError):
    """Solver exhausted every reachable cell without finding the goal"""

    status_code = 422


def check_dimensions(rows: Any, cols: Any, max_rows: Optional[int] = None,
                     max_cols: Optional[int] = None) -> None:
    """Raise InvalidDimension unless rows and cols are positive ints within limits"""
    for name, value, limit in (('rows', rows, max_rows), ('cols', cols, max_cols)):
        # bool is an int subclass but never a dimension
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidDimension(f"{name} must be an integer, got {value!r}",
                                   {name: repr(value)})
        if value < 1:
            raise InvalidDimension(f"{name} must be at least 1, got {value}",
                                   {name: value})
        if limit is not None and value > limit:
            raise InvalidDimension(f"{name} must be at most {limit}, got {value}",
                                   {name: value, 'limit': limit})
