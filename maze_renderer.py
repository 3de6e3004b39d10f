#!/usr/bin/env python3
"""
Maze Renderer
- Turns a maze grid and a travel trace into BGR numpy images
- Frames are produced lazily so callers can animate at their own pace
- PNG encoding via OpenCV, on-screen display via matplotlib
"""

import base64
import logging
from typing import Dict, Iterable, Iterator, Optional, Sequence, Tuple

import cv2
import matplotlib.pyplot as plt
import numpy as np

from config import CONFIG
from grid_indexer import index_to_coords
from maze_generator import Maze

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]


class MazeRenderer:
    """Renders maze grids and solver traces to images"""

    def __init__(self, rows: int, cols: int, cell_size: int = CONFIG["cell_size"],
                 colors: Optional[Dict[str, Color]] = None):
        self.rows = rows
        self.cols = cols
        self.cell_size = cell_size
        self.colors = dict(CONFIG["colors"])
        if colors:
            self.colors.update(colors)

    @classmethod
    def for_maze(cls, maze: Maze, **kwargs) -> 'MazeRenderer':
        return cls(maze.rows, maze.cols, **kwargs)

    def blank(self) -> np.ndarray:
        """Canvas with every cell drawn as wall"""
        s = self.cell_size
        image = np.empty((self.rows * s, self.cols * s, 3), dtype=np.uint8)
        image[:] = self.colors["wall"]
        return image

    def fill_cell(self, image: np.ndarray, index: int, color: Color) -> None:
        row, col = index_to_coords(index, self.cols)
        s = self.cell_size
        image[row * s:(row + 1) * s, col * s:(col + 1) * s] = color

    def render_maze(self, maze: Maze) -> np.ndarray:
        """Draw walls, passages and the start/goal markers"""
        if (maze.rows, maze.cols) != (self.rows, self.cols):
            raise ValueError(f"Renderer is {self.rows}x{self.cols}, maze is {maze.rows}x{maze.cols}")

        image = self.blank()
        s = self.cell_size
        passage_mask = np.repeat(np.repeat(maze.as_array().astype(bool), s, axis=0), s, axis=1)
        image[passage_mask] = self.colors["passage"]

        self.fill_cell(image, maze.start_index, self.colors["player"])
        self.fill_cell(image, maze.goal_index, self.colors["goal"])
        return image

    def iter_generation_frames(self, steps: Iterable[int], maze: Optional[Maze] = None) -> Iterator[np.ndarray]:
        """
        Yield the canvas after each carved cell.

        The same array is yielded every time and updated in place; copy a
        frame to keep it. When the finished maze is passed, a last frame with
        the start and goal markers is added.
        """
        image = self.blank()
        for index in steps:
            self.fill_cell(image, index, self.colors["passage"])
            yield image

        if maze is not None:
            self.fill_cell(image, maze.start_index, self.colors["player"])
            self.fill_cell(image, maze.goal_index, self.colors["goal"])
            yield image

    def iter_solution_frames(self, maze: Maze, travel: Sequence) -> Iterator[np.ndarray]:
        """
        Yield one frame per travel step, drawn over the rendered maze.

        The current cell is drawn as the player; the previous cell is left in
        the backtracking colour if the solver retreated from it, otherwise in
        the travelling colour. The canvas is shared between frames.
        """
        if not travel:
            return

        image = self.render_maze(maze)
        self.fill_cell(image, travel[0].index, self.colors["player"])
        yield image

        for previous, current in zip(travel, travel[1:]):
            self.fill_cell(image, current.index, self.colors["player"])
            if previous.backtracking:
                self.fill_cell(image, previous.index, self.colors["backtracking"])
            else:
                self.fill_cell(image, previous.index, self.colors["travelling"])
            yield image

    def render_solution(self, maze: Maze, travel: Sequence) -> np.ndarray:
        """Final frame of the solution animation"""
        frame = self.render_maze(maze)
        for frame in self.iter_solution_frames(maze, travel):
            pass
        return frame.copy()


def encode_png(image: np.ndarray) -> bytes:
    """Encode a BGR image as PNG bytes"""
    ok, buffer = cv2.imencode('.png', image)
    if not ok:
        raise ValueError("PNG encoding failed")
    return buffer.tobytes()


def to_data_uri(image: np.ndarray) -> str:
    """PNG data URI for embedding in JSON responses"""
    return f"data:image/png;base64,{base64.b64encode(encode_png(image)).decode()}"


def show(image: np.ndarray, ax=None, title: Optional[str] = None):
    """Draw a BGR image on matplotlib axes"""
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 10))
    ax.imshow(cv2.cvtColor(image, cv2.COLOR_BGR2RGB), interpolation='nearest')
    ax.set_axis_off()
    if title:
        ax.set_title(title)
    return ax


def animate(frames: Iterable[np.ndarray], delay_ms: int = CONFIG["frame_delay_ms"],
            stride: int = 1, title: Optional[str] = None):
    """Play frames in a matplotlib window, drawing every stride-th frame"""
    stride = max(stride, 1)
    fig, ax = plt.subplots(figsize=(10, 10))
    ax.set_axis_off()
    if title:
        ax.set_title(title)

    artist = None
    frame = None
    for count, frame in enumerate(frames):
        if count % stride:
            continue
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        if artist is None:
            artist = ax.imshow(rgb, interpolation='nearest')
        else:
            artist.set_data(rgb)
        # pause(0) would block forever in the event loop
        plt.pause(max(delay_ms, 1) / 1000)

    logger.debug(f"Animation finished, stride {stride}")

    # Always finish on the last frame even when stride skipped it
    if frame is not None:
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        if artist is None:
            ax.imshow(rgb, interpolation='nearest')
        else:
            artist.set_data(rgb)
    return fig
