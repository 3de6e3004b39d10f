#!/usr/bin/env python3
"""
Tests for turning mazes and travel traces into frames
"""

import base64
import random

import numpy as np
import pytest

from config import CONFIG
from maze_generator import Maze, MazeGenerator, generate_maze
from maze_renderer import MazeRenderer, animate, encode_png, show, to_data_uri
from maze_solver import solve_maze

COLORS = CONFIG["colors"]


class FirstChoice:
    def random(self):
        return 0.0


def _cell(image, renderer, index):
    """Colour at the centre of a cell"""
    row, col = divmod(index, renderer.cols)
    s = renderer.cell_size
    return tuple(int(v) for v in image[row * s + s // 2, col * s + s // 2])


@pytest.fixture
def hand_maze():
    return Maze.from_rows([
        "..#",
        ".##",
        "...",
    ])


def test_render_maze_colours(hand_maze):
    renderer = MazeRenderer.for_maze(hand_maze, cell_size=4)
    image = renderer.render_maze(hand_maze)

    assert image.shape == (12, 12, 3)
    assert image.dtype == np.uint8
    assert _cell(image, renderer, 0) == COLORS["player"]
    assert _cell(image, renderer, 8) == COLORS["goal"]
    assert _cell(image, renderer, 1) == COLORS["passage"]
    assert _cell(image, renderer, 4) == COLORS["wall"]


def test_render_rejects_other_dimensions(hand_maze):
    renderer = MazeRenderer(4, 4)
    with pytest.raises(ValueError):
        renderer.render_maze(hand_maze)


def test_custom_colours_override_defaults(hand_maze):
    renderer = MazeRenderer.for_maze(hand_maze, cell_size=2, colors={"wall": (1, 2, 3)})
    image = renderer.render_maze(hand_maze)
    assert _cell(image, renderer, 4) == (1, 2, 3)
    assert _cell(image, renderer, 1) == COLORS["passage"]


def test_generation_frames_follow_carving():
    generator = MazeGenerator(7, 9, rng=random.Random(1))
    grid = [False] * 63
    steps = list(generator.iter_steps(grid))
    maze = Maze.from_grid(grid, 7, 9)

    renderer = MazeRenderer(7, 9, cell_size=3)
    frames = 0
    for frame in renderer.iter_generation_frames(steps, maze):
        frames += 1
    assert frames == len(steps) + 1

    # Final canvas matches a full render of the finished maze
    assert np.array_equal(frame, renderer.render_maze(maze))


def test_solution_frames(hand_maze):
    travel = solve_maze(hand_maze, rng=FirstChoice())
    renderer = MazeRenderer.for_maze(hand_maze, cell_size=2)

    snapshots = [frame.copy() for frame in renderer.iter_solution_frames(hand_maze, travel)]
    assert len(snapshots) == len(travel)

    last = snapshots[-1]
    assert _cell(last, renderer, 8) == COLORS["player"]
    assert _cell(last, renderer, 1) == COLORS["backtracking"]
    assert _cell(last, renderer, 0) == COLORS["travelling"]
    assert _cell(last, renderer, 7) == COLORS["travelling"]
    assert np.array_equal(last, renderer.render_solution(hand_maze, travel))


def test_no_frames_for_empty_trace(hand_maze):
    renderer = MazeRenderer.for_maze(hand_maze)
    assert list(renderer.iter_solution_frames(hand_maze, [])) == []


def test_png_encoding():
    maze = generate_maze(5, 5, seed=3)
    image = MazeRenderer.for_maze(maze).render_maze(maze)

    data = encode_png(image)
    assert data.startswith(b'\x89PNG\r\n\x1a\n')

    uri = to_data_uri(image)
    assert uri.startswith("data:image/png;base64,")
    assert base64.b64decode(uri.split(",", 1)[1]) == data


def test_matplotlib_display():
    maze = generate_maze(5, 5, seed=3)
    renderer = MazeRenderer.for_maze(maze)
    ax = show(renderer.render_maze(maze), title="5x5")
    assert ax.get_title() == "5x5"
    assert len(ax.images) == 1

    fig = animate(renderer.iter_solution_frames(maze, solve_maze(maze, seed=3)),
                  delay_ms=0, stride=5)
    assert len(fig.axes[0].images) == 1
