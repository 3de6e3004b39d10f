#!/usr/bin/env python3
"""
Maze generation and solving server
- GET  /api/maze   generate a maze (optionally with a PNG preview)
- POST /api/solve  solve a generated or hand-authored maze
- Command line: serve the API, or generate/solve/show a maze locally
"""

import argparse
import random
import sys
import time

import matplotlib.pyplot as plt
from flask import Flask, jsonify, request

from config import load_config
from error_handling import MazeErrorHandler
from maze_errors import InvalidDimension, InvalidMaze, MazeError, check_dimensions
from maze_generator import Maze, MazeGenerator, generate_maze
from maze_renderer import MazeRenderer, animate, to_data_uri
from maze_solver import MazeSolver, path_from_trace, solve_maze
from monitoring import MazeLogger, PerformanceMonitor, setup_monitoring


def _int_arg(source, name, default=None):
    """Read an integer from query args or a JSON body"""
    value = source.get(name, default)
    if value is None or isinstance(value, int) and not isinstance(value, bool):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidDimension(f"{name} must be an integer, got {value!r}", {name: repr(value)})


def _rng_for(seed):
    return random.Random(seed)


def _maze_from_payload(data, config):
    """Build a Maze from a /api/solve request body"""
    overrides = {}
    for key in ('start_index', 'goal_index'):
        if data.get(key) is not None:
            overrides[key] = _int_arg(data, key)

    if 'rows_text' in data:
        lines = data['rows_text']
        if isinstance(lines, str):
            lines = lines.splitlines()
        elif not isinstance(lines, list) or not all(isinstance(line, str) for line in lines):
            raise InvalidMaze("'rows_text' must be a string or a list of strings",
                              {'rows_text_type': type(lines).__name__})
        maze = Maze.from_rows(lines, **overrides)
        check_dimensions(maze.rows, maze.cols, config['max_rows'], config['max_cols'])
        return maze

    grid = data.get('grid')
    if not isinstance(grid, list):
        raise InvalidMaze("Request needs a 'grid' list or 'rows_text'", {'keys': sorted(data)})
    rows = _int_arg(data, 'rows')
    cols = _int_arg(data, 'cols')
    check_dimensions(rows, cols, config['max_rows'], config['max_cols'])
    return Maze.from_grid(grid, rows, cols, **overrides)


def create_app(config=None):
    """Create the Flask app serving maze generation and solving"""
    config = load_config(config)

    app = Flask(__name__)
    app.config['HOST'] = config['host']
    app.config['PORT'] = config['port']
    app.config['MAZE'] = config

    maze_logger = MazeLogger(config['log_dir'], config['log_level'])
    performance_monitor = PerformanceMonitor(maze_logger)
    app.extensions['maze'] = {
        'logger': maze_logger,
        'performance': performance_monitor
    }

    MazeErrorHandler(app, maze_logger)
    setup_monitoring(app, maze_logger, performance_monitor)

    @performance_monitor.time_operation('maze_generation')
    def timed_generate(rows, cols, seed):
        return generate_maze(rows, cols, rng=_rng_for(seed), seed=seed)

    @performance_monitor.time_operation('maze_solving')
    def timed_solve(maze, seed):
        return solve_maze(maze, rng=_rng_for(seed))

    @app.route('/api/health', methods=['GET'])
    def health():
        return jsonify({'status': 'ok', 'timestamp': time.time()})

    @app.route('/api/maze', methods=['GET'])
    def get_maze():
        rows = _int_arg(request.args, 'rows', config['rows'])
        cols = _int_arg(request.args, 'cols', config['cols'])
        seed = _int_arg(request.args, 'seed')
        check_dimensions(rows, cols, config['max_rows'], config['max_cols'])

        maze = timed_generate(rows, cols, seed)
        maze_logger.log_maze_event('maze_generated', {
            'rows': rows, 'cols': cols, 'seed': seed,
            'passages': maze.passage_count
        })

        response = maze.to_dict()
        if request.args.get('image', '').lower() in ('1', 'true', 'yes'):
            renderer = MazeRenderer.for_maze(maze, cell_size=config['cell_size'],
                                             colors=config['colors'])
            response['maze_image'] = to_data_uri(renderer.render_maze(maze))
        return jsonify(response)

    @app.route('/api/solve', methods=['POST'])
    def post_solve():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise InvalidMaze("Request body must be a JSON object")

        maze = _maze_from_payload(data, config)
        seed = _int_arg(data, 'seed')
        travel = timed_solve(maze, seed)
        path = path_from_trace(travel)

        maze_logger.log_maze_event('maze_solved', {
            'rows': maze.rows, 'cols': maze.cols, 'seed': seed,
            'steps': len(travel), 'path_length': len(path)
        })

        return jsonify({
            'start_index': maze.start_index,
            'goal_index': maze.goal_index,
            'trace': [step.to_dict() for step in travel],
            'path': path,
            'steps': len(travel),
            'backtracks': sum(1 for step in travel if step.backtracking)
        })

    return app


def build_parser():
    parser = argparse.ArgumentParser(description="Prim's maze generator with a DFS solver")
    subparsers = parser.add_subparsers(dest='command', required=True)

    serve = subparsers.add_parser('serve', help='Run the HTTP API')
    serve.add_argument('--host', default=None)
    serve.add_argument('--port', type=int, default=None)
    serve.add_argument('--debug', action='store_true')

    generate = subparsers.add_parser('generate', help='Generate (and solve) a maze locally')
    generate.add_argument('--rows', type=int, default=None)
    generate.add_argument('--cols', type=int, default=None)
    generate.add_argument('--seed', type=int, default=None)
    generate.add_argument('--solve', action='store_true', help='Mark the solution path')
    generate.add_argument('--show', action='store_true', help='Animate in a matplotlib window')
    generate.add_argument('--stride', type=int, default=1, help='Draw every Nth animation frame')
    return parser


def run_generate(args, config):
    rows = config['rows'] if args.rows is None else args.rows
    cols = config['cols'] if args.cols is None else args.cols
    check_dimensions(rows, cols, config['max_rows'], config['max_cols'])

    generator = MazeGenerator(rows, cols, seed=args.seed)
    renderer = MazeRenderer(rows, cols, cell_size=config['cell_size'], colors=config['colors'])

    if args.show:
        # Carve into our own grid so the animated run is the maze we keep
        grid = [False] * (rows * cols)
        frames = renderer.iter_generation_frames(generator.iter_steps(grid))
        animate(frames, config['frame_delay_ms'], args.stride, title=f"{rows}x{cols} maze")
        maze = Maze.from_grid(grid, rows, cols)
    else:
        maze = generator.generate()

    path = []
    if args.solve:
        travel = MazeSolver(maze, seed=args.seed).solve()
        path = path_from_trace(travel)
        print(f"Solved in {len(travel)} steps, path length {len(path)}")
        if args.show:
            animate(renderer.iter_solution_frames(maze, travel), config['frame_delay_ms'],
                    args.stride, title=f"{rows}x{cols} maze - solving")

    print("\n".join(maze.to_rows(path)))
    if args.show:
        plt.show()
    return maze


def main(argv=None):
    args = build_parser().parse_args(argv)
    config = load_config()

    if args.command == 'serve':
        host = args.host or config['host']
        port = args.port or config['port']
        app = create_app(config)
        print(f"Starting Maze Server on http://{host}:{port}")
        app.run(host=host, port=port, debug=args.debug)
        return 0

    try:
        run_generate(args, config)
    except MazeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == '__main__':
    sys.exit(main())
