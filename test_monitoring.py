#!/usr/bin/env python3
"""
Tests for logging and performance metrics
"""

import pytest

from monitoring import MazeLogger, PerformanceMonitor


@pytest.fixture
def maze_logger(tmp_path):
    return MazeLogger(log_dir=str(tmp_path), log_level='DEBUG')


def test_log_files_created(maze_logger, tmp_path):
    maze_logger.log_maze_event('maze_generated', {'rows': 3})
    maze_logger.log_error(ValueError('boom'), {'rows': 0})
    for handler in maze_logger.logger.handlers:
        handler.flush()

    assert 'maze_generated' in (tmp_path / 'maze.log').read_text()
    assert 'boom' in (tmp_path / 'error.log').read_text()


def test_time_operation_records_success_and_failure(maze_logger):
    monitor = PerformanceMonitor(maze_logger)

    @monitor.time_operation('work')
    def work(fail=False):
        if fail:
            raise RuntimeError('failed work')
        return 42

    assert work() == 42
    with pytest.raises(RuntimeError):
        work(fail=True)

    metrics = monitor.get_metrics()['work']
    assert metrics['count'] == 2
    assert metrics['error_count'] == 1
    assert metrics['success_rate'] == 50.0
    assert metrics['recent_errors'] == ['failed work']


def test_slow_operations_are_logged(maze_logger, tmp_path):
    monitor = PerformanceMonitor(maze_logger, slow_threshold=0.0)
    monitor.record_metric('slow', 0.5)
    for handler in maze_logger.logger.handlers:
        handler.flush()
    assert 'PERFORMANCE' in (tmp_path / 'maze.log').read_text()
