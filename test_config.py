#!/usr/bin/env python3
"""
Tests for configuration loading
"""

import pytest

from config import CONFIG, load_config


def test_defaults():
    config = load_config(environ={})
    assert config['rows'] == CONFIG['rows']
    assert config['colors']['wall'] == CONFIG['colors']['wall']
    assert config is not CONFIG


def test_environment_overrides():
    config = load_config(environ={'MAZE_ROWS': '11', 'MAZE_PORT': '9000', 'MAZE_LOG_LEVEL': 'DEBUG'})
    assert config['rows'] == 11
    assert config['port'] == 9000
    assert config['log_level'] == 'DEBUG'


def test_explicit_overrides_win():
    config = load_config({'rows': 5, 'colors': {'wall': (0, 0, 0)}}, environ={'MAZE_ROWS': '11'})
    assert config['rows'] == 5
    assert config['colors']['wall'] == (0, 0, 0)
    assert config['colors']['passage'] == CONFIG['colors']['passage']
    # Defaults stay untouched
    assert CONFIG['colors']['wall'] != (0, 0, 0)


def test_bad_integer_in_environment():
    with pytest.raises(ValueError):
        load_config(environ={'MAZE_COLS': 'wide'})
