#!/usr/bin/env python3
"""
Configuration for the maze generator/solver service
Defaults below, overridable through MAZE_* environment variables
"""

import copy
import os
from typing import Any, Dict, Mapping, Optional

# --- CONFIG ---
CONFIG = {
    "rows": 31,
    "cols": 51,
    "max_rows": 500,
    "max_cols": 500,
    "cell_size": 10,      # Pixels per maze cell
    "frame_delay_ms": 10,  # Pause between animation frames
    "host": "127.0.0.1",
    "port": 8080,
    "log_dir": "logs",
    "log_level": "INFO",
    # BGR, as OpenCV expects
    "colors": {
        "player": (255, 0, 0),
        "goal": (0, 255, 0),
        "travelling": (255, 255, 0),
        "backtracking": (0, 0, 255),
        "wall": (17, 17, 34),
        "passage": (255, 255, 255)
    }
}

ENV_PREFIX = "MAZE_"
INT_KEYS = ("rows", "cols", "max_rows", "max_cols", "cell_size", "frame_delay_ms", "port")
STR_KEYS = ("host", "log_dir", "log_level")


def load_config(overrides: Optional[Mapping[str, Any]] = None,
                environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Return a fresh config: defaults, then environment, then explicit overrides"""
    config = copy.deepcopy(CONFIG)
    if environ is None:
        environ = os.environ

    for key in INT_KEYS:
        value = environ.get(ENV_PREFIX + key.upper())
        if value is not None:
            try:
                config[key] = int(value)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX + key.upper()} must be an integer, got {value!r}")

    for key in STR_KEYS:
        value = environ.get(ENV_PREFIX + key.upper())
        if value:
            config[key] = value

    if overrides:
        for key, value in overrides.items():
            if key == "colors":
                config["colors"].update(value)
            else:
                config[key] = value

    return config
