"""
Shared layout constants for the application graph.
Every node has the same footprint; separations can be tuned via env.
"""

import os


def _int_env(name: str, default: int) -> int:
    v = os.environ.get(name)
    return int(v) if v is not None else default


# Node footprint (every application node is drawn the same size)
NODE_WIDTH = 172
NODE_HEIGHT = 36

# Spacing between neighbouring nodes inside one rank
DEFAULT_NODE_SEP = _int_env("APPGRAPH_NODE_SEP", 50)

# Spacing between ranks
DEFAULT_RANK_SEP = _int_env("APPGRAPH_RANK_SEP", 50)

# Rank directions: top-to-bottom and left-to-right
DIRECTION_TB = "TB"
DIRECTION_LR = "LR"
DEFAULT_DIRECTION = DIRECTION_TB

_DIRECTION_ALIASES = {
    "TB": DIRECTION_TB,
    "top-to-bottom": DIRECTION_TB,
    "LR": DIRECTION_LR,
    "left-to-right": DIRECTION_LR,
}


def normalize_direction(direction) -> str:
    """Map 'TB' / 'top-to-bottom' / 'LR' / 'left-to-right' to 'TB' or 'LR'. None -> default."""
    if direction is None:
        return DEFAULT_DIRECTION
    if direction not in _DIRECTION_ALIASES:
        raise ValueError(f"Unknown layout direction: {direction!r} (expected TB or LR)")
    return _DIRECTION_ALIASES[direction]
