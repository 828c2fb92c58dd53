"""Layout module - positions app graphs with a rank-based (layered) layout."""

from .engine import layout_graph, resolve_overlaps, side_for_direction
from .ranked import new_workspace, run_layout

__all__ = ["layout_graph", "new_workspace", "resolve_overlaps", "run_layout", "side_for_direction"]
