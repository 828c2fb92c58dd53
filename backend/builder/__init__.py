"""Builder module - star graph from application records, plus hand-placed palette nodes."""

from .graph_builder import (
    DEFAULT_ID_STRATEGY,
    ID_STRATEGIES,
    ID_STRATEGY_COMPOSITE,
    ID_STRATEGY_RAW,
    build_graph,
    edge_id_for,
    node_id_for,
    parse_records,
    validate_references,
)
from .palette import PALETTE_NODE_TYPES, append_node, create_palette_node

__all__ = [
    "DEFAULT_ID_STRATEGY",
    "ID_STRATEGIES",
    "ID_STRATEGY_COMPOSITE",
    "ID_STRATEGY_RAW",
    "PALETTE_NODE_TYPES",
    "append_node",
    "build_graph",
    "create_palette_node",
    "edge_id_for",
    "node_id_for",
    "parse_records",
    "validate_references",
]
