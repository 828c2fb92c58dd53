"""
Palette nodes: dropped onto the canvas by hand, positioned where dropped.
They never go through the builder or the layout engine.
"""

import time
from typing import List, Optional, Sequence

from shared.models import GraphNode, Position

PALETTE_NODE_TYPES = ("input", "default", "output")


def create_palette_node(node_type: str, position: Position, now_ms: Optional[int] = None) -> GraphNode:
    """Node with id '{type}-{epoch ms}' and label '{type} node'."""
    if node_type not in PALETTE_NODE_TYPES:
        raise ValueError(f"Unknown palette node type: {node_type!r}")
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return GraphNode(
        id=f"{node_type}-{now_ms}",
        label=f"{node_type} node",
        position=Position(x=position.x, y=position.y),
        type=node_type,
    )


def append_node(nodes: Sequence[GraphNode], node: GraphNode) -> List[GraphNode]:
    """Return a new list with node appended. Layout is not re-run."""
    if any(n.id == node.id for n in nodes):
        raise ValueError(f"Node id already on canvas: {node.id!r}")
    return [*nodes, node]
