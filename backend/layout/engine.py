"""
Layout engine: positions Builder output with the rank layout.

Each call builds its own workspace, reads back center points, assigns the
edge entry/exit sides for the direction, nudges exact coordinate collisions
apart and converts centers to top-left positions.
"""

from typing import Dict, List, Optional, Set, Tuple

from loguru import logger

from builder import validate_references
from shared.constants import DEFAULT_NODE_SEP, DEFAULT_RANK_SEP, DIRECTION_LR, normalize_direction
from shared.models import GraphEdge, GraphNode, LayoutResult, Position

from .ranked import new_workspace, run_layout


def side_for_direction(direction: str) -> Tuple[str, str]:
    """Return (target_side, source_side): LR enters left / exits right, TB enters top / exits bottom."""
    if normalize_direction(direction) == DIRECTION_LR:
        return "left", "right"
    return "top", "bottom"


def resolve_overlaps(
    nodes: List[GraphNode], centers: Dict[str, Tuple[float, float]]
) -> Dict[str, Tuple[float, float]]:
    """
    Greedy, input-ordered nudge for nodes sharing the exact same center.
    A taken (x, y) is shifted by (width/2, height/2) until free. Near misses
    (overlapping boxes with different centers) are left alone.
    """
    taken: Set[Tuple[float, float]] = set()
    resolved: Dict[str, Tuple[float, float]] = {}
    for node in nodes:
        x, y = centers[node.id]
        while (x, y) in taken:
            x += node.width / 2
            y += node.height / 2
        taken.add((x, y))
        resolved[node.id] = (x, y)
    return resolved


def layout_graph(
    nodes: List[GraphNode],
    edges: List[GraphEdge],
    direction: Optional[str] = None,
    node_sep: float = DEFAULT_NODE_SEP,
    rank_sep: float = DEFAULT_RANK_SEP,
) -> LayoutResult:
    """
    Position nodes for a top-to-bottom ("TB") or left-to-right ("LR") drawing.
    Nodes are mutated in place (position and sides) and returned with the edges unchanged.
    """
    direction = normalize_direction(direction)
    if not nodes:
        return LayoutResult(nodes=[], edges=list(edges))

    validate_references(nodes, edges)

    G = new_workspace(rankdir=direction, nodesep=node_sep, ranksep=rank_sep)
    for node in nodes:
        G.add_node(node.id, width=node.width, height=node.height)
    for edge in edges:
        G.add_edge(edge.source_node_id, edge.target_node_id)

    run_layout(G)

    target_side, source_side = side_for_direction(direction)
    centers = {nid: (attrs["x"], attrs["y"]) for nid, attrs in G.nodes(data=True)}
    resolved = resolve_overlaps(nodes, centers)

    for node in nodes:
        x, y = resolved[node.id]
        node.target_side = target_side
        node.source_side = source_side
        node.position = Position(x=x - node.width / 2, y=y - node.height / 2)

    logger.debug("Laid out {} nodes / {} edges ({})", len(nodes), len(edges), direction)
    return LayoutResult(nodes=nodes, edges=list(edges))
