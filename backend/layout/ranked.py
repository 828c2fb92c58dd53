"""
Rank-based (layered) layout for directed graphs held in a networkx workspace.

The workspace is a nx.DiGraph whose nodes carry ``width``/``height`` and whose
graph attributes carry ``rankdir`` ("TB" or "LR"), ``nodesep`` and ``ranksep``.
run_layout writes center-point ``x``/``y`` onto every workspace node.

Stages:
1. Acyclic pass (drop one edge per remaining cycle)
2. Rank assignment (longest path from sources)
3. Dummy node insertion (for edges spanning several ranks)
4. Crossing reduction (alternating barycenter sweeps)
5. Coordinate assignment (median pull, order and spacing preserved)
6. Translation so the drawing starts at (0, 0)
"""

from itertools import combinations
from typing import Dict, List, Optional, Set, Tuple

import networkx as nx
from loguru import logger

from shared.constants import DEFAULT_NODE_SEP, DEFAULT_RANK_SEP, DIRECTION_LR, DIRECTION_TB

_ALIGN_PASSES = 12
_ORDER_PASSES = 30


def new_workspace(
    rankdir: str = DIRECTION_TB,
    nodesep: float = DEFAULT_NODE_SEP,
    ranksep: float = DEFAULT_RANK_SEP,
) -> nx.DiGraph:
    """Create an empty layout workspace. One per layout call."""
    return nx.DiGraph(rankdir=rankdir, nodesep=nodesep, ranksep=ranksep)


def run_layout(G: nx.DiGraph) -> None:
    """Assign center x/y to every node of G (in place)."""
    if G.number_of_nodes() == 0:
        return

    rankdir = G.graph.get("rankdir", DIRECTION_TB)
    if rankdir not in (DIRECTION_TB, DIRECTION_LR):
        raise ValueError(f"Unsupported rankdir: {rankdir!r}")
    nodesep = G.graph.get("nodesep", DEFAULT_NODE_SEP)
    ranksep = G.graph.get("ranksep", DEFAULT_RANK_SEP)
    horizontal = rankdir == DIRECTION_LR

    # Work on a copy; G only receives the final coordinates.
    H = nx.DiGraph()
    for nid, attrs in G.nodes(data=True):
        w, h = float(attrs.get("width", 0)), float(attrs.get("height", 0))
        # LR is laid out as TB with transposed footprints, then transposed back.
        H.add_node(nid, w=h if horizontal else w, h=w if horizontal else h)
    H.add_edges_from((u, v) for u, v in G.edges() if u != v)

    _break_cycles(H)
    layers = _assign_layers(H)
    layers, dummy_nodes = _insert_dummy_nodes(H, layers)
    _reduce_crossings(H, layers)
    centers = _assign_coordinates(H, layers, nodesep, ranksep)

    for nid in G.nodes():
        x, y = centers[nid]
        if horizontal:
            x, y = y, x
        G.nodes[nid]["x"] = x
        G.nodes[nid]["y"] = y

    logger.debug(
        "Rank layout: {} nodes, {} ranks, {} dummies, rankdir={}",
        G.number_of_nodes(), len(layers), len(dummy_nodes), rankdir,
    )


# ---------------------------------------------------------------------------
# 1. Acyclic pass
# ---------------------------------------------------------------------------

def _break_cycles(G: nx.DiGraph) -> None:
    """Remove one edge of each cycle until G is a DAG (first edge nx.find_cycle reports)."""
    while not nx.is_directed_acyclic_graph(G):
        u, v = nx.find_cycle(G)[0][:2]
        G.remove_edge(u, v)


# ---------------------------------------------------------------------------
# 2. Rank assignment (longest path from sources)
# ---------------------------------------------------------------------------

def _assign_layers(G: nx.DiGraph) -> List[List[str]]:
    node_layer: Dict[str, int] = {}
    for n in nx.topological_sort(G):
        preds = list(G.predecessors(n))
        node_layer[n] = max(node_layer[p] for p in preds) + 1 if preds else 0

    layers: List[List[str]] = [[] for _ in range(max(node_layer.values()) + 1)]
    # Insertion order inside a rank follows G's node order, not the topological walk.
    for n in G.nodes():
        layers[node_layer[n]].append(n)
    return layers


# ---------------------------------------------------------------------------
# 3. Dummy node insertion
# ---------------------------------------------------------------------------

def _insert_dummy_nodes(
    G: nx.DiGraph, layers: List[List[str]]
) -> Tuple[List[List[str]], Set[str]]:
    """Split edges spanning more than one rank into chains of zero-size dummies."""
    node_layer = {n: i for i, layer in enumerate(layers) for n in layer}

    dummy_nodes: Set[str] = set()
    for u, v in list(G.edges()):
        if node_layer[v] - node_layer[u] < 2:
            continue

        G.remove_edge(u, v)
        chain = [u]
        for rank in range(node_layer[u] + 1, node_layer[v]):
            d = f"__d{len(dummy_nodes) + 1}"
            dummy_nodes.add(d)
            G.add_node(d, w=0.0, h=0.0)
            layers[rank].append(d)
            chain.append(d)
        chain.append(v)
        nx.add_path(G, chain)

    return layers, dummy_nodes


# ---------------------------------------------------------------------------
# 4. Crossing reduction (barycenter sweeps)
# ---------------------------------------------------------------------------

def _crossings_between(G: nx.DiGraph, upper: List[str], lower: List[str]) -> int:
    """Edges between two adjacent ranks whose endpoints are in opposite order."""
    slot = {n: i for i, n in enumerate(lower)}
    ends = [(i, slot[v]) for i, u in enumerate(upper) for v in G.successors(u) if v in slot]
    return sum(1 for (a1, b1), (a2, b2) in combinations(ends, 2) if (a1 - a2) * (b1 - b2) < 0)


def _crossings(G: nx.DiGraph, layers: List[List[str]]) -> int:
    return sum(_crossings_between(G, upper, lower) for upper, lower in zip(layers, layers[1:]))


def _order_by_barycenter(
    G: nx.DiGraph, ref: List[str], layer: List[str], use_preds: bool
) -> List[str]:
    """Sort layer by mean slot of its neighbours in ref. Nodes with no neighbour there keep their index."""
    ref_slot = {n: i for i, n in enumerate(ref)}
    weights: Dict[str, Optional[float]] = {}
    for n in layer:
        nbrs = G.predecessors(n) if use_preds else G.successors(n)
        slots = [ref_slot[m] for m in nbrs if m in ref_slot]
        weights[n] = sum(slots) / len(slots) if slots else None

    ordered = sorted((n for n in layer if weights[n] is not None), key=weights.get)
    for idx, n in enumerate(layer):
        if weights[n] is None:
            ordered.insert(min(idx, len(ordered)), n)
    return ordered


def _reduce_crossings(G: nx.DiGraph, layers: List[List[str]], sweeps: int = _ORDER_PASSES) -> None:
    """Alternate down/up barycenter sweeps, keeping the best ordering seen (in place)."""
    best = _crossings(G, layers)
    if best == 0:
        return
    best_layers = [list(layer) for layer in layers]

    for sweep in range(sweeps):
        if sweep % 2 == 0:
            for i in range(1, len(layers)):
                layers[i] = _order_by_barycenter(G, layers[i - 1], layers[i], use_preds=True)
        else:
            for i in reversed(range(len(layers) - 1)):
                layers[i] = _order_by_barycenter(G, layers[i + 1], layers[i], use_preds=False)

        count = _crossings(G, layers)
        if count < best:
            best, best_layers = count, [list(layer) for layer in layers]
            if best == 0:
                break

    layers[:] = best_layers


# ---------------------------------------------------------------------------
# 5. Coordinate assignment
# ---------------------------------------------------------------------------

def _assign_coordinates(
    G: nx.DiGraph,
    layers: List[List[str]],
    nodesep: float,
    ranksep: float,
) -> Dict[str, Tuple[float, float]]:
    """Return center (x, y) per node, translated so the bounding box starts at (0, 0)."""
    left: Dict[str, float] = {}
    for layer in layers:
        x = 0.0
        for nid in layer:
            left[nid] = x
            x += G.nodes[nid]["w"] + nodesep

    for _ in range(_ALIGN_PASSES):
        for layer_idx in range(1, len(layers)):
            _align_to_connected(G, layers[layer_idx], left, nodesep)
        for layer_idx in range(len(layers) - 2, -1, -1):
            _align_to_connected(G, layers[layer_idx], left, nodesep)

    # Ranks are stacked by their tallest member; nodes are centered in their rank.
    rank_center: List[float] = []
    top = 0.0
    for layer in layers:
        rank_h = max(G.nodes[n]["h"] for n in layer) if layer else 0.0
        rank_center.append(top + rank_h / 2.0)
        top += rank_h + ranksep

    min_x = min(left[n] for n in left)
    centers: Dict[str, Tuple[float, float]] = {}
    for layer_idx, layer in enumerate(layers):
        for nid in layer:
            cx = left[nid] - min_x + G.nodes[nid]["w"] / 2.0
            centers[nid] = (cx, rank_center[layer_idx])
    return centers


def _align_to_connected(
    G: nx.DiGraph,
    layer: List[str],
    left: Dict[str, float],
    nodesep: float,
) -> None:
    """Shift nodes in a layer toward the median center of connected nodes, preserving order."""
    if not layer:
        return

    ideal: Dict[str, float] = {}
    for nid in layer:
        connected = list(G.predecessors(nid)) + list(G.successors(nid))
        if not connected:
            ideal[nid] = left[nid]
            continue

        cxs = sorted(left[nb] + G.nodes[nb]["w"] / 2.0 for nb in connected)
        mid = len(cxs) // 2
        if len(cxs) % 2 == 1:
            median_cx = cxs[mid]
        else:
            median_cx = (cxs[mid - 1] + cxs[mid]) / 2.0
        ideal[nid] = median_cx - G.nodes[nid]["w"] / 2.0

    _place_with_order(G, layer, ideal, left, nodesep)


def _place_with_order(
    G: nx.DiGraph,
    layer: List[str],
    ideal: Dict[str, float],
    left: Dict[str, float],
    nodesep: float,
) -> None:
    """Place nodes at their ideal x while keeping layer order and minimum spacing."""
    placed = [ideal[nid] for nid in layer]

    for i in range(1, len(layer)):
        min_x = placed[i - 1] + G.nodes[layer[i - 1]]["w"] + nodesep
        if placed[i] < min_x:
            placed[i] = min_x

    for i in range(len(layer) - 2, -1, -1):
        max_x = placed[i + 1] - nodesep - G.nodes[layer[i]]["w"]
        if placed[i] > max_x:
            placed[i] = max_x

    for idx, nid in enumerate(layer):
        left[nid] = placed[idx]
