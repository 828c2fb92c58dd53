"""Tests for hand-placed palette nodes."""

import pytest

from builder import PALETTE_NODE_TYPES, append_node, build_graph, create_palette_node
from layout import layout_graph
from shared.models import Position


def test_palette_node_shape():
    node = create_palette_node("input", Position(x=40, y=75), now_ms=1700000000000)

    assert node.id == "input-1700000000000"
    assert node.label == "input node"
    assert node.type == "input"
    assert (node.position.x, node.position.y) == (40, 75)
    assert node.source_side is None and node.target_side is None


def test_palette_node_uses_clock():
    node = create_palette_node("default", Position())
    stamp = node.id.split("-", 1)[1]
    assert stamp.isdigit() and len(stamp) >= 13


def test_unknown_type_rejected():
    with pytest.raises(ValueError, match="palette node type"):
        create_palette_node("group", Position())


def test_known_types():
    assert PALETTE_NODE_TYPES == ("input", "default", "output")


def test_append_keeps_layout(star_records):
    result = layout_graph(*build_graph(star_records))
    before = [(n.id, n.position.x, n.position.y) for n in result.nodes]

    dropped = create_palette_node("output", Position(x=500, y=500), now_ms=1)
    nodes = append_node(result.nodes, dropped)

    assert [(n.id, n.position.x, n.position.y) for n in nodes[:-1]] == before
    assert nodes[-1] is dropped
    assert len(result.nodes) == 3


def test_append_duplicate_id_rejected():
    node = create_palette_node("input", Position(), now_ms=5)
    with pytest.raises(ValueError, match="already on canvas"):
        append_node([node], create_palette_node("input", Position(), now_ms=5))
