"""Tests for the rank-based layout on a networkx workspace."""

import networkx as nx
import pytest

import layout.ranked as ranked
from layout import new_workspace, run_layout


def _workspace(edges, nodes=(), rankdir="TB"):
    G = new_workspace(rankdir=rankdir, nodesep=50, ranksep=50)
    for n in nodes:
        G.add_node(n, width=172, height=36)
    for u, v in edges:
        G.add_node(u, width=172, height=36)
        G.add_node(v, width=172, height=36)
        G.add_edge(u, v)
    return G


def _xy(G, n):
    return G.nodes[n]["x"], G.nodes[n]["y"]


class TestRunLayout:
    def test_new_workspace_is_empty_and_fresh(self):
        first = new_workspace()
        first.add_node("a")
        second = new_workspace()
        assert second.number_of_nodes() == 0
        assert first is not second
        assert second.graph["rankdir"] == "TB"

    def test_empty_workspace(self):
        G = new_workspace()
        run_layout(G)
        assert G.number_of_nodes() == 0

    def test_single_node(self):
        G = _workspace([], nodes=["a"])
        run_layout(G)
        assert _xy(G, "a") == (86, 18)

    def test_chain_top_to_bottom(self):
        G = _workspace([("a", "b"), ("b", "c")])
        run_layout(G)
        assert _xy(G, "a") == (86, 18)
        assert _xy(G, "b") == (86, 104)
        assert _xy(G, "c") == (86, 190)

    def test_star_top_to_bottom(self):
        G = _workspace([("hub", "b"), ("hub", "c")])
        run_layout(G)
        assert _xy(G, "b") == (86, 104)
        assert _xy(G, "c") == (308, 104)
        assert _xy(G, "hub") == (197, 18)

    def test_star_left_to_right(self):
        G = _workspace([("hub", "b"), ("hub", "c")], rankdir="LR")
        run_layout(G)
        assert _xy(G, "hub") == (86, 61)
        assert _xy(G, "b") == (308, 18)
        assert _xy(G, "c") == (308, 104)

    def test_disconnected_nodes_share_a_rank(self):
        G = _workspace([], nodes=["a", "b"])
        run_layout(G)
        assert _xy(G, "a") == (86, 18)
        assert _xy(G, "b") == (308, 18)

    def test_long_edge_leaves_no_dummies(self):
        G = _workspace([("a", "b"), ("b", "c"), ("a", "c")])
        run_layout(G)
        assert set(G.nodes()) == {"a", "b", "c"}
        assert G.number_of_edges() == 3
        assert G.nodes["c"]["y"] == 190

    def test_cycle_still_positions_every_node(self):
        G = _workspace([("a", "b"), ("b", "c"), ("c", "a")])
        run_layout(G)
        assert G.has_edge("c", "a")
        positions = {_xy(G, n) for n in G.nodes()}
        assert len(positions) == 3

    def test_unknown_rankdir(self):
        G = _workspace([], nodes=["a"], rankdir="BT")
        with pytest.raises(ValueError, match="rankdir"):
            run_layout(G)

    def test_crossings_removed(self):
        # a->d and b->c would cross if rank 1 kept insertion order [c, d]
        G = new_workspace()
        for n in ("a", "b", "c", "d"):
            G.add_node(n, width=172, height=36)
        G.add_edge("a", "d")
        G.add_edge("b", "c")
        run_layout(G)
        assert G.nodes["a"]["x"] < G.nodes["b"]["x"]
        assert G.nodes["d"]["x"] < G.nodes["c"]["x"]


class TestCrossingReduction:
    def _graph(self, edges):
        G = nx.DiGraph()
        G.add_edges_from(edges)
        return G

    def test_counts_swapped_pairs(self):
        G = self._graph([("a", "d"), ("b", "c")])
        assert ranked._crossings_between(G, ["a", "b"], ["c", "d"]) == 1
        assert ranked._crossings_between(G, ["a", "b"], ["d", "c"]) == 0

    def test_barycenter_keeps_free_nodes_in_place(self):
        G = self._graph([("a", "z"), ("b", "x")])
        G.add_node("free")
        ordered = ranked._order_by_barycenter(G, ["a", "b"], ["x", "free", "z"], use_preds=True)
        assert ordered == ["z", "free", "x"]

    def test_reduce_keeps_best_ordering(self):
        G = self._graph([("a", "d"), ("b", "c")])
        layers = [["a", "b"], ["c", "d"]]
        ranked._reduce_crossings(G, layers)
        assert ranked._crossings(G, layers) == 0
        assert layers[0] == ["a", "b"]
