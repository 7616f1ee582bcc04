"""Tests for barycenter crossing reduction."""

from __future__ import annotations

import pytest

from sankey_layout.config import LayoutConfig
from sankey_layout.ir import FlowGraph, Graph, Link, Node
from sankey_layout.layout.geometry import column_step
from sankey_layout.layout.layering import LayerAssignment
from sankey_layout.layout.ordering import barycenter, count_crossings, minimise_crossings
from sankey_layout.layout.types import LayoutContext

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_flow(nodes: list[str], links: list[tuple[str, str, float]]) -> FlowGraph:
    return FlowGraph.from_graph(Graph(nodes=[Node(n) for n in nodes], links=[Link(s, t, v) for s, t, v in links]))


def layered(flow: FlowGraph) -> tuple[list[list[str]], LayoutContext]:
    config = LayoutConfig.default()
    la = LayerAssignment.assign(flow, config)
    ctx = LayoutContext(graph=flow, config=config, column_step=column_step(la.layer_count, config))
    return la.buckets(), ctx


# ─── Barycenter ───────────────────────────────────────────────────────────────


class TestBarycenter:
    def test_weighted_mean(self):
        centers = {"a": 0.0, "b": 100.0, "n": 50.0}
        assert barycenter("n", [("a", 3.0), ("b", 1.0)], centers) == pytest.approx(25.0)

    def test_no_neighbours_keeps_own_centre(self):
        assert barycenter("n", [], {"n": 42.0}) == 42.0

    def test_zero_weight_keeps_own_centre(self):
        assert barycenter("n", [("a", 0.0)], {"a": 10.0, "n": 42.0}) == 42.0

    def test_unplaced_neighbour_ignored(self):
        assert barycenter("n", [("a", 1.0), ("ghost", 5.0)], {"a": 10.0, "n": 42.0}) == 10.0

    def test_unplaced_node_defaults_to_zero(self):
        assert barycenter("n", [], {}) == 0.0


# ─── Crossing count ───────────────────────────────────────────────────────────


class TestCountCrossings:
    def test_single_crossing(self):
        flow = make_flow(["A", "B", "C", "D"], [("A", "D", 1), ("B", "C", 1)])
        assert count_crossings([["A", "B"], ["C", "D"]], flow) == 1
        assert count_crossings([["A", "B"], ["D", "C"]], flow) == 0

    def test_shared_endpoint_is_not_a_crossing(self):
        flow = make_flow(["A", "B", "C"], [("A", "C", 1), ("B", "C", 1)])
        assert count_crossings([["A", "B"], ["C"]], flow) == 0

    def test_links_skipping_layers_are_ignored(self):
        flow = make_flow(["A", "B", "C"], [("A", "C", 1)])
        assert count_crossings([["A"], ["B"], ["C"]], flow) == 0


# ─── Sweeps ───────────────────────────────────────────────────────────────────


class TestMinimiseCrossings:
    def test_resolves_simple_crossing(self):
        flow = make_flow(["A", "B", "C", "D"], [("A", "D", 5), ("B", "C", 5)])
        buckets, ctx = layered(flow)
        assert buckets == [["A", "B"], ["C", "D"]]
        ordering = minimise_crossings(buckets, ctx)
        assert ordering == [["A", "B"], ["D", "C"]]
        assert count_crossings(ordering, flow) == 0

    def test_input_lists_not_mutated(self):
        flow = make_flow(["A", "B", "C", "D"], [("A", "D", 5), ("B", "C", 5)])
        buckets, ctx = layered(flow)
        minimise_crossings(buckets, ctx)
        assert buckets == [["A", "B"], ["C", "D"]]

    def test_heavier_link_pulls_harder(self):
        """C follows A's heavy flow, D follows B, whatever the input order."""
        flow = make_flow(
            ["A", "B", "D", "C"],
            [("A", "C", 9), ("B", "C", 1), ("A", "D", 1), ("B", "D", 9)],
        )
        buckets, ctx = layered(flow)
        ordering = minimise_crossings(buckets, ctx)
        assert ordering[1] == ["C", "D"]

    def test_every_node_has_a_centre(self):
        flow = make_flow(["A", "B", "C", "X"], [("A", "B", 2), ("B", "C", 2)])
        buckets, ctx = layered(flow)
        minimise_crossings(buckets, ctx)
        assert set(ctx.centers) == {"A", "B", "C", "X"}

    def test_zero_sweeps_keeps_order(self):
        flow = make_flow(["A", "B", "C", "D"], [("A", "D", 5), ("B", "C", 5)])
        buckets, ctx = layered(flow)
        assert minimise_crossings(buckets, ctx, sweeps=0) == buckets

    def test_deterministic(self):
        links = [("A", "E", 3), ("B", "D", 4), ("C", "D", 1), ("A", "F", 2), ("C", "E", 5), ("B", "F", 1)]
        flow = make_flow(["A", "B", "C", "D", "E", "F"], links)
        first = minimise_crossings(*layered(flow))
        second = minimise_crossings(*layered(flow))
        assert first == second
