"""Tests for the full layout pipeline: completeness, geometry invariants, pins."""

from __future__ import annotations

import pytest

from sankey_layout import Graph, LayoutConfig, Link, MalformedGraphError, Node, layout_graph
from sankey_layout.layout import SankeyLayout, compute_layout, full_layout
from sankey_layout.layout.geometry import MIN_NODE_HEIGHT, NODE_WIDTH
from sankey_layout.snapshot import LayoutSnapshot
from sankey_layout.types import ColumnSpacing, PackingMode

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_graph(*links: tuple[str, str, float], extra_nodes: tuple[str, ...] = ()) -> Graph:
    ids: list[str] = []
    for src, tgt, _ in links:
        for nid in (src, tgt):
            if nid not in ids:
                ids.append(nid)
    ids.extend(n for n in extra_nodes if n not in ids)
    return Graph(nodes=[Node(id=nid) for nid in ids], links=[Link(s, t, v) for s, t, v in links])


def example_graph() -> Graph:
    nodes = [Node(nid) for nid in "ABCDEF"]
    links = [
        Link("A", "C", 10),
        Link("B", "C", 6),
        Link("A", "D", 4),
        Link("C", "E", 12),
        Link("D", "E", 4),
        Link("E", "F", 14),
    ]
    return Graph(nodes=nodes, links=links)


def example_config(**overrides) -> LayoutConfig:
    values = dict(width=960, height=540, padding=24, node_gap=18, col_gap=120, link_width_scale=2)
    values.update(overrides)
    return LayoutConfig(**values)


def fan_in_graph(count: int, value: float) -> Graph:
    return make_graph(*[(f"S{i}", "T", value) for i in range(count)])


def assert_layers_fit(result, config: LayoutConfig) -> None:
    for ids in result.layers:
        rects = sorted((result.placements[nid] for nid in ids), key=lambda p: p.y)
        for upper, lower in zip(rects, rects[1:]):
            assert lower.y >= upper.y + upper.height - 1e-9
        if rects:
            assert rects[0].y >= config.padding - 1e-9
            assert rects[-1].y + rects[-1].height <= config.height - config.padding + 1e-9


# ─── Example scenario ─────────────────────────────────────────────────────────


class TestExampleScenario:
    def test_layers(self):
        result = full_layout(example_graph(), example_config())
        assert [set(ids) for ids in result.layers] == [{"A", "B"}, {"C", "D"}, {"E"}, {"F"}]
        assert result.layer_of == {"A": 0, "B": 0, "C": 1, "D": 1, "E": 2, "F": 3}

    def test_columns_move_right(self):
        p = compute_layout(example_graph(), example_config())
        assert p["A"].x == p["B"].x
        assert p["C"].x == p["D"].x
        assert p["F"].x > p["E"].x > p["C"].x > p["A"].x
        assert p["A"].x == 24
        assert p["F"].x + p["F"].width == pytest.approx(960 - 24)

    def test_no_crossings(self):
        result = full_layout(example_graph(), example_config())
        assert result.crossings == 0
        assert result.converged

    def test_heights_follow_flow(self):
        p = compute_layout(example_graph(), example_config())
        assert p["E"].height == pytest.approx(30 * 2 * 0.8)
        assert p["C"].height == pytest.approx(28 * 2 * 0.8)
        assert p["B"].height == MIN_NODE_HEIGHT
        assert all(pl.width == NODE_WIDTH for pl in p.values())

    def test_capped_spacing(self):
        p = compute_layout(example_graph(), example_config(column_spacing=ColumnSpacing.CAPPED))
        assert p["C"].x - p["A"].x == 120
        assert p["F"].x - p["E"].x == 120


# ─── Completeness & shape ─────────────────────────────────────────────────────


class TestCompleteness:
    def test_one_entry_per_node_in_input_order(self):
        graph = make_graph(("A", "B", 3), ("B", "C", 2), extra_nodes=("X",))
        p = compute_layout(graph, example_config())
        assert list(p) == ["A", "B", "C", "X"]

    def test_unknown_link_ids_get_no_entry(self):
        graph = Graph(nodes=[Node("A"), Node("B")], links=[Link("A", "B", 1), Link("A", "ghost", 5)])
        p = compute_layout(graph, example_config())
        assert set(p) == {"A", "B"}

    def test_empty_graph(self):
        result = full_layout(Graph(), example_config())
        assert result.placements == {}
        assert result.layers == []

    def test_isolated_nodes_stack_in_first_column(self):
        graph = Graph(nodes=[Node("X"), Node("Y")])
        result = full_layout(graph, example_config())
        assert result.layer_of == {"X": 0, "Y": 0}
        x, y = result.placements["X"], result.placements["Y"]
        assert x.x == y.x == 24
        assert x.height == y.height == MIN_NODE_HEIGHT
        assert x.y + x.height <= y.y

    def test_isolated_node_next_to_flow(self):
        graph = make_graph(("A", "B", 5), extra_nodes=("X",))
        result = full_layout(graph, example_config())
        assert result.layer_of["X"] == 0
        assert_layers_fit(result, example_config())

    def test_cyclic_graph_is_laid_out(self):
        graph = make_graph(("S", "A", 4), ("A", "B", 4), ("B", "A", 1), ("B", "T", 3))
        result = full_layout(graph, example_config())
        assert set(result.placements) == {"S", "A", "B", "T"}
        assert not result.converged
        assert result.violated_edges


class TestGeometryInvariants:
    @pytest.mark.parametrize(
        "overrides",
        [
            {},
            {"padding": 0},
            {"height": 120, "node_gap": 4},
            {"width": 30, "packing": PackingMode.CENTER},
            {"column_spacing": ColumnSpacing.CAPPED},
        ],
    )
    def test_non_negative(self, overrides):
        graph = make_graph(*[(f"S{i}", "M", 20) for i in range(8)], ("M", "T", 160), extra_nodes=("X",))
        p = compute_layout(graph, example_config(**overrides))
        for pl in p.values():
            assert pl.x >= 0
            assert pl.y >= 0
            assert pl.width >= 0
            assert pl.height > 0

    @pytest.mark.parametrize("packing", list(PackingMode))
    def test_overflowing_layer_is_compressed_to_fit(self, packing):
        config = example_config(packing=packing)
        result = full_layout(fan_in_graph(10, 30), config)
        sources = [result.placements[f"S{i}"] for i in range(10)]
        assert all(pl.height < 30 * 2 * 0.8 for pl in sources)
        assert_layers_fit(result, config)

    def test_fitting_layers_keep_full_height(self):
        config = example_config()
        result = full_layout(fan_in_graph(4, 10), config)
        assert result.placements["T"].height == pytest.approx(40 * 2 * 0.8)
        assert_layers_fit(result, config)


# ─── Pins ─────────────────────────────────────────────────────────────────────


class TestPins:
    def test_pinned_position_wins(self):
        graph = example_graph()
        graph.nodes[4] = Node("E", x=500.0, y=10.0)
        p = compute_layout(graph, example_config())
        assert p["E"].x == 500
        assert p["E"].y == 10
        assert p["E"].height == pytest.approx(30 * 2 * 0.8)

    def test_pinned_size_wins(self):
        graph = Graph(nodes=[Node("X", width=3.0, height=400.0)])
        p = compute_layout(graph, example_config())
        assert p["X"].width == 3.0
        assert p["X"].height == 400.0
        assert p["X"].x == 24

    def test_pin_does_not_depend_on_config(self):
        graph = Graph(nodes=[Node("X", x=500.0, y=10.0)], links=[])
        for config in (example_config(), example_config(width=100, height=50, padding=0)):
            assert compute_layout(graph, config)["X"].x == 500.0


# ─── Purity ───────────────────────────────────────────────────────────────────


class TestPurity:
    def test_deterministic(self):
        first = compute_layout(example_graph(), example_config())
        second = compute_layout(example_graph(), example_config())
        assert first == second

    def test_caller_graph_untouched(self):
        graph = example_graph()
        before = graph.to_dict()
        compute_layout(graph, example_config(fixed_layers={"F": 1}, pin_right_ids=["D"]))
        assert graph.to_dict() == before

    def test_output_not_shared_between_calls(self):
        engine = SankeyLayout()
        first = engine.layout(example_graph(), example_config())
        first.placements["A"].x = 999
        second = engine.layout(example_graph(), example_config())
        assert second.placements["A"].x == 24

    def test_snapshot_reload_is_idempotent(self):
        graph = example_graph()
        placements = compute_layout(graph, example_config())
        reloaded = LayoutSnapshot.from_layout(graph, placements).to_graph()
        again = compute_layout(reloaded, example_config(width=300, height=900))
        assert again == placements


class TestErrors:
    def test_duplicate_ids(self):
        graph = Graph(nodes=[Node("A"), Node("A")])
        with pytest.raises(MalformedGraphError, match="duplicate node id 'A'"):
            compute_layout(graph, example_config())

    def test_negative_value(self):
        with pytest.raises(MalformedGraphError):
            compute_layout(make_graph(("A", "B", -3)), example_config())


class TestPublicApi:
    def test_layout_graph_defaults(self):
        assert layout_graph(example_graph()) == compute_layout(example_graph(), LayoutConfig.default())

    def test_default_config_values(self):
        config = LayoutConfig.default()
        assert (config.width, config.height, config.padding) == (960.0, 540.0, 24.0)
        assert (config.node_gap, config.col_gap, config.link_width_scale) == (18.0, 120.0, 2.0)
        assert config.fixed_layers == {}
        assert config.pin_right_ids == []
