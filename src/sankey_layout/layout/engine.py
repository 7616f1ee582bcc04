"""Sankey layout pipeline.

Phases:
  1. Graph indexing (FlowGraph)
  2. Layer assignment
  3. Crossing reduction (barycenter sweeps, interleaved with geometry)
  4. Coordinate assignment
  5. Pin overrides
"""

from __future__ import annotations

from sankey_layout.config import LayoutConfig
from sankey_layout.ir.graph import FlowGraph
from sankey_layout.ir.model import Graph
from sankey_layout.layout.geometry import apply_pins, assign_coordinates, column_step
from sankey_layout.layout.layering import LayerAssignment
from sankey_layout.layout.ordering import count_crossings, minimise_crossings
from sankey_layout.layout.types import LayoutContext, LayoutResult, Placement


class SankeyLayout:
    """Layered Sankey layout engine."""

    def layout(self, graph: Graph, config: LayoutConfig) -> LayoutResult:
        flow = FlowGraph.from_graph(graph)
        la = LayerAssignment.assign(flow, config)
        ctx = LayoutContext(graph=flow, config=config, column_step=column_step(la.layer_count, config))

        ordering = minimise_crossings(la.buckets(), ctx)
        computed = assign_coordinates(ordering, ctx)
        pinned = apply_pins(flow, computed)

        return LayoutResult(
            placements={nid: pinned[nid] for nid in flow.node_ids},
            layers=ordering,
            layer_of=dict(la.layers),
            crossings=count_crossings(ordering, flow),
            converged=la.converged,
            violated_edges=list(la.violated_edges),
            cycle=list(la.cycle),
        )


def full_layout(graph: Graph, config: LayoutConfig) -> LayoutResult:
    """Run the full layout pipeline."""
    return SankeyLayout().layout(graph, config)


def compute_layout(graph: Graph, config: LayoutConfig) -> dict[str, Placement]:
    """Run the pipeline and return only the node placements."""
    return full_layout(graph, config).placements
