"""Crossing reduction by weighted barycenter sweeps.

Each sweep walks the layers left to right, sorting every layer by the
flow-weighted mean centre of its predecessors, then right to left by
successors. After each sort the layer is re-stacked so later layers see
fresh centres.
"""

from __future__ import annotations

from sankey_layout.ir.graph import FlowGraph
from sankey_layout.layout.geometry import place_layer
from sankey_layout.layout.types import LayoutContext

ORDER_SWEEPS: int = 5


def barycenter(node_id: str, neighbors: list[tuple[str, float]], centers: dict[str, float]) -> float:
    """Weighted mean centre of ``neighbors``; the node's own centre without any."""
    weight = 0.0
    total = 0.0
    for nb, w in neighbors:
        c = centers.get(nb)
        if c is None:
            continue
        weight += w
        total += w * c
    if weight > 0:
        return total / weight
    return centers.get(node_id, 0.0)


def seed_centers(ordering: list[list[str]], ctx: LayoutContext) -> None:
    for layer_idx, ids in enumerate(ordering):
        place_layer(ids, layer_idx, ctx)


def minimise_crossings(
    ordering: list[list[str]],
    ctx: LayoutContext,
    sweeps: int = ORDER_SWEEPS,
) -> list[list[str]]:
    """Return a reordered copy of ``ordering``."""
    layers = [list(ids) for ids in ordering]
    seed_centers(layers, ctx)
    graph = ctx.graph

    for _sweep in range(sweeps):
        for layer_idx in range(1, len(layers)):
            layers[layer_idx].sort(key=lambda nid: barycenter(nid, graph.predecessors(nid), ctx.centers))
            place_layer(layers[layer_idx], layer_idx, ctx)

        for layer_idx in range(len(layers) - 2, -1, -1):
            layers[layer_idx].sort(key=lambda nid: barycenter(nid, graph.successors(nid), ctx.centers))
            place_layer(layers[layer_idx], layer_idx, ctx)

    return layers


def count_crossings(ordering: list[list[str]], graph: FlowGraph) -> int:
    """Count pairs of links between adjacent layers that cross."""
    total = 0
    for l_idx in range(len(ordering) - 1):
        tgt_pos: dict[str, int] = {nid: i for i, nid in enumerate(ordering[l_idx + 1])}
        edges: list[tuple[int, int]] = []
        for sp, src_id in enumerate(ordering[l_idx]):
            for nb, _w in graph.successors(src_id):
                if nb in tgt_pos:
                    edges.append((sp, tgt_pos[nb]))
        for i in range(len(edges)):
            for j in range(i + 1, len(edges)):
                ei, ej = edges[i], edges[j]
                if (ei[0] < ej[0] and ei[1] > ej[1]) or (ei[0] > ej[0] and ei[1] < ej[1]):
                    total += 1
    return total
