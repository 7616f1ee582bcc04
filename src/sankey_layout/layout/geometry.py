"""Coordinate assignment: columns, node heights and vertical packing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from sankey_layout.config import LayoutConfig
from sankey_layout.ir.graph import FlowGraph
from sankey_layout.layout.types import LayoutContext, Placement
from sankey_layout.types import ColumnSpacing, PackingMode

logger = logging.getLogger(__name__)

# ─── Geometry constants ──────────────────────────────────────────────────────

NODE_WIDTH: float = 12.0
MIN_NODE_HEIGHT: float = 18.0
HEIGHT_FACTOR: float = 0.8
MIN_SCALE: float = 0.35
MIN_COLUMN_STEP: float = 80.0


# ─── Columns ─────────────────────────────────────────────────────────────────


def column_step(layer_count: int, config: LayoutConfig) -> float:
    """Horizontal distance between consecutive layer columns."""
    if layer_count <= 1:
        return 0.0
    inner_w = max(1.0, config.width - 2 * config.padding)
    step = (inner_w - NODE_WIDTH) / (layer_count - 1)
    if config.column_spacing is ColumnSpacing.CAPPED:
        step = min(config.col_gap, max(MIN_COLUMN_STEP, step))
    return max(0.0, step)


def column_x(layer_idx: int, ctx: LayoutContext) -> float:
    return ctx.config.padding + layer_idx * ctx.column_step


# ─── Heights and packing ─────────────────────────────────────────────────────


def node_height(graph: FlowGraph, node_id: str, config: LayoutConfig) -> float:
    """Unscaled height: total flow through the node, never below the minimum."""
    return max(MIN_NODE_HEIGHT, graph.total_flow(node_id) * config.link_width_scale * HEIGHT_FACTOR)


@dataclass
class LayerPacking:
    top: float
    gap: float
    scale: float


def pack_layer(heights: list[float], config: LayoutConfig) -> LayerPacking:
    """Fit a stack of node heights into the drawing's inner height.

    A stack that fits keeps its heights and is centred; SPREAD also hands
    the leftover space out evenly as extra gap and margin. A stack that
    overflows is scaled down uniformly, never below MIN_SCALE.
    """
    avail = max(0.0, config.height - 2 * config.padding)
    gaps = max(0, len(heights) - 1)
    total = sum(heights)
    min_gaps = gaps * config.node_gap

    if total + min_gaps <= avail:
        leftover = avail - (total + min_gaps)
        if config.packing is PackingMode.SPREAD:
            extra = leftover / (gaps + 2) if gaps > 0 else leftover / 2
            return LayerPacking(top=config.padding + extra, gap=config.node_gap + extra, scale=1.0)
        return LayerPacking(top=config.padding + leftover / 2, gap=config.node_gap, scale=1.0)

    scale = (avail - min_gaps) / max(1.0, total)
    scale = max(MIN_SCALE, min(1.0, scale))
    return LayerPacking(top=config.padding, gap=config.node_gap, scale=scale)


def place_layer(
    ids: list[str],
    layer_idx: int,
    ctx: LayoutContext,
    out: dict[str, Placement] | None = None,
) -> None:
    """Stack one layer top to bottom, refreshing ``ctx.centers``.

    When ``out`` is given the rectangles are written to it as well.
    """
    x = column_x(layer_idx, ctx)
    heights = [node_height(ctx.graph, nid, ctx.config) for nid in ids]
    packing = pack_layer(heights, ctx.config)
    logger.debug(
        "layer %d: %d node(s) top=%g gap=%g scale=%g", layer_idx, len(ids), packing.top, packing.gap, packing.scale
    )

    y = packing.top
    for node_id, base in zip(ids, heights):
        h = base * packing.scale
        ctx.centers[node_id] = y + h / 2
        if out is not None:
            out[node_id] = Placement(x=x, y=y, width=NODE_WIDTH, height=h)
        y += h + packing.gap


def assign_coordinates(ordering: list[list[str]], ctx: LayoutContext) -> dict[str, Placement]:
    """Final geometry pass over every layer."""
    placements: dict[str, Placement] = {}
    for layer_idx, ids in enumerate(ordering):
        place_layer(ids, layer_idx, ctx, placements)
    return placements


# ─── Pins ────────────────────────────────────────────────────────────────────


def apply_pins(graph: FlowGraph, placements: dict[str, Placement]) -> dict[str, Placement]:
    """Overwrite computed fields with the explicit ones from node records."""
    pinned: dict[str, Placement] = {}
    for node in graph.nodes:
        placement = placements.get(node.id)
        if placement is None:
            continue
        pins = node.pins()
        pinned[node.id] = replace(placement, **pins) if pins else placement
    return pinned
