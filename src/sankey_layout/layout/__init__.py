"""Layout engine public API."""

from __future__ import annotations

from sankey_layout.layout.engine import SankeyLayout, compute_layout, full_layout
from sankey_layout.layout.geometry import (
    HEIGHT_FACTOR,
    MIN_COLUMN_STEP,
    MIN_NODE_HEIGHT,
    MIN_SCALE,
    NODE_WIDTH,
    LayerPacking,
    apply_pins,
    assign_coordinates,
    column_step,
    node_height,
    pack_layer,
    place_layer,
)
from sankey_layout.layout.layering import LayerAssignment, compact, longest_path_layers, relaxation_limit
from sankey_layout.layout.ordering import ORDER_SWEEPS, barycenter, count_crossings, minimise_crossings
from sankey_layout.layout.types import LayoutContext, LayoutResult, Placement

__all__ = [
    "HEIGHT_FACTOR",
    "MIN_COLUMN_STEP",
    "MIN_NODE_HEIGHT",
    "MIN_SCALE",
    "NODE_WIDTH",
    "ORDER_SWEEPS",
    "LayerAssignment",
    "LayerPacking",
    "LayoutContext",
    "LayoutResult",
    "Placement",
    "SankeyLayout",
    "apply_pins",
    "assign_coordinates",
    "barycenter",
    "column_step",
    "compact",
    "compute_layout",
    "count_crossings",
    "full_layout",
    "longest_path_layers",
    "minimise_crossings",
    "node_height",
    "pack_layer",
    "place_layer",
    "relaxation_limit",
]
