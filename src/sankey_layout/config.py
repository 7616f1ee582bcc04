"""Centralized configuration for sankey-layout."""

from __future__ import annotations

from dataclasses import dataclass, field

from sankey_layout.types import ColumnSpacing, PackingMode


@dataclass
class LayoutConfig:
    """Configuration for the layout pipeline.

    The six geometric fields are required: the engine never guesses drawing
    dimensions. Use ``LayoutConfig.default()`` for the stock 960x540 canvas.

    ``compact_layers`` removes every empty layer, including gaps left on
    purpose between ``fixed_layers`` values: ``{"B": 3.7}`` on a chain
    A -> B -> C puts B in layer 1. Turn it off to keep fixed layers verbatim.
    """

    width: float
    height: float
    padding: float
    node_gap: float
    col_gap: float
    link_width_scale: float
    fixed_layers: dict[str, float] = field(default_factory=dict)
    pin_right_ids: list[str] = field(default_factory=list)
    column_spacing: ColumnSpacing = ColumnSpacing.EVEN
    packing: PackingMode = PackingMode.SPREAD
    compact_layers: bool = True
    strict: bool = False

    @classmethod
    def default(cls, **overrides) -> LayoutConfig:
        values: dict = {
            "width": 960.0,
            "height": 540.0,
            "padding": 24.0,
            "node_gap": 18.0,
            "col_gap": 120.0,
            "link_width_scale": 2.0,
        }
        values.update(overrides)
        return cls(**values)
