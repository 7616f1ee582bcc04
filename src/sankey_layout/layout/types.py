"""Layout types shared across the layout phases and their callers."""

from __future__ import annotations

from dataclasses import dataclass, field

from sankey_layout.config import LayoutConfig
from sankey_layout.ir.graph import FlowGraph


@dataclass
class Placement:
    """A node rectangle in pixel coordinates."""

    x: float
    y: float
    width: float
    height: float

    def center_y(self) -> float:
        return self.y + self.height / 2

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass
class LayoutContext:
    """Per-invocation state shared by ordering and geometry.

    ``centers`` holds the current vertical centre of every placed node; the
    barycenter sweeps read it and every geometry pass rewrites it.
    """

    graph: FlowGraph
    config: LayoutConfig
    column_step: float
    centers: dict[str, float] = field(default_factory=dict)


@dataclass
class LayoutResult:
    """Self-contained layout output: everything renderers need."""

    placements: dict[str, Placement]
    layers: list[list[str]]
    layer_of: dict[str, int]
    crossings: int = 0
    converged: bool = True
    violated_edges: list[tuple[str, str]] = field(default_factory=list)
    cycle: list[tuple[str, str]] = field(default_factory=list)
