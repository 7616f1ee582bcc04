"""Layout snapshots: the persisted {id, x, y, width, height} shape.

A full snapshot also carries the links and can be reloaded without the
original data; a positions-only snapshot is applied onto an existing graph.
Either way the reloaded nodes are pinned, so laying them out again
reproduces the saved rectangles.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from sankey_layout.ir.model import Graph, Link, Node
from sankey_layout.layout.types import Placement


@dataclass
class SnapshotNode:
    id: str
    x: float
    y: float
    width: float
    height: float
    label: str | None = None
    color: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "x": self.x, "y": self.y, "width": self.width, "height": self.height}
        if self.label is not None:
            out["label"] = self.label
        if self.color is not None:
            out["color"] = self.color
        return out


@dataclass
class LayoutSnapshot:
    nodes: list[SnapshotNode] = field(default_factory=list)
    links: list[Link] | None = None
    link_width_scale: float | None = None

    @classmethod
    def from_layout(
        cls,
        graph: Graph,
        placements: dict[str, Placement],
        link_width_scale: float | None = None,
        include_links: bool = True,
    ) -> LayoutSnapshot:
        nodes: list[SnapshotNode] = []
        for node in graph.nodes:
            p = placements.get(node.id)
            if p is None:
                continue
            nodes.append(
                SnapshotNode(
                    id=node.id,
                    x=p.x,
                    y=p.y,
                    width=p.width,
                    height=p.height,
                    label=node.label,
                    color=node.color,
                )
            )
        links = list(graph.links) if include_links else None
        return cls(nodes=nodes, links=links, link_width_scale=link_width_scale)

    @property
    def is_full(self) -> bool:
        return self.links is not None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"nodes": [n.to_dict() for n in self.nodes]}
        if self.links is not None:
            out["links"] = [lk.to_dict() for lk in self.links]
        if self.link_width_scale is not None:
            out["options"] = {"linkWidthScale": self.link_width_scale}
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LayoutSnapshot:
        nodes = [
            SnapshotNode(
                id=str(n["id"]),
                x=float(n["x"]),
                y=float(n["y"]),
                width=float(n["width"]),
                height=float(n["height"]),
                label=n.get("label"),
                color=n.get("color"),
            )
            for n in data.get("nodes", [])
        ]
        raw_links = data.get("links")
        links = [Link.from_dict(lk) for lk in raw_links] if isinstance(raw_links, list) else None
        options = data.get("options") or {}
        scale = options.get("linkWidthScale")
        return cls(nodes=nodes, links=links, link_width_scale=float(scale) if scale is not None else None)

    def to_graph(self) -> Graph:
        """Rebuild a fully pinned graph from a full snapshot."""
        if self.links is None:
            raise ValueError("snapshot has no links; use apply_to() with the original graph")
        nodes = [
            Node(id=n.id, label=n.label, color=n.color, x=n.x, y=n.y, width=n.width, height=n.height)
            for n in self.nodes
        ]
        return Graph(nodes=nodes, links=list(self.links))

    def apply_to(self, graph: Graph) -> Graph:
        """Return a copy of ``graph`` with saved positions pinned.

        Only x and y are restored (plus label and colour when saved); sizes
        stay computed. Snapshot nodes missing from the graph are ignored.
        """
        by_id = {n.id: n for n in self.nodes}
        nodes: list[Node] = []
        for node in graph.nodes:
            snap = by_id.get(node.id)
            if snap is None:
                nodes.append(node)
                continue
            nodes.append(
                replace(
                    node,
                    x=snap.x,
                    y=snap.y,
                    label=snap.label if snap.label is not None else node.label,
                    color=snap.color if snap.color is not None else node.color,
                )
            )
        return Graph(nodes=nodes, links=list(graph.links))
