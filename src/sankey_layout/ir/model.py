"""Caller-owned input records: nodes, links and the graph holding them.

Records are frozen. Pinning a node means building a new record with
``dataclasses.replace``; the layout engine only ever reads them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

_PIN_FIELDS: tuple[str, ...] = ("x", "y", "width", "height")


@dataclass(frozen=True)
class Node:
    id: str
    label: str | None = None
    color: str | None = None
    x: float | None = None
    y: float | None = None
    width: float | None = None
    height: float | None = None

    def pins(self) -> dict[str, float]:
        """Return the explicitly set geometry fields of this node."""
        return {name: getattr(self, name) for name in _PIN_FIELDS if getattr(self, name) is not None}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Node:
        return cls(
            id=str(data["id"]),
            label=data.get("label"),
            color=data.get("color"),
            x=_optional_float(data.get("x")),
            y=_optional_float(data.get("y")),
            width=_optional_float(data.get("width")),
            height=_optional_float(data.get("height")),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id}
        for name in ("label", "color", *_PIN_FIELDS):
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        return out


@dataclass(frozen=True)
class Link:
    source: str
    target: str
    value: float
    color: str | None = None
    id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Link:
        return cls(
            source=str(data["source"]),
            target=str(data["target"]),
            value=float(data["value"]),
            color=data.get("color"),
            id=data.get("id"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"source": self.source, "target": self.target, "value": self.value}
        if self.color is not None:
            out["color"] = self.color
        if self.id is not None:
            out["id"] = self.id
        return out


@dataclass
class Graph:
    """A flow graph: node order defines node indices downstream."""

    nodes: list[Node] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Graph:
        return cls(
            nodes=[Node.from_dict(n) for n in data.get("nodes", [])],
            links=[Link.from_dict(lk) for lk in data.get("links", [])],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [lk.to_dict() for lk in self.links],
        }

    def node_ids(self) -> list[str]:
        return [n.id for n in self.nodes]


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)
