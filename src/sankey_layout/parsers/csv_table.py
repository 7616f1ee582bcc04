"""CSV import for link tables and optional node tables.

links.csv needs ``source``, ``target`` and ``value`` columns and may carry
``color``. nodes.csv needs ``id`` and may carry ``label``, ``color``, ``x``,
``y``, ``width`` and ``height``. Header names are case-insensitive; rows
missing required cells are skipped.
"""

from __future__ import annotations

import csv
import io
import math

from sankey_layout.errors import ParseError
from sankey_layout.ir.model import Graph, Link, Node

_LINK_COLUMNS: tuple[str, ...] = ("source", "target", "value")
_NODE_GEOMETRY: tuple[str, ...] = ("x", "y", "width", "height")


def _read_rows(text: str, name: str) -> tuple[dict[str, int], list[list[str]]]:
    rows = [row for row in csv.reader(io.StringIO(text)) if any(cell.strip() for cell in row)]
    if not rows:
        raise ParseError(f"{name} is empty")
    header = {cell.strip().lower(): i for i, cell in enumerate(rows[0])}
    return header, rows[1:]


def _cell(row: list[str], header: dict[str, int], column: str) -> str:
    i = header.get(column)
    if i is None or i >= len(row):
        return ""
    return row[i].strip()


def _to_number(text: str) -> float | None:
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_links_csv(text: str) -> list[Link]:
    header, rows = _read_rows(text, "links.csv")
    for column in _LINK_COLUMNS:
        if column not in header:
            raise ParseError(f'links.csv: missing column "{column}"')

    links: list[Link] = []
    for row in rows:
        source = _cell(row, header, "source")
        target = _cell(row, header, "target")
        value = _to_number(_cell(row, header, "value"))
        if not source or not target or value is None:
            continue
        links.append(Link(source=source, target=target, value=value, color=_cell(row, header, "color") or None))
    if not links:
        raise ParseError("links.csv: no valid rows")
    return links


def parse_nodes_csv(text: str) -> list[Node]:
    header, rows = _read_rows(text, "nodes.csv")
    if "id" not in header:
        raise ParseError('nodes.csv: missing column "id"')

    nodes: list[Node] = []
    for row in rows:
        node_id = _cell(row, header, "id")
        if not node_id:
            continue
        geometry = {name: _to_number(_cell(row, header, name)) for name in _NODE_GEOMETRY}
        nodes.append(
            Node(
                id=node_id,
                label=_cell(row, header, "label") or None,
                color=_cell(row, header, "color") or None,
                **geometry,
            )
        )
    if not nodes:
        raise ParseError("nodes.csv: no valid rows")
    return nodes


def infer_nodes_from_links(links: list[Link]) -> list[Node]:
    """One node per endpoint, in first-seen order."""
    seen: dict[str, None] = {}
    for link in links:
        seen.setdefault(link.source)
        seen.setdefault(link.target)
    return [Node(id=nid, label=nid) for nid in seen]


class LinksCsvParser:
    """Parser for links.csv; nodes are inferred from the link endpoints."""

    def parse(self, src: str) -> Graph:
        links = parse_links_csv(src)
        return Graph(nodes=infer_nodes_from_links(links), links=links)
