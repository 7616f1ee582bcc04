"""JSON import: a {nodes, links} document or a full layout snapshot."""

from __future__ import annotations

import json

from sankey_layout.errors import ParseError
from sankey_layout.ir.model import Graph, Link
from sankey_layout.parsers.csv_table import infer_nodes_from_links


def parse_graph_json(text: str) -> Graph:
    """Parse a graph document; without a 'nodes' list, nodes come from the link endpoints."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ParseError("graph JSON must be an object with 'nodes' and 'links'")
    if not isinstance(data.get("links"), list):
        raise ParseError("graph JSON: missing 'links' list")
    if "nodes" in data and not isinstance(data["nodes"], list):
        raise ParseError("graph JSON: 'nodes' must be a list")
    try:
        if "nodes" not in data:
            links = [Link.from_dict(lk) for lk in data["links"]]
            return Graph(nodes=infer_nodes_from_links(links), links=links)
        return Graph.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ParseError(f"graph JSON: invalid record: {e}") from e


class JsonGraphParser:
    """Parser for graph documents and full snapshots (layout options are ignored)."""

    def parse(self, src: str) -> Graph:
        return parse_graph_json(src)
