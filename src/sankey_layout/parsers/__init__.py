"""Parser registry: detect the input format and dispatch to the right parser."""

from __future__ import annotations

from pathlib import Path

from sankey_layout.errors import ParseError
from sankey_layout.ir.model import Graph
from sankey_layout.parsers.base import Parser
from sankey_layout.parsers.csv_table import LinksCsvParser, infer_nodes_from_links, parse_links_csv, parse_nodes_csv
from sankey_layout.parsers.json_graph import JsonGraphParser, parse_graph_json

__all__ = [
    "JsonGraphParser",
    "LinksCsvParser",
    "detect_format",
    "infer_nodes_from_links",
    "load_graph",
    "parse",
    "parse_graph_json",
    "parse_links_csv",
    "parse_nodes_csv",
]


def detect_format(path: str | Path) -> str:
    """Detect the input format from the file suffix. Returns 'csv' or 'json'."""
    suffix = Path(path).suffix.lower()
    if suffix in (".csv", ".txt"):
        return "csv"
    if suffix == ".json":
        return "json"
    raise ParseError(f"Unsupported input format: {suffix or path!s}")


_PARSERS: dict[str, type[Parser]] = {
    "csv": LinksCsvParser,
    "json": JsonGraphParser,
}


def parse(src: str, fmt: str) -> Graph:
    parser_cls = _PARSERS.get(fmt)
    if parser_cls is None:
        raise ParseError(f"Unsupported input format: {fmt}")
    return parser_cls().parse(src)


def load_graph(path: str | Path, nodes_path: str | Path | None = None) -> Graph:
    """Read a graph file, optionally replacing its nodes with a nodes.csv table."""
    graph = parse(Path(path).read_text(encoding="utf-8"), detect_format(path))
    if nodes_path is not None:
        graph = Graph(nodes=parse_nodes_csv(Path(nodes_path).read_text(encoding="utf-8")), links=graph.links)
    return graph
