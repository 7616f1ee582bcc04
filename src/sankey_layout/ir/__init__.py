"""Intermediate representation: input records and the indexed FlowGraph."""

from sankey_layout.ir.graph import FlowGraph
from sankey_layout.ir.model import Graph, Link, Node

__all__ = [
    "FlowGraph",
    "Graph",
    "Link",
    "Node",
]
