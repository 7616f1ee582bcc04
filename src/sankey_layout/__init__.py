"""sankey-layout: layered layout of weighted flow graphs for Sankey diagrams."""

from sankey_layout.config import LayoutConfig
from sankey_layout.errors import MalformedGraphError, ParseError, SankeyLayoutError
from sankey_layout.ir.model import Graph, Link, Node
from sankey_layout.layout import LayoutResult, Placement, SankeyLayout, compute_layout, full_layout
from sankey_layout.snapshot import LayoutSnapshot
from sankey_layout.types import ColumnSpacing, PackingMode

__all__ = [
    "ColumnSpacing",
    "Graph",
    "LayoutConfig",
    "LayoutResult",
    "LayoutSnapshot",
    "Link",
    "MalformedGraphError",
    "Node",
    "PackingMode",
    "ParseError",
    "Placement",
    "SankeyLayout",
    "SankeyLayoutError",
    "compute_layout",
    "full_layout",
    "layout_graph",
]


def layout_graph(graph: Graph, config: LayoutConfig | None = None) -> dict[str, Placement]:
    """Lay out a graph and return one placement per node id.

    Args:
        graph: Nodes and links to lay out. Node x/y/width/height, when set,
            are copied verbatim into the result.
        config: Drawing configuration; None uses ``LayoutConfig.default()``.

    Returns:
        A new dict mapping every node id, in input order, to its Placement.

    Raises:
        MalformedGraphError: If node ids repeat or a link value is negative or not finite.
    """
    return compute_layout(graph, config or LayoutConfig.default())
