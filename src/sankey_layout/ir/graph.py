"""Graph IR: indexes a flow Graph for layout and analysis.

This module owns the canonical graph structure used by every layout phase.
Nodes keep their input order as indices; link weights are aggregated into
per-node inflow/outflow sums and weighted adjacency lists. A networkx
MultiDiGraph mirrors the resolved links for cycle detection (parallel
links between the same pair of nodes are kept apart).
"""

from __future__ import annotations

import logging
import math

import networkx as nx

from sankey_layout.errors import MalformedGraphError
from sankey_layout.ir.model import Graph, Link, Node

logger = logging.getLogger(__name__)


class FlowGraph:
    """The indexed flow graph built from a caller-supplied Graph.

    Wraps a networkx MultiDiGraph and exposes the flow sums and weighted
    adjacency the layering, ordering and geometry phases read.
    """

    def __init__(
        self,
        digraph: nx.MultiDiGraph,
        nodes: list[Node],
        links: list[tuple[int, int, float]],
        skipped_links: list[Link],
    ) -> None:
        self.digraph = digraph
        self.nodes = nodes
        self.node_ids: list[str] = [n.id for n in nodes]
        self.index: dict[str, int] = {nid: i for i, nid in enumerate(self.node_ids)}
        self.links = links
        self.skipped_links = skipped_links

        n = len(nodes)
        self.in_sum: list[float] = [0.0] * n
        self.out_sum: list[float] = [0.0] * n
        self._preds: list[list[tuple[str, float]]] = [[] for _ in range(n)]
        self._succs: list[list[tuple[str, float]]] = [[] for _ in range(n)]
        for src, tgt, value in links:
            self.out_sum[src] += value
            self.in_sum[tgt] += value
            self._preds[tgt].append((self.node_ids[src], value))
            self._succs[src].append((self.node_ids[tgt], value))

    @classmethod
    def from_graph(cls, graph: Graph) -> FlowGraph:
        """Build a FlowGraph, rejecting duplicate ids and invalid link values."""
        problems: list[str] = []
        seen: set[str] = set()
        for node in graph.nodes:
            if node.id in seen:
                problems.append(f"duplicate node id {node.id!r}")
            seen.add(node.id)

        for pos, link in enumerate(graph.links):
            if not math.isfinite(link.value) or link.value < 0:
                problems.append(f"link #{pos} {link.source!r} -> {link.target!r} has invalid value {link.value!r}")

        if problems:
            raise MalformedGraphError(problems)

        digraph: nx.MultiDiGraph = nx.MultiDiGraph()
        for node in graph.nodes:
            digraph.add_node(node.id, data=node)

        index = {node.id: i for i, node in enumerate(graph.nodes)}
        resolved: list[tuple[int, int, float]] = []
        skipped: list[Link] = []
        for link in graph.links:
            src = index.get(link.source)
            tgt = index.get(link.target)
            if src is None or tgt is None:
                logger.debug("skipping link %s -> %s: unknown endpoint", link.source, link.target)
                skipped.append(link)
                continue
            resolved.append((src, tgt, float(link.value)))
            digraph.add_edge(link.source, link.target, value=float(link.value), data=link)

        flow = cls(digraph=digraph, nodes=list(graph.nodes), links=resolved, skipped_links=skipped)
        if logger.isEnabledFor(logging.DEBUG):
            for i, nid in enumerate(flow.node_ids):
                logger.debug("flow %s: in=%g out=%g", nid, flow.in_sum[i], flow.out_sum[i])
        return flow

    def node_count(self) -> int:
        return len(self.node_ids)

    def predecessors(self, node_id: str) -> list[tuple[str, float]]:
        """(source id, weight) pairs of links entering ``node_id``, in link order."""
        return self._preds[self.index[node_id]]

    def successors(self, node_id: str) -> list[tuple[str, float]]:
        """(target id, weight) pairs of links leaving ``node_id``, in link order."""
        return self._succs[self.index[node_id]]

    def is_source(self, i: int) -> bool:
        return self.in_sum[i] == 0 and self.out_sum[i] > 0

    def is_sink(self, i: int) -> bool:
        return self.out_sum[i] == 0 and self.in_sum[i] > 0

    def is_dag(self) -> bool:
        return nx.is_directed_acyclic_graph(self.digraph)

    def find_cycle(self) -> list[tuple[str, str]]:
        """Links of one directed cycle, or [] for an acyclic graph."""
        if self.is_dag():
            return []
        return [(u, v) for u, v, _key in nx.find_cycle(self.digraph)]

    def total_flow(self, node_id: str) -> float:
        i = self.index[node_id]
        return self.in_sum[i] + self.out_sum[i]
