"""Layer assignment for flow graphs that may contain cycles.

Steps:
  1. Longest-path relaxation, capped at ``relaxation_limit`` passes
  2. Fixed-layer overrides
  3. Normalisation to a 0-based minimum
  4. Sink push to the right edge
  5. Right pins beyond the sinks
  6. Compaction of empty layers and bucketing
"""

from __future__ import annotations

import logging
import math

from sankey_layout.config import LayoutConfig
from sankey_layout.errors import MalformedGraphError
from sankey_layout.ir.graph import FlowGraph

logger = logging.getLogger(__name__)


def relaxation_limit(node_count: int) -> int:
    """Maximum number of relaxation passes.

    On a cyclic graph the relaxation never settles; the cap guarantees
    termination and leaves the cycle at whatever layers the last pass gave it.
    """
    return 3 * max(10, node_count)


def longest_path_layers(graph: FlowGraph) -> tuple[list[int], int, bool]:
    """Relax ``layer[v] >= layer[u] + 1`` over all links.

    Returns (layers, passes run, converged).
    """
    n = graph.node_count()
    layers = [0] * n
    for i in range(n):
        if graph.is_source(i):
            layers[i] = 0

    passes = 0
    for _ in range(relaxation_limit(n)):
        passes += 1
        changed = False
        for src, tgt, _value in graph.links:
            need = layers[src] + 1
            if layers[tgt] < need:
                layers[tgt] = need
                changed = True
        if not changed:
            return layers, passes, True
    return layers, passes, False


def violated_links(graph: FlowGraph, layers: list[int]) -> list[tuple[str, str]]:
    """Links whose target is not strictly right of their source."""
    return [
        (graph.node_ids[src], graph.node_ids[tgt])
        for src, tgt, _value in graph.links
        if layers[tgt] < layers[src] + 1
    ]


def compact(layers: list[int]) -> list[int]:
    """Renumber layers so the used values form 0..k without gaps."""
    rank = {value: pos for pos, value in enumerate(sorted(set(layers)))}
    return [rank[value] for value in layers]


def check_fixed_layers(fixed_layers: dict[str, float]) -> None:
    """Reject fixed layers that are not finite numbers."""
    problems = [
        f"fixed layer for {node_id!r} is not a finite number: {value!r}"
        for node_id, value in fixed_layers.items()
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value)
    ]
    if problems:
        raise MalformedGraphError(problems)


class LayerAssignment:
    def __init__(
        self,
        layers: dict[str, int],
        layer_count: int,
        passes: int = 0,
        converged: bool = True,
        violated_edges: list[tuple[str, str]] | None = None,
        cycle: list[tuple[str, str]] | None = None,
    ) -> None:
        self.layers = layers
        self.layer_count = layer_count
        self.passes = passes
        self.converged = converged
        self.violated_edges = violated_edges or []
        self.cycle = cycle or []

    @classmethod
    def assign(cls, graph: FlowGraph, config: LayoutConfig) -> LayerAssignment:
        check_fixed_layers(config.fixed_layers)
        n = graph.node_count()
        if n == 0:
            return cls(layers={}, layer_count=0)

        layer, passes, converged = longest_path_layers(graph)
        violated = [] if converged else violated_links(graph, layer)
        cycle = graph.find_cycle() if violated else []
        if violated:
            message = "layering stopped after %d passes with %d backward link(s): %s; cycle: %s"
            args = (
                passes,
                len(violated),
                ", ".join(f"{s}->{t}" for s, t in violated),
                ", ".join(f"{u}->{v}" for u, v in cycle),
            )
            if config.strict:
                logger.warning(message, *args)
            else:
                logger.debug(message, *args)

        for node_id, value in config.fixed_layers.items():
            i = graph.index.get(node_id)
            if i is None:
                logger.debug("fixed layer for unknown node %s ignored", node_id)
                continue
            layer[i] = max(0, math.floor(value))

        lowest = min(layer)
        layer = [value - lowest for value in layer]

        max_layer = max(layer)
        for i in range(n):
            if graph.is_sink(i):
                layer[i] = max_layer + 1

        max_layer = max(layer)
        for node_id in config.pin_right_ids:
            i = graph.index.get(node_id)
            if i is not None:
                layer[i] = max_layer + 1

        if config.compact_layers:
            layer = compact(layer)

        layers = {nid: layer[i] for i, nid in enumerate(graph.node_ids)}
        logger.debug("layers: %s", layers)
        return cls(
            layers=layers,
            layer_count=max(layer) + 1,
            passes=passes,
            converged=converged,
            violated_edges=violated,
            cycle=cycle,
        )

    def buckets(self) -> list[list[str]]:
        """Node ids per layer, keeping input order inside each layer."""
        ordering: list[list[str]] = [[] for _ in range(self.layer_count)]
        for node_id, layer in self.layers.items():
            ordering[layer].append(node_id)
        return ordering
