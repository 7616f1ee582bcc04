"""CLI entry point for sankey-layout."""

import json
import logging
import math
import sys

import click

from sankey_layout.config import LayoutConfig
from sankey_layout.errors import SankeyLayoutError
from sankey_layout.layout.engine import full_layout
from sankey_layout.parsers import load_graph
from sankey_layout.snapshot import LayoutSnapshot
from sankey_layout.types import ColumnSpacing, PackingMode

_DEFAULTS = LayoutConfig.default()


def _parse_fixed(values: tuple[str, ...]) -> dict[str, float]:
    fixed: dict[str, float] = {}
    for item in values:
        node_id, sep, layer = item.rpartition("=")
        if not sep or not node_id:
            raise click.BadParameter(f"expected ID=LAYER, got '{item}'", param_hint="--fix")
        try:
            value = float(layer)
        except ValueError:
            raise click.BadParameter(f"layer must be a number, got '{layer}'", param_hint="--fix") from None
        if not math.isfinite(value):
            raise click.BadParameter(f"layer must be finite, got '{layer}'", param_hint="--fix")
        fixed[node_id] = value
    return fixed


@click.command()
@click.argument("input", type=click.Path(exists=True, dir_okay=False))
@click.option("--nodes", "nodes_path", type=click.Path(exists=True, dir_okay=False), default=None, help="nodes.csv with labels, colours and pinned geometry")
@click.option("--width", type=float, default=_DEFAULTS.width, show_default=True, help="Drawing width in pixels")
@click.option("--height", type=float, default=_DEFAULTS.height, show_default=True, help="Drawing height in pixels")
@click.option("--padding", type=float, default=_DEFAULTS.padding, show_default=True, help="Margin around the drawing")
@click.option("--node-gap", type=float, default=_DEFAULTS.node_gap, show_default=True, help="Minimum vertical gap between nodes")
@click.option("--col-gap", type=float, default=_DEFAULTS.col_gap, show_default=True, help="Maximum column step for --spacing capped")
@click.option("--link-width-scale", type=float, default=_DEFAULTS.link_width_scale, show_default=True, help="Pixels per unit of flow")
@click.option("--fix", "fixed", multiple=True, metavar="ID=LAYER", help="Force a node into a layer (repeatable)")
@click.option("--pin-right", "pin_right", multiple=True, metavar="ID", help="Force a node into the rightmost layer (repeatable)")
@click.option("--spacing", type=click.Choice([s.value for s in ColumnSpacing]), default=ColumnSpacing.default().value, show_default=True, help="Column spacing strategy")
@click.option("--packing", type=click.Choice([p.value for p in PackingMode]), default=PackingMode.default().value, show_default=True, help="Vertical packing strategy")
@click.option("--no-compact", is_flag=True, help="Keep empty layers instead of closing the gaps")
@click.option("--strict", is_flag=True, help="Warn about links left pointing backwards by cycles")
@click.option("--verbose", "-v", is_flag=True, help="Log layout phases to stderr")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
def main(
    input: str,
    nodes_path: str | None,
    width: float,
    height: float,
    padding: float,
    node_gap: float,
    col_gap: float,
    link_width_scale: float,
    fixed: tuple[str, ...],
    pin_right: tuple[str, ...],
    spacing: str,
    packing: str,
    no_compact: bool,
    strict: bool,
    verbose: bool,
    output: str | None,
) -> None:
    """Sankey flow graph layout: prints a JSON layout snapshot."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    config = LayoutConfig(
        width=width,
        height=height,
        padding=padding,
        node_gap=node_gap,
        col_gap=col_gap,
        link_width_scale=link_width_scale,
        fixed_layers=_parse_fixed(fixed),
        pin_right_ids=list(pin_right),
        column_spacing=ColumnSpacing(spacing),
        packing=PackingMode(packing),
        compact_layers=not no_compact,
        strict=strict,
    )

    try:
        graph = load_graph(input, nodes_path)
        result = full_layout(graph, config)
    except OSError as e:
        click.echo(f"error: cannot read input: {e}", err=True)
        sys.exit(1)
    except SankeyLayoutError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    snapshot = LayoutSnapshot.from_layout(graph, result.placements, link_width_scale=link_width_scale)
    rendered = json.dumps(snapshot.to_dict(), indent=2) + "\n"

    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
