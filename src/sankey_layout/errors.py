"""Exception taxonomy for sankey-layout."""

from __future__ import annotations


class SankeyLayoutError(ValueError):
    """Base class for every error raised by sankey-layout."""


class MalformedGraphError(SankeyLayoutError):
    """The graph breaks an input invariant (duplicate ids, bad link values)."""

    def __init__(self, records: list[str]) -> None:
        self.records = list(records)
        super().__init__("malformed graph:\n" + "\n".join(f"  - {r}" for r in self.records))


class ParseError(SankeyLayoutError):
    """A graph file could not be imported."""
