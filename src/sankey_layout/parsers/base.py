"""Base parser protocol."""

from __future__ import annotations

from typing import Protocol

from sankey_layout.ir.model import Graph


class Parser(Protocol):
    """Protocol that all graph importers must implement."""

    def parse(self, src: str) -> Graph:
        """Parse source text into a Graph."""
        ...
