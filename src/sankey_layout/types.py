"""Shared type definitions for sankey-layout.

Enums selecting between the layout strategies the engine supports.
"""

from __future__ import annotations

from enum import Enum


class ColumnSpacing(Enum):
    EVEN = "even"  # columns spread over the full inner width
    CAPPED = "capped"  # step limited to col_gap, never below MIN_COLUMN_STEP

    @classmethod
    def default(cls) -> ColumnSpacing:
        return cls.EVEN


class PackingMode(Enum):
    SPREAD = "spread"  # leftover height becomes extra gap and margin
    CENTER = "center"  # stack keeps node_gap and is centred

    @classmethod
    def default(cls) -> PackingMode:
        return cls.SPREAD
