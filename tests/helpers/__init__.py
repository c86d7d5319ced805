"""Convenience re-exports for test helpers."""

from __future__ import annotations

from tests.helpers.datasets import (
    OXYGEN_COLUMNS,
    OXYGEN_SIGNAL_WIDTH,
    SCENARIO_PA,
    SCENARIO_PMAX,
    build_oxygen_frame,
    mirror_series,
)

__all__ = [
    "OXYGEN_COLUMNS",
    "OXYGEN_SIGNAL_WIDTH",
    "SCENARIO_PA",
    "SCENARIO_PMAX",
    "build_oxygen_frame",
    "mirror_series",
]
