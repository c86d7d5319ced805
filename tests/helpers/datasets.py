"""Synthetic datasets standing in for the dissolved oxygen example data."""

from __future__ import annotations

import numpy as np
import pandas as pd

SCENARIO_PA = 2.0
SCENARIO_PMAX = 0.0

OXYGEN_SIGNAL_WIDTH = 300.0
OXYGEN_COLUMNS = (
    "S2_storage_2020",
    "S3_storage_increase",
    "S4_red_Imp_Surface",
    "S5_increase_in_DO",
)

_SAMPLES = 576  # two days on a five minute grid


def _dip(values: np.ndarray, start: int, width: int, depth: float) -> None:
    centre = start + (width - 1) / 2.0
    half = width / 2.0
    positions = np.arange(start, start + width)
    profile = 5.0 - (5.0 - depth) * (1.0 - np.abs(positions - centre) / half)
    values[start : start + width] = np.minimum(values[start : start + width], profile)


def build_oxygen_frame() -> pd.DataFrame:
    """Return four DO scenarios (mg/l) with a ``timestamp`` column.

    With ``Pa = 4`` and ``Pmax = 0`` the storage scenario fails twice, the
    increased storage scenario once and the remaining two never.
    """

    timestamp = pd.date_range("2020-06-01", periods=_SAMPLES, freq="5min")
    phase = np.arange(_SAMPLES) / 288.0 * 2.0 * np.pi
    daily = 7.0 + np.sin(phase)

    storage = daily.copy()
    _dip(storage, 100, 24, 1.5)
    _dip(storage, 400, 12, 3.0)

    increased = daily.copy()
    _dip(increased, 100, 24, 3.0)

    return pd.DataFrame(
        {
            "timestamp": timestamp,
            "S2_storage_2020": storage,
            "S3_storage_increase": increased,
            "S4_red_Imp_Surface": daily + 0.5,
            "S5_increase_in_DO": daily + 2.0,
        }
    )


def mirror_series(performance: np.ndarray, pa: float) -> np.ndarray:
    """Reflect ``performance`` around ``pa`` to flip the failure direction."""

    return 2.0 * pa - np.asarray(performance, dtype=float)
