"""Threshold classification of performance samples."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from resilience_core.errors import InvalidThreshold
from resilience_core.timeaxis import as_seconds, check_time_axis

__all__ = ["Classification", "classify", "threshold_test_variable"]


def _threshold_range(pa: float, pmax: float) -> float:
    span = float(pa) - float(pmax)
    if span == 0.0:
        raise InvalidThreshold(
            "acceptable performance and maximal failure must differ",
            context={"pa": float(pa), "pmax": float(pmax)},
        )
    return span


def threshold_test_variable(
    performance: Sequence[float] | np.ndarray, pa: float, pmax: float
) -> np.ndarray:
    """Return ``(pa - P) / (pa - pmax)`` for every sample.

    Non-negative values mark samples beyond the acceptable performance,
    whichever side of ``pa`` the maximal failure lies on.
    """

    span = _threshold_range(pa, pmax)
    values = np.asarray(performance, dtype=float)
    return (float(pa) - values) / span


@dataclass(frozen=True, eq=False)
class Classification:
    """Per-sample view of a performance series against ``(pa, pmax)``."""

    timestamps: np.ndarray
    performance: np.ndarray
    testvar: np.ndarray
    exceeding: np.ndarray
    clipped: np.ndarray
    pa: float
    pmax: float

    @property
    def any_exceedance(self) -> bool:
        return bool(self.exceeding.any())

    @property
    def exceeding_indices(self) -> np.ndarray:
        return np.flatnonzero(self.exceeding)

    def __len__(self) -> int:
        return int(self.timestamps.shape[0])


def classify(
    time_stamp: Sequence[Any] | np.ndarray,
    performance: Sequence[float] | np.ndarray,
    pa: float,
    pmax: float,
) -> Classification:
    """Classify ``performance`` samples recorded at ``time_stamp``."""

    values = np.array(performance, dtype=float)
    seconds = as_seconds(time_stamp)
    check_time_axis(seconds, int(values.shape[0]))
    testvar = threshold_test_variable(values, pa, pmax)
    # NaN compares false, so missing samples never count as failures.
    exceeding = testvar >= 0
    clipped = np.where(exceeding, values, float(pa))
    for array in (seconds, values, testvar, exceeding, clipped):
        array.setflags(write=False)
    return Classification(
        timestamps=seconds,
        performance=values,
        testvar=testvar,
        exceeding=exceeding,
        clipped=clipped,
        pa=float(pa),
        pmax=float(pmax),
    )
