"""Severity of performance failures over a time span."""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from resilience_core.classification import classify
from resilience_core.errors import InsufficientSamples, InvalidThreshold
from resilience_core.integration import (
    INTEGRAL_VECTORIZED,
    IntegralMethod,
    integrate,
    resolve_integral_method,
)

__all__ = ["severity", "severity_from_clipped"]


def severity_from_clipped(
    timestamps: Sequence[float] | np.ndarray,
    clipped: Sequence[float] | np.ndarray,
    pa: float,
    pmax: float,
    integral_method: IntegralMethod = INTEGRAL_VECTORIZED,
) -> float:
    """Return the normalised deficit of already clipped performance values.

    ``clipped`` equals the raw performance where it exceeds ``pa`` and ``pa``
    elsewhere, so only failing samples contribute. The integral of
    ``pa - clipped`` is divided by the threshold range and the time span.
    """

    resolve_integral_method(integral_method)
    times = np.asarray(timestamps, dtype=float)
    values = np.asarray(clipped, dtype=float)
    if times.shape[0] < 2:
        raise InsufficientSamples(
            "severity needs at least two samples",
            context={"samples": int(times.shape[0])},
        )
    time_range = float(times[-1] - times[0])
    if time_range <= 0.0:
        raise InsufficientSamples(
            "severity needs a span with positive duration",
            context={"samples": int(times.shape[0]), "time_range": time_range},
        )
    threshold_range = float(pa) - float(pmax)
    if threshold_range == 0.0:
        raise InvalidThreshold(
            "acceptable performance and maximal failure must differ",
            context={"pa": float(pa), "pmax": float(pmax)},
        )
    integrant = float(pa) - values
    integral = integrate(times, integrant, method=integral_method)
    return (1.0 / threshold_range) * (1.0 / time_range) * float(np.sum(integral))


def severity(
    time_stamp: Sequence[Any] | np.ndarray,
    pt: Sequence[float] | np.ndarray,
    pa: float,
    pmax: float,
    integral_method: IntegralMethod = INTEGRAL_VECTORIZED,
) -> float:
    """Return the severity ``Sev`` of ``pt`` over its entire time series.

    ``0.0`` means the acceptable performance ``pa`` is never exceeded; the
    resilience index is ``1 - severity``.
    """

    classification = classify(time_stamp, pt, pa, pmax)
    return severity_from_clipped(
        classification.timestamps,
        classification.clipped,
        pa,
        pmax,
        integral_method=integral_method,
    )
