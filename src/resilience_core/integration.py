"""Trapezoidal integration over irregular time axes."""

from __future__ import annotations

from typing import Literal, Sequence

import numpy as np

from resilience_core.errors import InvalidMethod, LengthMismatch

__all__ = [
    "INTEGRAL_LOOP",
    "INTEGRAL_VECTORIZED",
    "INTEGRAL_METHODS",
    "IntegralMethod",
    "integrate",
    "resolve_integral_method",
]

INTEGRAL_LOOP = 1
INTEGRAL_VECTORIZED = 2
INTEGRAL_METHODS = (INTEGRAL_LOOP, INTEGRAL_VECTORIZED)

IntegralMethod = Literal[1, 2]


def resolve_integral_method(method: object) -> int:
    """Return ``method`` as a supported identifier or raise :class:`InvalidMethod`."""

    if isinstance(method, bool) or method not in INTEGRAL_METHODS:
        raise InvalidMethod(
            f"integral method {method!r} not supported",
            context={"method": repr(method)},
        )
    return int(method)  # type: ignore[call-overload]


def _integrate_loop(timestamps: np.ndarray, integrants: np.ndarray) -> np.ndarray:
    integral = np.zeros(timestamps.shape[0], dtype=float)
    for index in range(1, timestamps.shape[0]):
        step = timestamps[index] - timestamps[index - 1]
        integral[index] = (integrants[index - 1] + integrants[index]) / 2 * step
    return integral


def _integrate_shifted(timestamps: np.ndarray, integrants: np.ndarray) -> np.ndarray:
    last_integrants = np.concatenate(([0.0], integrants[:-1]))
    steps = np.concatenate(([0.0], np.diff(timestamps)))
    return (integrants + last_integrants) / 2 * steps


def integrate(
    timestamps: Sequence[float] | np.ndarray,
    integrants: Sequence[float] | np.ndarray,
    method: IntegralMethod = INTEGRAL_VECTORIZED,
) -> np.ndarray:
    """Return the per-step trapezoidal contributions of ``integrants``.

    Element ``i`` holds the area between samples ``i - 1`` and ``i`` and the
    first element is always zero, so ``integral.sum()`` is the definite
    integral over the whole axis. Method ``1`` walks the samples pairwise;
    method ``2`` computes the same values from shifted arrays and is the
    faster choice for long series.
    """

    resolved = resolve_integral_method(method)
    times = np.asarray(timestamps, dtype=float)
    values = np.asarray(integrants, dtype=float)
    if times.shape != values.shape:
        raise LengthMismatch(
            "timestamps and integrants differ in length",
            context={"timestamps": times.shape[0], "values": values.shape[0]},
        )
    if times.shape[0] == 0:
        return np.zeros(0, dtype=float)
    if times.shape[0] == 1:
        return np.zeros(1, dtype=float)
    if resolved == INTEGRAL_LOOP:
        return _integrate_loop(times, values)
    return _integrate_shifted(times, values)
