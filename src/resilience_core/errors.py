"""Error types raised by the resilience computations."""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional

import numpy as np

__all__ = [
    "ResilienceError",
    "InvalidThreshold",
    "NoExceedance",
    "InsufficientSamples",
    "EmptyInput",
    "InvalidMethod",
    "InvalidParameter",
    "LengthMismatch",
    "UnorderedTimestamps",
]


def _normalise_context(context: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    if not context:
        return {}
    payload: MutableMapping[str, Any] = {}
    for key, value in context.items():
        if isinstance(value, np.generic):
            value = value.item()
        if isinstance(value, (str, int, float, bool)) or value is None:
            payload[key] = value
        else:
            payload[key] = str(value)
    return dict(payload)


class ResilienceError(ValueError):
    """Base class for precondition violations of the resilience indices.

    ``context`` holds a flat mapping of scalar details describing the
    offending input so callers can log it with ``extra=``.
    """

    __slots__ = ("context",)

    def __init__(
        self, message: str, *, context: Optional[Mapping[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.context = _normalise_context(context)


class InvalidThreshold(ResilienceError):
    """Acceptable and maximal-failure performance coincide."""


class NoExceedance(ResilienceError):
    """The acceptable performance is never crossed."""


class InsufficientSamples(ResilienceError):
    """An integration span has fewer than two samples or no time extent."""


class EmptyInput(ResilienceError):
    """A computation received an empty sequence."""


class InvalidMethod(ResilienceError):
    """Unsupported integration method identifier."""


class InvalidParameter(ResilienceError):
    """A numeric parameter is outside its admissible range."""


class LengthMismatch(ResilienceError):
    """Time axis and performance values differ in length."""


class UnorderedTimestamps(ResilienceError):
    """The time axis decreases somewhere."""
