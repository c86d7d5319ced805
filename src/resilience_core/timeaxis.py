"""Conversion of heterogeneous time axes to float seconds."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Sequence

import numpy as np

from resilience_core.errors import EmptyInput, LengthMismatch, UnorderedTimestamps

__all__ = ["as_seconds", "check_time_axis"]

_EPOCH = datetime(1970, 1, 1)


def _scalar_seconds(value: Any) -> float:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.timestamp()
        return (value - _EPOCH).total_seconds()
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, np.datetime64):
        return float(value.astype("datetime64[ns]").astype(np.int64)) / 1e9
    if isinstance(value, np.timedelta64):
        return float(value.astype("timedelta64[ns]").astype(np.int64)) / 1e9
    return float(value)


def as_seconds(time_stamp: Sequence[Any] | np.ndarray) -> np.ndarray:
    """Return ``time_stamp`` as a float array of seconds.

    Numbers are taken as seconds already. ``datetime64``/``timedelta64``
    arrays, :class:`datetime.datetime` and pandas timestamps are measured
    from the Unix epoch; naive datetimes are read as UTC so that daylight
    saving shifts never distort time differences.
    """

    values = np.asarray(time_stamp)
    kind = values.dtype.kind
    if kind == "M":
        return values.astype("datetime64[ns]").astype(np.int64) / 1e9
    if kind == "m":
        return values.astype("timedelta64[ns]").astype(np.int64) / 1e9
    if kind == "O":
        return np.fromiter(
            (_scalar_seconds(value) for value in values.ravel()),
            dtype=float,
            count=values.size,
        )
    return values.astype(float)


def check_time_axis(seconds: np.ndarray, length: int | None = None) -> None:
    """Validate a converted time axis against the performance length."""

    size = int(seconds.shape[0])
    if size == 0:
        raise EmptyInput("time axis is empty")
    if length is not None and size != length:
        raise LengthMismatch(
            "time axis and performance values differ in length",
            context={"timestamps": size, "values": length},
        )
    if size > 1:
        steps = np.diff(seconds)
        backwards = np.flatnonzero(steps < 0)
        if backwards.size:
            position = int(backwards[0]) + 1
            raise UnorderedTimestamps(
                "time axis must be sorted in ascending order",
                context={"index": position},
            )
