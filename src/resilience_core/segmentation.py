"""Failure event segmentation.

The exceeding samples of a series are grouped into events: a new event
starts at the first sample and wherever the gap to the previous exceeding
timestamp is larger than the event separation time. Each sample stands for
``signal_width`` seconds, so an event ends ``signal_width`` after its last
timestamp and a single-sample event still lasts one sampling interval.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from resilience_core.errors import EmptyInput, InvalidParameter
from resilience_core.timeaxis import check_time_axis

__all__ = ["EventSpan", "check_event_parameters", "segment_events"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventSpan:
    """Index range and timing of one failure event.

    ``start`` and ``end`` are inclusive positions within the exceeding-only
    subsequence. ``pause_before``/``pause_after`` measure the time to the
    neighbouring events and are ``None`` at the edges of the series.
    """

    start: int
    end: int
    begin: float
    end_time: float
    duration: float
    pause_before: Optional[float] = None
    pause_after: Optional[float] = None

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    def as_slice(self) -> slice:
        return slice(self.start, self.end + 1)


def _check_non_negative(name: str, value: float) -> float:
    resolved = float(value)
    if not resolved >= 0.0:
        raise InvalidParameter(
            f"{name} must be a non-negative number of seconds",
            context={name: resolved},
        )
    return resolved


def check_event_parameters(
    event_sep_time: float, signal_width: float
) -> Tuple[float, float]:
    """Return ``(event_sep_time, signal_width)`` as floats, rejecting negatives."""

    return (
        _check_non_negative("event_sep_time", event_sep_time),
        _check_non_negative("signal_width", signal_width),
    )


def segment_events(
    timestamps: Sequence[float] | np.ndarray,
    event_sep_time: float,
    signal_width: float,
) -> Tuple[EventSpan, ...]:
    """Partition ascending ``timestamps`` (seconds) into failure events."""

    separation, width = check_event_parameters(event_sep_time, signal_width)
    times = np.asarray(timestamps, dtype=float)
    if times.shape[0] == 0:
        raise EmptyInput("cannot segment an empty exceeding series")
    check_time_axis(times)

    breaks = np.flatnonzero(np.diff(times) > separation) + 1
    starts = np.concatenate(([0], breaks))
    ends = np.concatenate((breaks - 1, [times.shape[0] - 1]))
    begins = times[starts]
    finishes = times[ends] + width

    spans = []
    count = int(starts.shape[0])
    for position in range(count):
        pause_before = (
            float(begins[position] - finishes[position - 1]) if position > 0 else None
        )
        pause_after = (
            float(begins[position + 1] - finishes[position])
            if position + 1 < count
            else None
        )
        spans.append(
            EventSpan(
                start=int(starts[position]),
                end=int(ends[position]),
                begin=float(begins[position]),
                end_time=float(finishes[position]),
                duration=float(finishes[position] - begins[position]),
                pause_before=pause_before,
                pause_after=pause_after,
            )
        )
    logger.debug(
        "Segmented %d exceeding samples into %d events",
        times.shape[0],
        count,
        extra={"event_sep_time": separation, "signal_width": width},
    )
    return tuple(spans)
