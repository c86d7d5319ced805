"""Resilience indices by failure event."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

import numpy as np

from resilience_core.classification import Classification, classify
from resilience_core.errors import InsufficientSamples, NoExceedance
from resilience_core.integration import (
    INTEGRAL_VECTORIZED,
    IntegralMethod,
    resolve_integral_method,
)
from resilience_core.segmentation import (
    EventSpan,
    check_event_parameters,
    segment_events,
)
from resilience_core.severity import severity_from_clipped

__all__ = ["EventRecord", "events", "events_from_classification", "score_event"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventRecord:
    """Timing and resilience indices of a single failure event."""

    start: int
    end: int
    begin: float
    end_time: float
    duration: float
    pause_before: Optional[float]
    pause_after: Optional[float]
    severity: float
    resilience: float
    trec: float
    trec_percent: float
    worst_p: float

    @property
    def span(self) -> EventSpan:
        return EventSpan(
            start=self.start,
            end=self.end,
            begin=self.begin,
            end_time=self.end_time,
            duration=self.duration,
            pause_before=self.pause_before,
            pause_after=self.pause_after,
        )


def score_event(
    span: EventSpan,
    timestamps: np.ndarray,
    performance: np.ndarray,
    clipped: np.ndarray,
    testvar: np.ndarray,
    pa: float,
    pmax: float,
    integral_method: IntegralMethod = INTEGRAL_VECTORIZED,
) -> EventRecord:
    """Compute the indices of ``span`` from exceeding-only sample arrays.

    The worst performance is taken at the *last* sample reaching the
    event's maximal test variable; recovery time runs from that sample to
    the end of the event.
    """

    window = span.as_slice()
    event_times = timestamps[window]
    event_testvar = testvar[window]
    try:
        event_severity = severity_from_clipped(
            event_times, clipped[window], pa, pmax, integral_method=integral_method
        )
    except InsufficientSamples as exc:
        logger.debug(
            "Severity undefined for event starting at %s",
            span.begin,
            extra={"event": "resilience.event_severity", "context": exc.context},
        )
        event_severity = math.nan
    # NaN stays the shared math.nan object so repeated runs compare equal.
    resilience = event_severity if math.isnan(event_severity) else 1 - event_severity

    worst_positions = np.flatnonzero(event_testvar == event_testvar.max())
    last_worst = int(worst_positions[-1])
    trec = span.end_time - float(event_times[last_worst])
    trec_percent = trec / span.duration * 100 if span.duration > 0 else math.nan

    return EventRecord(
        start=span.start,
        end=span.end,
        begin=span.begin,
        end_time=span.end_time,
        duration=span.duration,
        pause_before=span.pause_before,
        pause_after=span.pause_after,
        severity=event_severity,
        resilience=resilience,
        trec=trec,
        trec_percent=trec_percent,
        worst_p=float(performance[window][last_worst]),
    )


def events_from_classification(
    classification: Classification,
    event_sep_time: float,
    signal_width: float,
    integral_method: IntegralMethod = INTEGRAL_VECTORIZED,
) -> Tuple[EventRecord, ...]:
    """Segment and score the failure events of a classified series."""

    if not classification.any_exceedance:
        raise NoExceedance(
            "Pa never exceeded",
            context={"pa": classification.pa, "pmax": classification.pmax},
        )
    indices = classification.exceeding_indices
    timestamps = classification.timestamps[indices]
    performance = classification.performance[indices]
    clipped = classification.clipped[indices]
    testvar = classification.testvar[indices]

    spans = segment_events(timestamps, event_sep_time, signal_width)
    return tuple(
        score_event(
            span,
            timestamps,
            performance,
            clipped,
            testvar,
            classification.pa,
            classification.pmax,
            integral_method=integral_method,
        )
        for span in spans
    )


def events(
    time_stamp: Sequence[Any] | np.ndarray,
    pt: Sequence[float] | np.ndarray,
    pa: float,
    pmax: float,
    event_sep_time: float,
    signal_width: float,
    *,
    integral_method: IntegralMethod = INTEGRAL_VECTORIZED,
) -> Tuple[EventRecord, ...]:
    """Return one :class:`EventRecord` per failure event of ``pt``.

    Parameters
    ----------
    time_stamp:
        Ascending timestamps (seconds, datetimes or ``datetime64`` values).
    pt:
        Performance values, same length as ``time_stamp``.
    pa, pmax:
        Acceptable performance and maximal failure.
    event_sep_time:
        Largest gap in seconds between consecutive exceeding timestamps that
        still belong to the same event.
    signal_width:
        Time span in seconds represented by one timestamp, e.g. ``300`` for a
        five minute series. Used to close events and derive durations.

    Raises
    ------
    NoExceedance
        When no sample crosses ``pa``.
    """

    resolve_integral_method(integral_method)
    check_event_parameters(event_sep_time, signal_width)
    classification = classify(time_stamp, pt, pa, pmax)
    return events_from_classification(
        classification, event_sep_time, signal_width, integral_method=integral_method
    )
