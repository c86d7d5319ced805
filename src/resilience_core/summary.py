"""Overall resilience indices for one or several performance series."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Sequence, Tuple, Union

import numpy as np

from resilience_core.classification import Classification, classify
from resilience_core.errors import EmptyInput
from resilience_core.events import events_from_classification
from resilience_core.integration import (
    INTEGRAL_VECTORIZED,
    IntegralMethod,
    resolve_integral_method,
)
from resilience_core.segmentation import check_event_parameters
from resilience_core.severity import severity_from_clipped
from resilience_core.timeaxis import as_seconds

__all__ = [
    "PerformanceSeries",
    "PerformanceTable",
    "PerformanceInput",
    "SummaryRow",
    "summarise_classification",
    "summary",
]

logger = logging.getLogger(__name__)


def _stable_float(value: float) -> float:
    # Map every NaN onto math.nan so equal rows compare equal.
    value = float(value)
    return math.nan if math.isnan(value) else value


@dataclass(frozen=True, eq=False)
class PerformanceSeries:
    """A single named performance column."""

    name: str
    values: Sequence[float] = field(repr=False)


@dataclass(frozen=True)
class PerformanceTable:
    """Ordered collection of performance columns sharing one time axis."""

    columns: Tuple[PerformanceSeries, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(self.columns))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Sequence[float]]) -> "PerformanceTable":
        """Build a table from ``{name: values}`` preserving insertion order."""

        return cls(
            tuple(PerformanceSeries(str(name), values) for name, values in mapping.items())
        )

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(column.name for column in self.columns)

    def __iter__(self) -> Iterator[PerformanceSeries]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)


PerformanceInput = Union[PerformanceSeries, PerformanceTable]


@dataclass(frozen=True)
class SummaryRow:
    """Resilience indices of one performance column over its whole series."""

    position: int
    name: str
    num_events: int
    worst_p: float
    total_dur: float
    total_trec: float
    mean_trec_percent: float
    severity: float
    resilience: float


def summarise_classification(
    classification: Classification,
    event_sep_time: float,
    signal_width: float,
    *,
    position: int = 0,
    name: str = "",
    integral_method: IntegralMethod = INTEGRAL_VECTORIZED,
) -> SummaryRow:
    """Summarise a classified column without raising for unbroken series."""

    # First occurrence of the maximum; events use the last one instead.
    worst_p = _stable_float(
        classification.performance[int(np.argmax(classification.testvar))]
    )

    if not classification.any_exceedance:
        logger.debug("Column %r never exceeds the acceptable performance", name)
        return SummaryRow(
            position=position,
            name=name,
            num_events=0,
            worst_p=worst_p,
            total_dur=0.0,
            total_trec=0.0,
            mean_trec_percent=0.0,
            severity=0.0,
            resilience=1.0,
        )

    series_severity = severity_from_clipped(
        classification.timestamps,
        classification.clipped,
        classification.pa,
        classification.pmax,
        integral_method=integral_method,
    )
    records = events_from_classification(
        classification, event_sep_time, signal_width, integral_method=integral_method
    )
    trec_percent = np.asarray([record.trec_percent for record in records], dtype=float)
    row = SummaryRow(
        position=position,
        name=name,
        num_events=len(records),
        worst_p=worst_p,
        total_dur=float(sum(record.duration for record in records)),
        total_trec=float(sum(record.trec for record in records)),
        mean_trec_percent=_stable_float(np.mean(trec_percent)),
        severity=series_severity,
        resilience=1 - series_severity,
    )
    logger.debug(
        "Column %r: %d events, severity %.6g",
        name,
        row.num_events,
        row.severity,
    )
    return row


def summary(
    time_stamp: Sequence[Any] | np.ndarray,
    pt: PerformanceInput,
    pa: float,
    pmax: float,
    event_sep_time: float,
    signal_width: float,
    *,
    integral_method: IntegralMethod = INTEGRAL_VECTORIZED,
) -> Tuple[SummaryRow, ...]:
    """Return one :class:`SummaryRow` per column of ``pt`` in input order.

    Columns that never cross ``pa`` yield ``num_events == 0``, a severity of
    ``0`` and a resilience of ``1`` rather than raising
    :class:`~resilience_core.errors.NoExceedance`.
    """

    resolve_integral_method(integral_method)
    check_event_parameters(event_sep_time, signal_width)
    if isinstance(pt, PerformanceTable):
        columns = pt.columns
    else:
        columns = (pt,)
    if not columns:
        raise EmptyInput("no performance columns to summarise")

    seconds = as_seconds(time_stamp)
    return tuple(
        summarise_classification(
            classify(seconds, column.values, pa, pmax),
            event_sep_time,
            signal_width,
            position=position,
            name=column.name,
            integral_method=integral_method,
        )
        for position, column in enumerate(columns)
    )
