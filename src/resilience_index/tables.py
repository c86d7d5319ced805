"""pandas adapters for the resilience computations.

Frames coming in hold one time column (or a time index) next to one or
more performance columns; frames going out use the column names of the
established R tooling (``tBeg``, ``Sev``, ``Res0``, ...).
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Optional

import numpy as np

from resilience_core.events import EventRecord, events
from resilience_core.summary import (
    PerformanceSeries,
    PerformanceTable,
    SummaryRow,
    summary,
)
from resilience_index.configuration import ResilienceParameters

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only.
    import pandas as pd

__all__ = [
    "EVENT_COLUMNS",
    "SUMMARY_COLUMNS",
    "events_frame",
    "frame_events",
    "performance_table_from_frame",
    "summarise_frame",
    "summary_frame",
]

EVENT_COLUMNS = (
    "iBeg",
    "iEnd",
    "tBeg",
    "tEnd",
    "dur",
    "pBefore",
    "pAfter",
    "Sev",
    "Res0",
    "trec",
    "trec_percent",
    "worst_P",
)

SUMMARY_COLUMNS = (
    "time_series",
    "num_events",
    "worst_P",
    "total_dur",
    "total_trec",
    "mean_trec_percent",
    "Sev",
    "Res0",
)

_PANDAS: Any | None = None


def _get_pandas() -> Any:
    global _PANDAS
    if _PANDAS is None:
        import pandas as _pd

        _PANDAS = _pd
    return _PANDAS


def _optional(value: Optional[float]) -> float:
    return math.nan if value is None else float(value)


def _time_axis(frame: pd.DataFrame, time_column: str | None) -> np.ndarray:
    if time_column is None:
        return frame.index.to_numpy()
    if time_column not in frame.columns:
        raise KeyError(f"Time column {time_column!r} not found in frame")
    return frame[time_column].to_numpy()


def performance_table_from_frame(
    frame: pd.DataFrame,
    *,
    time_column: str | None = None,
    columns: Sequence[str] | None = None,
) -> tuple[np.ndarray, PerformanceTable]:
    """Split ``frame`` into its time axis and a :class:`PerformanceTable`.

    Without ``time_column`` the frame index is the time axis. Without
    ``columns`` every numeric column except the time column is used, in
    frame order.
    """

    time_stamp = _time_axis(frame, time_column)
    if columns is None:
        numeric = frame.select_dtypes(include="number")
        selected = [name for name in numeric.columns if name != time_column]
    else:
        missing = [name for name in columns if name not in frame.columns]
        if missing:
            raise KeyError(f"Performance columns not found in frame: {missing}")
        selected = list(columns)
    if not selected:
        raise ValueError("Frame does not contain any performance column")
    table = PerformanceTable(
        tuple(
            PerformanceSeries(str(name), frame[name].to_numpy(dtype=float))
            for name in selected
        )
    )
    return time_stamp, table


def _seconds_column(values: list[float], as_datetime: bool) -> Any:
    if not as_datetime:
        return values
    pd = _get_pandas()
    return pd.to_datetime(pd.Series(values, dtype=float), unit="s")


def events_frame(
    records: Sequence[EventRecord], *, as_datetime: bool = False
) -> pd.DataFrame:
    """Return ``records`` as a frame with one row per failure event.

    ``as_datetime`` turns ``tBeg``/``tEnd`` back into timestamps for series
    whose time axis was given as datetimes.
    """

    pd = _get_pandas()
    data = {
        "iBeg": [record.start for record in records],
        "iEnd": [record.end for record in records],
        "tBeg": _seconds_column([record.begin for record in records], as_datetime),
        "tEnd": _seconds_column([record.end_time for record in records], as_datetime),
        "dur": [record.duration for record in records],
        "pBefore": [_optional(record.pause_before) for record in records],
        "pAfter": [_optional(record.pause_after) for record in records],
        "Sev": [record.severity for record in records],
        "Res0": [record.resilience for record in records],
        "trec": [record.trec for record in records],
        "trec_percent": [record.trec_percent for record in records],
        "worst_P": [record.worst_p for record in records],
    }
    return pd.DataFrame(data, columns=list(EVENT_COLUMNS))


def summary_frame(rows: Sequence[SummaryRow]) -> pd.DataFrame:
    """Return summary ``rows`` as a frame with one row per performance column."""

    pd = _get_pandas()
    data = {
        "time_series": [row.name for row in rows],
        "num_events": [row.num_events for row in rows],
        "worst_P": [row.worst_p for row in rows],
        "total_dur": [row.total_dur for row in rows],
        "total_trec": [row.total_trec for row in rows],
        "mean_trec_percent": [row.mean_trec_percent for row in rows],
        "Sev": [row.severity for row in rows],
        "Res0": [row.resilience for row in rows],
    }
    return pd.DataFrame(data, columns=list(SUMMARY_COLUMNS))


def summarise_frame(
    frame: pd.DataFrame,
    parameters: ResilienceParameters,
    *,
    time_column: str | None = None,
    columns: Sequence[str] | None = None,
) -> pd.DataFrame:
    """Compute the resilience summary of every performance column in ``frame``."""

    time_stamp, table = performance_table_from_frame(
        frame, time_column=time_column, columns=columns
    )
    rows = summary(
        time_stamp,
        table,
        parameters.acceptable,
        parameters.worst,
        parameters.event_sep_time,
        parameters.signal_width,
        integral_method=parameters.integral_method,
    )
    return summary_frame(rows)


def frame_events(
    frame: pd.DataFrame,
    column: str,
    parameters: ResilienceParameters,
    *,
    time_column: str | None = None,
    as_datetime: bool = False,
) -> pd.DataFrame:
    """Compute the failure events of one performance column in ``frame``.

    Raises :class:`~resilience_core.errors.NoExceedance` when the column
    never crosses the acceptable performance.
    """

    if column not in frame.columns:
        raise KeyError(f"Performance column {column!r} not found in frame")
    records = events(
        _time_axis(frame, time_column),
        frame[column].to_numpy(dtype=float),
        parameters.acceptable,
        parameters.worst,
        parameters.event_sep_time,
        parameters.signal_width,
        integral_method=parameters.integral_method,
    )
    return events_frame(records, as_datetime=as_datetime)
