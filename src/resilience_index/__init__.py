"""Top-level package for resilience-index.

Resilience indices after Matzinger et al. (2018) for performance time
series: severity and resilience over the whole series, failure events with
their recovery times, and a summary per performance column. The numeric
work lives in :mod:`resilience_core`; this package adds configuration,
logging and pandas helpers.
"""

from ._version import __version__
from resilience_core import (
    EventRecord,
    PerformanceSeries,
    PerformanceTable,
    ResilienceError,
    SummaryRow,
    events,
    severity,
    summary,
)
from .configuration import ResilienceParameters, load_parameters, load_project_config
from .logging import JsonFormatter, setup_logging
from .tables import (
    events_frame,
    frame_events,
    performance_table_from_frame,
    summarise_frame,
    summary_frame,
)

__all__ = [
    "__version__",
    "EventRecord",
    "JsonFormatter",
    "PerformanceSeries",
    "PerformanceTable",
    "ResilienceError",
    "ResilienceParameters",
    "SummaryRow",
    "events",
    "events_frame",
    "frame_events",
    "load_parameters",
    "load_project_config",
    "performance_table_from_frame",
    "setup_logging",
    "severity",
    "summarise_frame",
    "summary",
    "summary_frame",
]
