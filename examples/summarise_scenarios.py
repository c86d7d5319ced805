"""Example that summarises resilience indices of several scenarios."""

from __future__ import annotations

from io import StringIO

import pandas as pd

from resilience_index import (
    ResilienceParameters,
    frame_events,
    setup_logging,
    summarise_frame,
)

DATA = """timestamp,S2_storage_2020,S3_storage_increase,S4_red_Imp_Surface
2020-06-01 00:00,6.1,6.4,7.2
2020-06-01 00:05,4.8,5.6,7.1
2020-06-01 00:10,3.2,4.4,7.0
2020-06-01 00:15,2.1,3.9,6.9
2020-06-01 00:20,2.9,4.6,6.9
2020-06-01 00:25,4.4,5.8,7.0
2020-06-01 00:30,5.9,6.3,7.1
2020-06-01 00:35,3.7,6.2,7.1
2020-06-01 00:40,5.2,6.4,7.2
"""


def main() -> None:
    setup_logging({"level": "info", "output": "stderr", "format": "text"})
    frame = pd.read_csv(StringIO(DATA), parse_dates=["timestamp"])
    parameters = ResilienceParameters(
        acceptable=4.0, worst=0.0, event_sep_time=300.0, signal_width=300.0
    )
    print(summarise_frame(frame, parameters, time_column="timestamp").to_string(index=False))
    print()
    events = frame_events(
        frame, "S2_storage_2020", parameters, time_column="timestamp", as_datetime=True
    )
    print(events.to_string(index=False))


if __name__ == "__main__":
    main()
