from __future__ import annotations

import numpy as np
import pytest

from resilience_core.errors import InsufficientSamples, InvalidMethod, InvalidThreshold
from resilience_core.severity import severity, severity_from_clipped
from tests.helpers import mirror_series


def test_scenario_severity(scenario_series, scenario_thresholds) -> None:
    timestamps, performance = scenario_series
    pa, pmax = scenario_thresholds

    # Deficit 0, 0, 1, 1, 0, 0 integrates to 0.5 + 1 + 0.5 = 2 over 5 s.
    assert severity(timestamps, performance, pa, pmax) == pytest.approx(2.0 / 2.0 / 5.0)


def test_never_exceeding_series_has_zero_severity() -> None:
    assert severity([0, 1, 2], [5.0, 6.0, 7.0], pa=2.0, pmax=0.0) == 0.0


def test_constant_failure_at_pmax_has_unit_severity() -> None:
    assert severity([0, 10, 20], [0.0, 0.0, 0.0], pa=2.0, pmax=0.0) == pytest.approx(1.0)


@pytest.mark.parametrize("method", [1, 2])
def test_methods_give_identical_severity(method: int) -> None:
    rng = np.random.default_rng(11)
    times = np.cumsum(rng.uniform(0.1, 3.0, size=500))
    performance = rng.normal(loc=3.0, scale=1.5, size=500)

    reference = severity(times, performance, 2.0, 0.0, integral_method=1)

    assert severity(times, performance, 2.0, 0.0, integral_method=method) == pytest.approx(
        reference, abs=1e-9
    )


def test_threshold_direction_is_symmetric() -> None:
    rng = np.random.default_rng(5)
    times = np.cumsum(rng.uniform(0.5, 2.0, size=200))
    performance = rng.normal(loc=3.0, scale=1.0, size=200)

    below = severity(times, performance, 2.0, 0.0)
    above = severity(times, mirror_series(performance, 2.0), 2.0, 4.0)

    assert above == pytest.approx(below)
    assert below > 0.0


def test_severity_is_non_negative_for_upper_bounds() -> None:
    value = severity([0, 1, 2, 3], [10.0, 25.0, 30.0, 15.0], pa=20.0, pmax=30.0)

    assert value > 0.0


def test_single_sample_span_is_rejected() -> None:
    with pytest.raises(InsufficientSamples):
        severity_from_clipped([1.0], [0.0], 2.0, 0.0)


def test_zero_length_span_is_rejected() -> None:
    with pytest.raises(InsufficientSamples):
        severity_from_clipped([1.0, 1.0], [0.0, 0.0], 2.0, 0.0)


def test_invalid_threshold_and_method() -> None:
    with pytest.raises(InvalidThreshold):
        severity([0, 1], [1.0, 1.0], pa=1.0, pmax=1.0)
    with pytest.raises(InvalidMethod):
        severity([0, 1], [1.0, 1.0], pa=2.0, pmax=0.0, integral_method=3)  # type: ignore[arg-type]
