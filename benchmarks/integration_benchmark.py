from __future__ import annotations

import numpy as np
import pytest

from resilience_core.integration import INTEGRAL_LOOP, INTEGRAL_VECTORIZED, integrate
from resilience_core.summary import PerformanceTable, summary

pytestmark = pytest.mark.benchmark(group="integration")

_SAMPLES = 23425  # size of the dissolved oxygen scenarios


def _series(samples: int = _SAMPLES) -> tuple[np.ndarray, np.ndarray]:
    rng = np.random.default_rng(2018)
    timestamps = np.arange(samples, dtype=float) * 300.0
    performance = 6.0 + np.sin(timestamps / 86400.0 * 2.0 * np.pi) + rng.normal(
        scale=1.5, size=samples
    )
    return timestamps, performance


def test_pairwise_loop(benchmark: pytest.BenchmarkFixture) -> None:
    timestamps, performance = _series()

    integral = benchmark(integrate, timestamps, performance, INTEGRAL_LOOP)

    assert integral.shape == timestamps.shape


def test_shifted_arrays(benchmark: pytest.BenchmarkFixture) -> None:
    timestamps, performance = _series()

    integral = benchmark(integrate, timestamps, performance, INTEGRAL_VECTORIZED)

    np.testing.assert_allclose(
        integral, integrate(timestamps, performance, INTEGRAL_LOOP), atol=1e-9
    )


def test_summary_of_four_scenarios(benchmark: pytest.BenchmarkFixture) -> None:
    timestamps, performance = _series()
    table = PerformanceTable.from_mapping(
        {f"S{index}": performance + index for index in range(2, 6)}
    )

    rows = benchmark(summary, timestamps, table, 4.0, 0.0, 300.0, 300.0)

    assert len(rows) == 4
