from __future__ import annotations

import logging
import sys
from pathlib import Path

import numpy as np
import pytest


ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from tests.helpers import (  # noqa: E402
    SCENARIO_PA,
    SCENARIO_PMAX,
    build_oxygen_frame,
)


@pytest.fixture
def scenario_series() -> tuple[np.ndarray, np.ndarray]:
    """Six one-second samples failing at indices 2 and 3."""

    timestamps = np.arange(6, dtype=float)
    performance = np.array([3.0, 3.0, 1.0, 1.0, 3.0, 3.0])
    return timestamps, performance


@pytest.fixture
def scenario_thresholds() -> tuple[float, float]:
    return SCENARIO_PA, SCENARIO_PMAX


@pytest.fixture(scope="session")
def oxygen_frame():
    """Synthetic dissolved oxygen scenarios on a five minute grid."""

    return build_oxygen_frame()


@pytest.fixture
def restore_package_loggers():
    names = ("resilience_core", "resilience_index")
    saved = {
        name: (list(logging.getLogger(name).handlers), logging.getLogger(name).level)
        for name in names
    }
    yield
    for name, (handlers, level) in saved.items():
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            if handler not in handlers:
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(level)
