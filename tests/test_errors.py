from __future__ import annotations

import numpy as np

from resilience_core.errors import InvalidThreshold, LengthMismatch, ResilienceError


def test_numpy_scalars_in_context_become_python_scalars() -> None:
    error = LengthMismatch(
        "lengths differ",
        context={"timestamps": np.int64(3), "values": np.float32(2.5), "ok": np.bool_(True)},
    )

    assert error.context == {"timestamps": 3, "values": 2.5, "ok": True}
    assert type(error.context["timestamps"]) is int
    assert type(error.context["values"]) is float
    assert type(error.context["ok"]) is bool


def test_non_scalar_context_values_are_stringified() -> None:
    error = InvalidThreshold("bad", context={"shape": (2, 3), "missing": None})

    assert error.context == {"shape": "(2, 3)", "missing": None}


def test_errors_are_value_errors_without_context() -> None:
    error = ResilienceError("plain")

    assert isinstance(error, ValueError)
    assert error.context == {}
