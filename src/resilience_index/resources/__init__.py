"""Bundled resources distributed with resilience-index."""

from __future__ import annotations

from importlib import resources
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from importlib.resources.abc import Traversable

__all__ = ["default_parameters_resource"]

_PARAMETERS_NAME = "parameters.yaml"


def default_parameters_resource() -> Traversable:
    """Return the packaged default parameter file."""

    return resources.files(__name__).joinpath("config").joinpath(_PARAMETERS_NAME)
