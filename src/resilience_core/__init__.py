"""Core computation utilities for resilience indices (Matzinger et al. 2018)."""

from __future__ import annotations

from . import classification as _classification
from . import errors as _errors
from . import events as _events
from . import integration as _integration
from . import segmentation as _segmentation
from . import severity as _severity
from . import summary as _summary
from . import timeaxis as _timeaxis

from .classification import *  # noqa: F401,F403
from .errors import *  # noqa: F401,F403
from .events import *  # noqa: F401,F403
from .integration import *  # noqa: F401,F403
from .segmentation import *  # noqa: F401,F403
from .severity import *  # noqa: F401,F403
from .summary import *  # noqa: F401,F403
from .timeaxis import *  # noqa: F401,F403


def _exported(module: object) -> list[str]:
    names = getattr(module, "__all__", None)
    if names is not None:
        return list(names)
    return [name for name in vars(module) if not name.startswith("_")]


__all__ = list(
    dict.fromkeys(
        [
            *_exported(_timeaxis),
            *_exported(_errors),
            *_exported(_integration),
            *_exported(_classification),
            *_exported(_segmentation),
            *_exported(_severity),
            *_exported(_events),
            *_exported(_summary),
        ]
    )
)

del _classification
del _errors
del _events
del _integration
del _segmentation
del _severity
del _summary
del _timeaxis


def __dir__() -> list[str]:
    names = set(__all__) | {name for name in globals() if not name.startswith("_")}
    return sorted(names)
