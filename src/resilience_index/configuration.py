"""Helpers to load resilience parameters from YAML and ``pyproject.toml``."""

from __future__ import annotations

from collections.abc import Iterable, Mapping as ABCMapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - Python < 3.11 fallback
    import tomli as tomllib  # type: ignore

from resilience_core.errors import InvalidParameter, InvalidThreshold
from resilience_core.integration import resolve_integral_method
from resilience_index.resources import default_parameters_resource

__all__ = [
    "ResilienceParameters",
    "load_parameters",
    "load_project_config",
]

_PARAMETERS_FILENAME = "resilience.yaml"
_PROJECT_FILENAME = "pyproject.toml"
_TOOL_SECTION = "resilience_index"

# Accepted spellings per field; the camel-case names follow the R package.
_FIELD_ALIASES: Mapping[str, tuple[str, ...]] = {
    "acceptable": ("acceptable", "pa", "Pa"),
    "worst": ("worst", "pmax", "Pmax"),
    "event_sep_time": ("event_sep_time", "evtSepTime"),
    "signal_width": ("signal_width", "signalWidth"),
    "integral_method": ("integral_method",),
}


@dataclass(frozen=True)
class ResilienceParameters:
    """Thresholds and event settings shared by every resilience computation."""

    acceptable: float
    worst: float
    event_sep_time: float
    signal_width: float
    integral_method: int = 2

    def __post_init__(self) -> None:
        if float(self.acceptable) == float(self.worst):
            raise InvalidThreshold(
                "acceptable performance and maximal failure must differ",
                context={"pa": self.acceptable, "pmax": self.worst},
            )
        for name in ("event_sep_time", "signal_width"):
            value = float(getattr(self, name))
            if not value >= 0.0:
                raise InvalidParameter(
                    f"{name} must be a non-negative number of seconds",
                    context={name: value},
                )
        resolve_integral_method(self.integral_method)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "ResilienceParameters":
        """Build parameters from a configuration mapping.

        Unknown keys (such as a ``logging`` section) are ignored. Missing
        thresholds raise :class:`ValueError`.
        """

        values: dict[str, Any] = {}
        missing: list[str] = []
        for field_name, aliases in _FIELD_ALIASES.items():
            for alias in aliases:
                if alias in payload:
                    values[field_name] = payload[alias]
                    break
            else:
                if field_name != "integral_method":
                    missing.append(field_name)
        if missing:
            raise ValueError(
                "Missing resilience parameters: " + ", ".join(sorted(missing))
            )
        return cls(
            acceptable=float(values["acceptable"]),
            worst=float(values["worst"]),
            event_sep_time=float(values["event_sep_time"]),
            signal_width=float(values["signal_width"]),
            integral_method=int(values.get("integral_method", 2)),
        )

    def as_dict(self) -> Mapping[str, Any]:
        return {
            "acceptable": self.acceptable,
            "worst": self.worst,
            "event_sep_time": self.event_sep_time,
            "signal_width": self.signal_width,
            "integral_method": self.integral_method,
        }


def load_parameters(
    path: str | Path | None = None,
    *,
    search_paths: Iterable[str | Path] | None = None,
) -> Mapping[str, Any]:
    """Load a parameter file merged over the packaged defaults.

    Parameters
    ----------
    path:
        Path to a YAML file. When supplied the search order is skipped and a
        missing file raises :class:`FileNotFoundError`.
    search_paths:
        Optional directories or files to inspect. Directories are resolved
        against ``resilience.yaml``. The first existing file wins; without a
        match only the packaged defaults are returned.
    """

    resource = default_parameters_resource()
    result = _load_yaml_from_text(
        resource.read_text(encoding="utf-8"), source=str(resource)
    )

    candidate: Path | None = None
    if path is not None:
        candidate = Path(path).expanduser()
        if not candidate.is_file():
            raise FileNotFoundError(candidate)
    elif search_paths is not None:
        for entry in search_paths:
            entry_path = Path(entry).expanduser()
            if entry_path.is_dir():
                entry_path = entry_path / _PARAMETERS_FILENAME
            if entry_path.is_file():
                candidate = entry_path
                break

    if candidate is not None:
        payload = candidate.read_text(encoding="utf-8")
        _deep_merge(result, _load_yaml_from_text(payload, source=str(candidate)))
    return MappingProxyType(result)


def load_project_config(path: str | Path) -> tuple[dict[str, Any], Path] | None:
    """Load the ``[tool.resilience_index]`` section from ``pyproject.toml``.

    ``path`` may point at the file itself or at the directory holding it.
    Returns ``None`` when the file or the section does not exist.
    """

    candidate = Path(path).expanduser()
    if candidate.name != _PROJECT_FILENAME:
        if candidate.suffix:
            return None
        candidate = candidate / _PROJECT_FILENAME
    candidate = candidate.resolve(strict=False)
    if not candidate.is_file():
        return None

    with candidate.open("rb") as handle:
        try:
            data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"Invalid TOML in project configuration: {candidate}") from exc

    tool_section = data.get("tool")
    if not isinstance(tool_section, ABCMapping):
        return None
    section = tool_section.get(_TOOL_SECTION)
    if not isinstance(section, ABCMapping):
        return None
    return _deep_copy_mapping(section), candidate


def _deep_merge(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        key_str = str(key)
        existing = target.get(key_str)
        if isinstance(existing, ABCMapping) and isinstance(value, ABCMapping):
            merged = dict(existing)
            _deep_merge(merged, value)
            target[key_str] = merged
        elif isinstance(value, ABCMapping):
            target[key_str] = _deep_copy_mapping(value)
        else:
            target[key_str] = value


def _deep_copy_mapping(source: Mapping[str, Any]) -> dict[str, Any]:
    copied: dict[str, Any] = {}
    for key, value in source.items():
        key_str = str(key)
        if isinstance(value, ABCMapping):
            copied[key_str] = _deep_copy_mapping(value)
        else:
            copied[key_str] = value
    return copied


def _load_yaml_from_text(payload: str, *, source: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(payload)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in parameter file: {source}") from exc

    if data is None:
        return {}
    if not isinstance(data, ABCMapping):
        raise TypeError(f"Parameter file {source!s} must decode to a mapping")
    return _deep_copy_mapping(data)
