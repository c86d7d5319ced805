"""Configure logging for applications built on resilience-index."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Mapping as MappingABC
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

__all__ = ["JsonFormatter", "setup_logging"]

_ROOT_LOGGER_NAMES = ("resilience_core", "resilience_index")

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RESERVED_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Render records as one JSON object per line, ``extra`` fields included."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key in _RESERVED_ATTRIBUTES or key.startswith("_"):
                continue
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, sort_keys=True)


def _resolve_level(value: Any) -> int:
    if isinstance(value, int):
        return value
    name = str(value or "info").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {value!r}")
    return level


def _build_handler(output: Any) -> logging.Handler:
    target = str(output or "stderr")
    if target == "stderr":
        return logging.StreamHandler(sys.stderr)
    if target == "stdout":
        return logging.StreamHandler(sys.stdout)
    path = Path(target).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, encoding="utf-8")


def setup_logging(config: Mapping[str, Any] | None = None) -> logging.Handler:
    """Attach a handler to the package loggers according to ``config``.

    ``config`` may be a full configuration mapping with a ``logging`` section
    or the section itself. Recognised keys are ``level`` (name or number),
    ``output`` (``stdout``, ``stderr`` or a file path) and ``format``
    (``json`` or ``text``). Calling the function again replaces the handler
    installed by the previous call.
    """

    section: Mapping[str, Any] = {}
    if isinstance(config, MappingABC):
        nested = config.get("logging")
        section = nested if isinstance(nested, MappingABC) else config

    log_format = str(section.get("format", "text")).lower()
    if log_format not in {"json", "text"}:
        raise ValueError(f"Unknown logging format: {log_format!r}")

    level = _resolve_level(section.get("level"))
    handler = _build_handler(section.get("output"))
    if log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    handler.set_name("resilience_index")

    for name in _ROOT_LOGGER_NAMES:
        logger = logging.getLogger(name)
        for existing in list(logger.handlers):
            if existing.get_name() == "resilience_index":
                logger.removeHandler(existing)
                existing.close()
        logger.addHandler(handler)
        logger.setLevel(level)
    return handler
