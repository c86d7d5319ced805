"""Logging utilities for resilience-index."""

from resilience_index.logging.config import JsonFormatter, setup_logging

__all__ = ["JsonFormatter", "setup_logging"]
