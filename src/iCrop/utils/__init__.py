"""Shared helpers for logging and file IO."""

from .logging import get_logger, set_verbose

__all__ = ["get_logger", "set_verbose"]
