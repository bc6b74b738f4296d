"""Observability – structlog processors and get_logger helper."""
from __future__ import annotations

from typing import Any

import structlog


def add_error_code(
    logger: Any,           # noqa: ARG001
    method_name: str,      # noqa: ARG001
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """structlog processor that flattens a flagsync error passed as ``exc``.

    ``log.error("...", exc=err)`` becomes ``error_code`` / ``error`` fields so
    JSON output stays flat and machine-readable.
    """
    exc = event_dict.pop("exc", None)
    if exc is None:
        return event_dict
    code = getattr(exc, "code", None)
    if code is not None:
        event_dict.setdefault("error_code", code)
    event_dict.setdefault("error", getattr(exc, "message", None) or repr(exc))
    return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["add_error_code", "get_logger"]
