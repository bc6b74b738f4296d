"""Observability – structured logging ports and helpers."""
from flagsync.observability.logging.protocol import Logger
from flagsync.observability.logging.factory import JsonLoggerFactory
from flagsync.observability.logging.processors import add_error_code, get_logger

__all__ = [
    "JsonLoggerFactory",
    "Logger",
    "add_error_code",
    "get_logger",
]
