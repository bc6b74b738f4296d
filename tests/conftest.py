"""Shared fixtures: keep logging configuration from leaking between tests."""

from __future__ import annotations

import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo any ``JsonLoggerFactory.configure`` done by the test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)
