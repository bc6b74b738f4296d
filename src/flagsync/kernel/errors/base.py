"""Root error class for the flagsync error hierarchy."""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Base class for every error flagsync raises.

    ``message`` is what the CLI prints after ``Error:``.  ``code`` names the
    failure in log events (the ``error_code`` key); ``detail`` carries the
    collection, operation or URL involved.  ``cause`` keeps the store or
    driver exception that was translated.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        """One JSON line: code, message, detail and the cause's repr."""
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Plain dict behind ``__str__``; subclasses add their own keys."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["BaseError"]
