"""Kernel store – record identifier generation."""
from __future__ import annotations

import secrets
import string

RECORD_ID_LENGTH = 15
_ALPHABET = string.ascii_lowercase + string.digits


def new_record_id() -> str:
    """Return a random 15-character lowercase alphanumeric record id."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(RECORD_ID_LENGTH))


__all__ = ["RECORD_ID_LENGTH", "new_record_id"]
