"""Domain helpers for username validation and search patterns."""
from __future__ import annotations

import re
import string

USERNAME_PATTERN = re.compile(r"[A-Za-z0-9_.-]{3,64}")

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def is_valid_username(value: str | None) -> bool:
    """Return True when username matches the allowed pattern."""
    if not value:
        return False
    return bool(USERNAME_PATTERN.fullmatch(value))


def ascii_lower(value: str) -> str:
    """Lowercase ASCII letters only, leaving every other character as is.

    Mirrors SQL ``lower()`` on SQLite so that search behaves the same on
    every backend we run against.
    """
    return value.translate(_ASCII_LOWER)
