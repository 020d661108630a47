"""Snippet key validation."""

from __future__ import annotations

import re
from dataclasses import dataclass

KEY_PATTERN = re.compile(r"[A-Za-z0-9_-]+")

REASON_EMPTY = "empty key"
REASON_SPACE = "contains space"
REASON_CHARACTERS = "invalid characters"

_MESSAGES = {
    REASON_EMPTY: "Snippet key cannot be empty.",
    REASON_SPACE: "Snippet key cannot contain spaces.",
    REASON_CHARACTERS: (
        "Snippet key can only contain letters, numbers, hyphens, and underscores."
    ),
}


@dataclass(frozen=True)
class KeyValidation:
    """Outcome of validating a candidate snippet key."""

    valid: bool
    reason: str = ""

    @property
    def message(self) -> str:
        """User-facing explanation, empty for valid keys."""
        return _MESSAGES.get(self.reason, "")

    def __bool__(self) -> bool:
        return self.valid


def validate_key(key: str | None) -> KeyValidation:
    """Validate a snippet key. The first failing rule wins."""
    if not key or not key.strip():
        return KeyValidation(False, REASON_EMPTY)
    if " " in key:
        return KeyValidation(False, REASON_SPACE)
    if not KEY_PATTERN.fullmatch(key):
        return KeyValidation(False, REASON_CHARACTERS)
    return KeyValidation(True)
