"""Coercion helpers for values persisted by the template editor."""
from __future__ import annotations

from typing import Any


def parse_bool(value: Any) -> bool:
    """Stored flags are booleans or the strings produced by form submissions."""
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)
