"""Best-effort parsing for values read back from caches and webhook payloads."""

from __future__ import annotations

import math
from typing import Any


def parse_float(value: Any) -> float | None:
    """Parse a finite float.  Returns ``None`` for unparseable, NaN or infinite input."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        stripped = value.strip().rstrip("%").strip()
        if not stripped:
            return None
        try:
            result = float(stripped)
        except ValueError:
            return None
    else:
        return None
    return result if math.isfinite(result) else None


def parse_int(value: Any) -> int | None:
    """Best-effort integer parsing (truncates floats).  Returns ``None`` for unparseable input."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    parsed = parse_float(value)
    if parsed is None:
        return None
    return int(parsed)


def parse_text(value: Any) -> str | None:
    """Decode bytes and strip whitespace; empty results become ``None``."""
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None
