from __future__ import annotations

import re
from typing import Any

INTEGER_RE = re.compile(r"-?\d+")
TRUE_TOKENS = frozenset({"1", "true", "yes", "on"})
FALSE_TOKENS = frozenset({"0", "false", "no", "off"})
ACTIVE_TOKENS = frozenset({"1", "true"})


# -----------------------------------------------------------------------------
def parse_int(value: Any) -> int | None:
    """Best-effort integer from JSON values; strings keep their first number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        match = INTEGER_RE.search(value)
        return int(match.group(0)) if match else None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


# -----------------------------------------------------------------------------
def coerce_positive_int(value: Any, default: int = 1) -> int:
    candidate = parse_int(value)
    if candidate is None or candidate < 1:
        return default
    return candidate


# -----------------------------------------------------------------------------
def coerce_int(
    value: Any, default: int, minimum: int | None = None, maximum: int | None = None
) -> int:
    candidate = parse_int(value)
    if candidate is None:
        candidate = default
    if minimum is not None:
        candidate = max(candidate, minimum)
    if maximum is not None:
        candidate = min(candidate, maximum)
    return candidate


# -----------------------------------------------------------------------------
def coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        token = value.strip().lower()
        if token in TRUE_TOKENS:
            return True
        if token in FALSE_TOKENS:
            return False
    return default


# -----------------------------------------------------------------------------
def coerce_str_or_none(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


# -----------------------------------------------------------------------------
def coerce_string_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    items = value if isinstance(value, (list, tuple)) else [value]
    paths: list[str] = []
    for item in items:
        if item is None:
            continue
        text = str(item).strip()
        if text:
            paths.append(text)
    return tuple(paths)


# -----------------------------------------------------------------------------
def is_active_flag(value: Any) -> bool:
    # RF2 releases encode the active column as "1"/"0"
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in ACTIVE_TOKENS
    return False


__all__ = [
    "coerce_bool",
    "coerce_int",
    "coerce_positive_int",
    "coerce_str_or_none",
    "coerce_string_tuple",
    "is_active_flag",
    "parse_int",
]
