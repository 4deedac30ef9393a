from __future__ import annotations

from typing import Any

import pandas as pd

from INJECTABLES.server.utils.patterns import WHITESPACE_RE


# -----------------------------------------------------------------------------
def coerce_text(value: Any) -> str | None:
    """Trimmed text for catalog cells, with None, NaN and pd.NA mapped to None."""
    if isinstance(value, str):
        return value.strip() or None
    if value is None or (pd.api.types.is_scalar(value) and pd.isna(value)):
        return None
    return str(value).strip() or None


# -----------------------------------------------------------------------------
def normalize_whitespace(value: str) -> str:
    return WHITESPACE_RE.sub(" ", value).strip() if value else ""


# -----------------------------------------------------------------------------
def strip_line_terminators(line: str) -> str:
    return line.rstrip("\r\n")


__all__ = [
    "coerce_text",
    "normalize_whitespace",
    "strip_line_terminators",
]
