"""
Shared utility helpers.

Pure functions, no I/O.
"""

from __future__ import annotations

import math
import re
from typing import Any, Hashable, Iterable, List

import numpy as np
import pandas as pd


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def key_to_label(key: str) -> str:
    """Convert a camelCase or snake_case key to a display label."""
    label = key.replace("_", " ")
    label = _CAMEL_BOUNDARY.sub(r"\1 \2", label)
    return label[:1].upper() + label[1:]


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def format_number(value: Any) -> str:
    """Render a number the way it reads in JSON: ``5000.0`` becomes ``5000``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def distinct(values: Iterable[Hashable]) -> List[Any]:
    """Unique values in first-seen order."""
    return list(dict.fromkeys(values))


# ---------------------------------------------------------------------------
# DataFrame safety
# ---------------------------------------------------------------------------

def df_json_safe(df: pd.DataFrame) -> pd.DataFrame:
    """Replace +/-inf -> NaN, then NaN -> None so JSON serialization works."""
    if df.empty:
        return df
    tmp = df.replace([np.inf, -np.inf], np.nan)
    tmp = tmp.astype(object)
    return tmp.where(pd.notna(tmp), None)


def df_to_records_safe(df: pd.DataFrame) -> list[dict]:
    """Convert DataFrame to list of dicts with JSON-safe values."""
    return df_json_safe(df).to_dict(orient="records")
