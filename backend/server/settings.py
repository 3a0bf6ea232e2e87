"""Environment-driven settings for the HTTP service.

Values come from the process environment, with a ``.env`` file loaded first.
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("uvicorn.error")

DEFAULT_MAX_UPLOAD_ROWS = 2000


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip() or default


def cors_origins() -> List[str]:
    raw = _env("TABLE_SCHEMA_CORS_ORIGINS", "*") or "*"
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def max_upload_rows() -> int:
    """Rows of an uploaded CSV used for inference."""
    raw = _env("TABLE_SCHEMA_MAX_UPLOAD_ROWS")
    if raw is None:
        return DEFAULT_MAX_UPLOAD_ROWS
    try:
        value = int(raw)
    except ValueError:
        logger.warning(
            "Invalid TABLE_SCHEMA_MAX_UPLOAD_ROWS=%r, using %d", raw, DEFAULT_MAX_UPLOAD_ROWS,
        )
        return DEFAULT_MAX_UPLOAD_ROWS
    return value if value > 0 else DEFAULT_MAX_UPLOAD_ROWS


def log_level() -> str:
    return (_env("TABLE_SCHEMA_LOG_LEVEL", "INFO") or "INFO").upper()
