from __future__ import annotations

import datetime
import math
from typing import Any, Optional


def normalize_integer(value: Any) -> Optional[int]:
    """Return the integral value of a parsed scalar, or None if it has none.

    YAML integers arrive as ``int`` and whole numbers written with a fraction
    (``8080.0``) as ``float``; both normalize to ``int``. Booleans, strings,
    non-integral or non-finite floats and containers have no integral value.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        return int(value)

    return None


def scalar_text(value: Any) -> str:
    """Render a YAML scalar as the text a string field would have held."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if value is None:
        return ""
    return str(value)
