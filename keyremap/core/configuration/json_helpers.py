from __future__ import annotations

import json
import math
from typing import Any


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_number(value: Any) -> bool:
    # bool is an int subclass; JSON keeps them distinct.
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def is_object(value: Any) -> bool:
    return isinstance(value, dict)


def is_array(value: Any) -> bool:
    return isinstance(value, list)


def dump(value: Any) -> str:
    """Compact JSON text for error messages."""

    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)


def canonical(value: Any) -> str:
    """Key-order independent JSON text, used to compare rule sources."""

    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, sort_keys=True)
