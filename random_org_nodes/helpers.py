from __future__ import annotations

import math
from typing import Any


def is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def is_integral(value: Any) -> bool:
    """True for ints and for floats with no fractional part; bools are not numbers."""
    if not is_number(value):
        return False
    return isinstance(value, int) or float(value).is_integer()
