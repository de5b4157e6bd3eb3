"""
Human-readable rendering of statistic results.
"""

from typing import Iterable, Optional

import numpy as np

UNDEFINED_TEXT = "n/a"
MISSING_TEXT = "_"


def format_number(value: Optional[float], precision: int = 2) -> str:
    """Rounds to `precision` decimals and drops trailing zeros (2.50 -> "2.5")."""
    if value is None:
        return UNDEFINED_TEXT
    text = np.format_float_positional(float(value), precision=precision, unique=True, trim="-")
    return "0" if text == "-0" else text


def format_vector(values: Iterable[Optional[float]], precision: int = 2) -> str:
    items = [MISSING_TEXT if v is None else format_number(v, precision) for v in values]
    return "[" + ", ".join(items) + "]"
