# wildfire_radar/label_format.py
from __future__ import annotations

import math
import numbers
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, List, Optional, Union

MAX_LABEL_CHARS = 14


# -----------------------------
# Numbers
# -----------------------------
def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a measurement
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def to_fixed(value: float, digits: int = 1) -> str:
    """
    Fixed-point text of a float, ties rounded up on the exact binary value
    (same digits a browser prints for value.toFixed(digits)).
    """
    if not math.isfinite(value):
        return str(value)
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_number(value: Any) -> str:
    """
    Raw value -> display text.
    - None -> "N/A"
    - non-numeric -> str(value)
    - integer-valued -> grouped, no decimals (26400 -> "26,400")
    - otherwise grouped, at most one decimal (3.14159 -> "3.1")
    """
    if value is None:
        return "N/A"
    if not _is_number(value):
        return str(value)
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if float(value).is_integer():
        text = f"{int(value):,}"
    else:
        rounded = Decimal(repr(float(value))).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        text = f"{int(rounded):,}" if rounded == rounded.to_integral_value() else f"{rounded:,.1f}"

    # negatives that round to zero keep the sign (-0.04 -> "-0")
    if text == "0" and math.copysign(1.0, float(value)) < 0:
        return "-0"
    return text


def format_entry(entry: Any) -> Optional[str]:
    """
    One {value, metric} raw entry -> "26,400 acres burned".
    Returns None when there is nothing to show so callers can drop it.
    """
    if not isinstance(entry, Mapping):
        return None
    value = entry.get("value")
    if value is None:
        return None
    formatted = format_number(value)
    metric = entry.get("metric")
    return f"{formatted} {metric}" if metric else formatted


# -----------------------------
# Axis labels
# -----------------------------
def wrap_label(text: str, max_chars: int = MAX_LABEL_CHARS) -> Union[str, List[str]]:
    """
    Greedy word wrap for point labels.
    Short labels come back unchanged (a str); long ones as a list of lines.
    A single word longer than max_chars is kept whole on its own line.
    """
    if len(text) <= max_chars:
        return text

    lines: List[str] = []
    line = ""
    for word in text.split(" "):
        candidate = f"{line} {word}" if line else word
        if len(candidate) > max_chars and line:
            lines.append(line)
            line = word
        else:
            line = candidate
    if line:
        lines.append(line)
    return lines
