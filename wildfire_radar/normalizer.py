# wildfire_radar/normalizer.py
# ============================================================
# AXIS NORMALIZATION
# ------------------------------------------------------------
# A chart payload looks like:
#   {
#     "title": "...", "subtitle": "...",
#     "data": {"Fuel": 62.3, "Population": null, ...},   # ordered
#     "raw":  {"Fuel": {"value": 26400, "metric": "acres burned"},
#              "Critical Infrastructure": [{...}, {...}]}  # optional
#   }
#
# Null vs zero:
#   - null  -> metric NOT assessed: plotted at 0 (polygon stays closed),
#              no dot, muted label, tooltip "No data available"
#   - 0     -> assessed and scored 0: plotted at 0 WITH a dot
#
# display_value is geometry only. Every semantic decision reads
# score / is_null.
# ============================================================

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, List, Optional, Union

import pandas as pd

from wildfire_radar.label_format import format_entry, to_fixed

NO_DATA_TEXT = "No data available"
BULLET = "• "
RAW_PART_SEPARATOR = " | "

RawDetail = Union[Mapping, Sequence, None]


@dataclass(frozen=True)
class AxisView:
    label: str
    score: Optional[float]      # None -> not assessed
    display_value: float        # 0 when score is None
    is_null: bool
    raw_detail: RawDetail = None


# -----------------------------
# Helpers
# -----------------------------
def _coerce_score(value: Any) -> Optional[float]:
    """
    Scores are numbers or null. Anything else is coerced when it parses
    as a number, otherwise it counts as not assessed.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _is_entry_list(raw_detail: Any) -> bool:
    return isinstance(raw_detail, Sequence) and not isinstance(raw_detail, (str, bytes))


def _raw_lookup(payload: Mapping) -> Mapping:
    raw = payload.get("raw")
    return raw if isinstance(raw, Mapping) else {}


# -----------------------------
# Main API
# -----------------------------
def classify(payload: Mapping) -> List[AxisView]:
    """
    One AxisView per entry of payload["data"], in insertion order.
    Missing/odd optional fields degrade to "no raw detail"; nothing raises.
    """
    raw = _raw_lookup(payload)
    views: List[AxisView] = []
    for label, value in payload["data"].items():
        score = _coerce_score(value)
        is_null = score is None
        views.append(
            AxisView(
                label=label,
                score=score,
                display_value=0 if is_null else score,
                is_null=is_null,
                raw_detail=raw.get(label),
            )
        )
    return views


def tooltip_text(view: AxisView) -> Union[str, List[str]]:
    """
    Tooltip body for one axis.

    null axis            -> "No data available" (raw detail ignored)
    no raw detail        -> "• Score: 62.3 / 100"
    raw detail available -> ["• 26,400 acres burned", "• Score: 62.3 / 100"]

    Composite axes (a list of raw entries) are joined on one line with
    " | "; entries without a value are dropped.
    """
    if view.is_null:
        return NO_DATA_TEXT

    score_line = f"{BULLET}Score: {to_fixed(float(view.score), 1)} / 100"

    raw_detail = view.raw_detail
    if raw_detail is None:
        return score_line

    if _is_entry_list(raw_detail):
        parts = [p for p in (format_entry(e) for e in raw_detail) if p]
        if parts:
            return [BULLET + RAW_PART_SEPARATOR.join(parts), score_line]
        return score_line

    formatted = format_entry(raw_detail)
    return [BULLET + formatted, score_line] if formatted else score_line


def axes_frame(views: List[AxisView]) -> pd.DataFrame:
    """
    Tabular preview of the axes (one row per axis, chart order).
    Columns: axis, score_0100, display_value, is_null, tooltip
    """
    rows = []
    for v in views:
        text = tooltip_text(v)
        rows.append(
            {
                "axis": v.label,
                "score_0100": v.score,
                "display_value": v.display_value,
                "is_null": v.is_null,
                "tooltip": text if isinstance(text, str) else " / ".join(text),
            }
        )
    return pd.DataFrame(rows, columns=["axis", "score_0100", "display_value", "is_null", "tooltip"])
