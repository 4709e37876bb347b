# wildfire_radar/zones.py
from __future__ import annotations

from types import MappingProxyType

# Zone id -> human-readable label. Order is the order zones are laid out.
ZONE_LABELS = MappingProxyType(
    {
        "0_mile_buffer": "Perimeter or Reported Location",
        "1_mile_buffer": "1 Mile Buffer",
        "3_mile_buffer": "3 Mile Buffer",
        "5_mile_buffer": "5 Mile Buffer",
    }
)

LOG_SCALE_URL = "https://www.mathsisfun.com/definitions/logarithmic-scale.html"


def zone_label(zone_id: str) -> str:
    return ZONE_LABELS.get(zone_id, zone_id)


def build_footer_note(zone_id: str, html: bool = False) -> str:
    """
    Caption placed under a chart, naming the zone the scores are relative to.
    Unknown zone ids are named as-is.
    """
    label = zone_label(zone_id)
    if html:
        return (
            f'Scores are <a href="{LOG_SCALE_URL}" '
            f'target="_blank" rel="noopener noreferrer">log-scaled</a> per axis, relative to the highest value in the '
            f"<strong>{label} zone</strong> for current wildfires."
        )
    return (
        "Scores are log-scaled per axis, relative to the highest value in the "
        f"{label} zone for current wildfires."
    )
