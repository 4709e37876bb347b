from __future__ import annotations

import json
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from wildfire_radar.zones import ZONE_LABELS

BASE_PATH = Path(__file__).resolve().parents[1]
DATA_DIR = Path(os.environ.get("WILDFIRE_RADAR_DATA_DIR", BASE_PATH / "data"))

INCIDENT_MAP_FILE = "incident_map.json"
LAST_UPDATED_FILE = "last_updated.json"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class IncidentRef:
    region: str
    name: str
    uid: str


@dataclass
class ZoneResult:
    zone: str
    payload: Optional[dict] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.payload is not None


# -------------------------
# Utils
# -------------------------
def _read_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Missing data file: {path}")
    try:
        with path.open(encoding="utf-8") as fh:
            return json.load(fh)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc


def _leading_int(name: str) -> Optional[int]:
    m = _LEADING_INT.match(name)
    return int(m.group(1)) if m else None


def chart_id(region: str, uid: str, zone: str) -> str:
    return f"{region}--{uid}--{zone}"


def chart_path(data_dir: Path, region: str, uid: str, zone: str) -> Path:
    return Path(data_dir) / region / uid / f"{zone}.json"


def incident_name_from_title(title: str) -> str:
    """
    "123 Smith Fire: 1 Mile Buffer" -> "123 Smith Fire"
    """
    return str(title).split(":")[0].strip()


# -------------------------
# last_updated.json
# -------------------------
def extract_datetime(payload: Any) -> Optional[str]:
    """
    Datetime string from a parsed last_updated payload.
    Accepts a bare string, or a mapping whose value is a string under ANY key
    (the producer picks the key name). Everything else -> None.
    """
    if isinstance(payload, str):
        return payload
    if not isinstance(payload, Mapping):
        return None
    return next((v for v in payload.values() if isinstance(v, str)), None)


def load_last_updated(data_dir: Path = DATA_DIR) -> Optional[str]:
    """
    Optional file: missing or unreadable -> None.
    """
    try:
        payload = _read_json(Path(data_dir) / LAST_UPDATED_FILE)
    except (OSError, ValueError):
        return None
    return extract_datetime(payload)


# -------------------------
# Incidents
# -------------------------
def load_incident_map(data_dir: Path = DATA_DIR) -> Dict[str, Dict[str, str]]:
    """
    incident_map.json: {region: {incident_name: uid}}
    """
    incident_map = _read_json(Path(data_dir) / INCIDENT_MAP_FILE)
    if not isinstance(incident_map, Mapping):
        raise ValueError(f"{INCIDENT_MAP_FILE} must be an object of regions.")
    for region, incidents in incident_map.items():
        if not isinstance(incidents, Mapping):
            raise ValueError(f"Region '{region}' must map incident names to uids.")
    return {region: dict(incidents) for region, incidents in incident_map.items()}


def build_incident_lookup(incident_map: Mapping) -> Dict[str, IncidentRef]:
    """
    Flat name -> IncidentRef lookup (last region wins on duplicate names).
    """
    lookup: Dict[str, IncidentRef] = {}
    for region, incidents in incident_map.items():
        for name, uid in incidents.items():
            lookup[name] = IncidentRef(region=region, name=name, uid=str(uid))
    return lookup


def sort_incidents_descending(names: Iterable[str]) -> List[str]:
    """
    Highest numeric prefix first. Names without a numeric prefix go last,
    in their original order.
    """
    names = list(names)
    numbered = [n for n in names if _leading_int(n) is not None]
    other = [n for n in names if _leading_int(n) is None]
    return sorted(numbered, key=_leading_int, reverse=True) + other


def incident_names(incident_map: Mapping, region: Optional[str] = None) -> List[str]:
    if region:
        return sort_incidents_descending(incident_map.get(region, {}).keys())
    return sort_incidents_descending(name for incidents in incident_map.values() for name in incidents)


def resolve_incident(lookup: Mapping[str, IncidentRef], name: Optional[str]) -> Optional[IncidentRef]:
    if not name:
        return None
    return lookup.get(name)


# -------------------------
# Chart payloads
# -------------------------
def load_chart_payload(data_dir: Path, region: str, uid: str, zone: str) -> dict:
    """
    One zone chart payload. Raises FileNotFoundError when the file is absent,
    another OSError when it cannot be read, and ValueError when it is not a
    payload with a "data" object.
    """
    path = chart_path(data_dir, region, uid, zone)
    payload = _read_json(path)
    if not isinstance(payload, Mapping) or not isinstance(payload.get("data"), Mapping):
        raise ValueError(f"Chart payload {path} has no 'data' object.")
    return payload


def load_zone_payloads(
    data_dir: Path,
    region: str,
    uid: str,
    zones: Iterable[str] = tuple(ZONE_LABELS),
) -> Dict[str, ZoneResult]:
    """
    Every zone of one incident, in zone order. A failing zone is reported in
    its ZoneResult and does not stop the others.
    """
    results: Dict[str, ZoneResult] = {}
    for zone in zones:
        try:
            results[zone] = ZoneResult(zone=zone, payload=load_chart_payload(data_dir, region, uid, zone))
        except (OSError, ValueError) as exc:
            results[zone] = ZoneResult(zone=zone, error=str(exc))
    return results
