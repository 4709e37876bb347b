import argparse
import math
import os
import sys
from pathlib import Path

import matplotlib.pyplot as plt

from wildfire_radar.chart_renderer import ZONE_LABELS, build_footer_note, render
from wildfire_radar.data_loader import (
    BASE_PATH,
    DATA_DIR,
    build_incident_lookup,
    chart_id,
    chart_path,
    incident_name_from_title,
    incident_names,
    load_chart_payload,
    load_incident_map,
    load_last_updated,
    load_zone_payloads,
    resolve_incident,
)
from wildfire_radar.normalizer import axes_frame, classify

PROCESSED_DIR = Path(os.environ.get("WILDFIRE_RADAR_OUTPUT_DIR", BASE_PATH / "data" / "processed"))

PAGE_BG = "#0f172a"
COLOR_TITLE = "#f1f5f9"
COLOR_SUBTITLE = "#94a3b8"
COLOR_FOOTER = "#64748b"
COLOR_ERROR = "#f87171"


def _finish(fig, handles, outfile: Path, show: bool) -> None:
    outfile.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(outfile, dpi=150, facecolor=fig.get_facecolor())
    print(f"✅ Exported: {outfile}")
    if show:
        plt.show()
    for handle in handles:
        handle.destroy()
    plt.close(fig)


def _print_axes(payload: dict) -> None:
    print(axes_frame(classify(payload)).to_string(index=False))


# =========================
# LIST (region / incident picker)
# =========================
def cmd_list(args) -> int:
    incident_map = load_incident_map(args.data_dir)

    if args.incident:
        incident = resolve_incident(build_incident_lookup(incident_map), args.incident)
        if incident is None:
            print(f"❌ Unknown incident: {args.incident}")
            return 1
        print(f"✅ {incident.name}  ->  {incident.region}/{incident.uid}")
        return 0

    if args.region and args.region not in incident_map:
        print(f"❌ Unknown region: {args.region}")
        return 1

    regions = [args.region] if args.region else sorted(incident_map)
    print(f"✅ Regions: {len(regions)}")
    for region in regions:
        print(f"\n{region}")
        for name in incident_names(incident_map, region):
            print(f"  {name}  ->  {region}/{incident_map[region][name]}")

    print("\nZones:")
    for zone, label in ZONE_LABELS.items():
        print(f"  {zone:<15} {label}")
    return 0


# =========================
# CHART (one zone, full view)
# =========================
def cmd_chart(args) -> int:
    try:
        payload = load_chart_payload(args.data_dir, args.region, args.uid, args.zone)
    except (OSError, ValueError) as exc:
        print(f"❌ Failed to load chart data: {exc}")
        return 1

    print(f"✅ Loaded: {chart_path(args.data_dir, args.region, args.uid, args.zone)}")
    _print_axes(payload)

    fig = plt.figure(figsize=(9, 10), facecolor=PAGE_BG)
    header, body, footer = fig.subfigures(3, 1, height_ratios=[1.2, 10, 0.8], facecolor="none")

    header.text(0.02, 0.62, payload.get("title", ""), color=COLOR_TITLE, fontsize=15, weight="bold")
    header.text(0.02, 0.22, payload.get("subtitle", ""), color=COLOR_SUBTITLE, fontsize=10)
    last_updated = load_last_updated(args.data_dir)
    if last_updated:
        header.text(0.98, 0.62, f"Last Updated: {last_updated}", color=COLOR_SUBTITLE, fontsize=8, ha="right")

    footer.text(0.5, 0.5, build_footer_note(args.zone), color=COLOR_FOOTER, fontsize=8, ha="center", va="center", wrap=True)

    handle = render(body, payload, maintain_aspect_ratio=False)

    outfile = Path(args.out) if args.out else PROCESSED_DIR / f"{chart_id(args.region, args.uid, args.zone)}.png"
    _finish(fig, [handle], outfile, args.show)
    return 0


# =========================
# INCIDENT (all zones, grid)
# =========================
def cmd_incident(args) -> int:
    results = load_zone_payloads(args.data_dir, args.region, args.uid)

    first = next((r for r in results.values() if r.ok), None)
    incident_name = incident_name_from_title(first.payload.get("title", "")) if first else args.uid

    ncols = 2
    nrows = max(1, math.ceil(len(results) / ncols))
    fig = plt.figure(figsize=(7 * ncols, 7.5 * nrows), facecolor=PAGE_BG)
    fig.suptitle(incident_name, color=COLOR_TITLE, fontsize=16, weight="bold")
    last_updated = load_last_updated(args.data_dir)
    if last_updated:
        fig.text(0.99, 0.99, f"Last Updated: {last_updated}", color=COLOR_SUBTITLE, fontsize=8, ha="right", va="top")

    cells = fig.subfigures(nrows, ncols, squeeze=False, facecolor="none")
    handles = []
    for cell, result in zip(cells.flat, results.values()):
        if not result.ok:
            print(f"❌ Failed to load {result.zone}: {result.error}")
            cell.text(0.5, 0.5, f"Failed to load {result.zone}", color=COLOR_ERROR, ha="center", va="center")
            continue

        payload = result.payload
        print(f"\n✅ {result.zone} ({ZONE_LABELS.get(result.zone, result.zone)})")
        _print_axes(payload)

        cell.suptitle(f"{payload.get('title', '')}\n{payload.get('subtitle', '')}", color=COLOR_TITLE, fontsize=10)
        cell.text(0.5, 0.02, build_footer_note(result.zone), color=COLOR_FOOTER, fontsize=7, ha="center", wrap=True)
        handles.append(render(cell, payload, maintain_aspect_ratio=False))

    if not handles:
        print("❌ No zone could be loaded for this incident.")

    outfile = Path(args.out) if args.out else PROCESSED_DIR / f"{args.region}--{args.uid}.png"
    _finish(fig, handles, outfile, args.show)
    return 0 if handles else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render wildfire incident radar charts from the static data store.")
    parser.add_argument("--data-dir", type=Path, default=DATA_DIR, help=f"Data store root (default: {DATA_DIR})")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List regions and incidents")
    p_list.add_argument("--region", help="Only this region")
    p_list.add_argument("--incident", help="Resolve one incident name to its region/uid")
    p_list.set_defaults(func=cmd_list)

    p_chart = sub.add_parser("chart", help="Render one zone chart")
    p_chart.add_argument("region")
    p_chart.add_argument("uid")
    p_chart.add_argument("zone", choices=list(ZONE_LABELS))
    p_chart.add_argument("--out", help="Output PNG path")
    p_chart.add_argument("--show", action="store_true", help="Open an interactive window (hover for tooltips)")
    p_chart.set_defaults(func=cmd_chart)

    p_incident = sub.add_parser("incident", help="Render every zone of an incident as a grid")
    p_incident.add_argument("region")
    p_incident.add_argument("uid")
    p_incident.add_argument("--out", help="Output PNG path")
    p_incident.add_argument("--show", action="store_true", help="Open an interactive window (hover for tooltips)")
    p_incident.set_defaults(func=cmd_incident)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except (OSError, ValueError) as exc:
        print(f"❌ {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
