"""
Report rendering and export helpers.

Reports are plain dictionaries (JSON-serializable) so the CLI and any web
handler can share them.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

from phonemap import __version__
from phonemap.core.geo import MapView
from phonemap.core.record import PhoneNumberRecord

NOT_AVAILABLE = "Not available"


def utc_now_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


def build_report(
    query: str, record: PhoneNumberRecord, map_view: MapView, *, enricher: str
) -> dict[str, Any]:
    return {
        "metadata": {
            "tool": "phonemap",
            "version": __version__,
            "generated_at": utc_now_iso(),
            "enricher": enricher,
        },
        "query": {"raw": query},
        "details": record.to_dict(),
        "map": map_view.to_dict(),
    }


def export_json(report: Mapping[str, Any], path: Path) -> None:
    """Write a report to disk as pretty-printed JSON."""

    path.write_text(json.dumps(report, indent=2, sort_keys=True), encoding="utf-8")


def _text(value: Any) -> str:
    if value is None or value == "":
        return NOT_AVAILABLE
    return str(value)


def _yes_no(value: bool | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return "Yes" if value else "No"


def render_details(record: PhoneNumberRecord) -> str:
    """Render the details panel; null fields show as "Not available"."""

    number_type = record.number_type.replace("_", " ") if record.number_type else None
    coords = None
    if record.region_latitude is not None and record.region_longitude is not None:
        coords = f"{record.region_latitude:.4f}, {record.region_longitude:.4f}"

    rows = [
        ("Region", record.country_code),
        ("State/Region", record.region_description),
        ("E.164 Format", record.e164_format),
        ("National Number", record.national_number),
        ("Carrier", record.carrier),
        ("Timezone(s)", record.timezone),
        ("Is Valid", _yes_no(record.is_valid_number)),
        ("Is Possible", _yes_no(record.is_possible_number)),
        ("Number Type", number_type),
        ("Coordinates", coords),
    ]
    width = max(len(label) for label, _ in rows) + 1
    lines = ["Phone Number Details:"]
    lines.extend(f"  {(label + ':').ljust(width)} {_text(value)}" for label, value in rows)
    return "\n".join(lines) + "\n"


def render_map(map_view: MapView) -> str:
    lines = ["Approximate Location:"]
    if map_view.marker:
        lines.append(f"  {map_view.label or ''} ({map_view.latitude:.4f}, {map_view.longitude:.4f})")
    else:
        lines.append(f"  {NOT_AVAILABLE}")
    lines.append(f"  {map_view.osm_url()}")
    return "\n".join(lines) + "\n"
