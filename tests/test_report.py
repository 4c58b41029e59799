from __future__ import annotations

import json
from pathlib import Path

from phonemap.core.geo import DEFAULT_MAP_CENTER, map_view_for
from phonemap.core.record import PhoneNumberRecord
from phonemap.io.report import NOT_AVAILABLE, build_report, export_json, render_details, render_map


def test_map_prefers_region_coordinates() -> None:
    record = PhoneNumberRecord(
        country_code="US",
        region_description="California",
        region_latitude=36.7783,
        region_longitude=-119.4179,
    )
    view = map_view_for(record)
    assert view.source == "region"
    assert view.marker is True
    assert view.label == "California"
    assert (view.latitude, view.longitude) == (36.7783, -119.4179)
    assert "mlat=36.7783" in view.osm_url()


def test_map_falls_back_to_country_then_default() -> None:
    view = map_view_for(PhoneNumberRecord(country_code="gb"))
    assert view.source == "country"
    assert view.label == "GB"
    assert view.zoom == 5

    # Only one coordinate is not a location.
    view = map_view_for(PhoneNumberRecord(country_code="ZZ", region_latitude=10.0))
    assert view.source == "default"
    assert view.marker is False
    assert view.latitude == DEFAULT_MAP_CENTER.latitude
    assert "mlat" not in view.osm_url()


def test_render_details_uses_placeholders() -> None:
    text = render_details(
        PhoneNumberRecord(
            country_code="US",
            e164_format="+16502530000",
            is_valid_number=True,
            is_possible_number=False,
            number_type="FIXED_LINE_OR_MOBILE",
        )
    )
    assert "+16502530000" in text
    assert "FIXED LINE OR MOBILE" in text
    assert "Carrier:" in text
    assert NOT_AVAILABLE in text
    lines = {line.split(":")[0].strip(): line for line in text.splitlines()}
    assert lines["Is Valid"].endswith("Yes")
    assert lines["Is Possible"].endswith("No")


def test_render_map_without_marker() -> None:
    text = render_map(map_view_for(PhoneNumberRecord()))
    assert NOT_AVAILABLE in text
    assert "openstreetmap.org" in text


def test_build_and_export_report(tmp_path: Path) -> None:
    record = PhoneNumberRecord(country_code="US")
    report = build_report("+16502530000", record, map_view_for(record), enricher="offline")
    path = tmp_path / "report.json"
    export_json(report, path)
    loaded = json.loads(path.read_text(encoding="utf-8"))
    assert loaded["details"]["countryCode"] == "US"
    assert loaded["map"]["source"] == "country"
    assert loaded["metadata"]["enricher"] == "offline"
    assert loaded["query"]["raw"] == "+16502530000"


def test_render_details_unknown_flags_are_not_available() -> None:
    text = render_details(PhoneNumberRecord(country_code="US"))
    lines = {line.split(":")[0].strip(): line for line in text.splitlines()}
    assert lines["Is Valid"].endswith(NOT_AVAILABLE)
    assert lines["Is Possible"].endswith(NOT_AVAILABLE)
    assert lines["Region"].endswith("US")
