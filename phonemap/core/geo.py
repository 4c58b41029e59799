"""
Approximate map location for a looked-up number.

The model's region coordinates are preferred. When it could not place the
number, the map falls back to a country centroid and finally to a world view.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from phonemap.core.record import PhoneNumberRecord

MapSource = Literal["region", "country", "default"]


@dataclass(frozen=True, slots=True)
class Coordinates:
    latitude: float
    longitude: float
    zoom: int


COUNTRY_COORDINATES: dict[str, Coordinates] = {
    "US": Coordinates(37.0902, -95.7129, 4),
    "GB": Coordinates(55.3781, -3.4360, 5),
    "IN": Coordinates(20.5937, 78.9629, 4),
    "DE": Coordinates(51.1657, 10.4515, 5),
    "FR": Coordinates(46.603354, 1.8883335, 5),
    "BR": Coordinates(-14.2350, -51.9253, 4),
    "AU": Coordinates(-25.2744, 133.7751, 4),
    "CA": Coordinates(56.1304, -106.3468, 3),
    "JP": Coordinates(36.2048, 138.2529, 5),
    "CN": Coordinates(35.8617, 104.1954, 4),
}

DEFAULT_MAP_CENTER = Coordinates(20.0, 0.0, 2)

REGION_ZOOM = 7


@dataclass(frozen=True, slots=True)
class MapView:
    latitude: float
    longitude: float
    zoom: int
    marker: bool
    label: str | None
    source: MapSource

    def osm_url(self) -> str:
        base = "https://www.openstreetmap.org/"
        view = f"#map={self.zoom}/{self.latitude:.4f}/{self.longitude:.4f}"
        if self.marker:
            return f"{base}?mlat={self.latitude:.4f}&mlon={self.longitude:.4f}{view}"
        return base + view

    def to_dict(self) -> dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "zoom": self.zoom,
            "marker": self.marker,
            "label": self.label,
            "source": self.source,
            "url": self.osm_url(),
        }


def country_coordinates(country_code: str | None) -> Coordinates | None:
    if not country_code:
        return None
    return COUNTRY_COORDINATES.get(country_code.upper())


def map_view_for(record: PhoneNumberRecord) -> MapView:
    """Pick the map center, zoom and marker for a record."""

    if record.region_latitude is not None and record.region_longitude is not None:
        return MapView(
            latitude=record.region_latitude,
            longitude=record.region_longitude,
            zoom=REGION_ZOOM,
            marker=True,
            label=record.region_description or record.country_code,
            source="region",
        )

    coords = country_coordinates(record.country_code)
    if coords is not None and record.country_code:
        return MapView(
            latitude=coords.latitude,
            longitude=coords.longitude,
            zoom=coords.zoom,
            marker=True,
            label=record.country_code.upper(),
            source="country",
        )

    return MapView(
        latitude=DEFAULT_MAP_CENTER.latitude,
        longitude=DEFAULT_MAP_CENTER.longitude,
        zoom=DEFAULT_MAP_CENTER.zoom,
        marker=False,
        label=None,
        source="default",
    )
