from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 point in degrees. Ranges are not validated."""

    lat: float
    lng: float

    def midpoint(self, other: "Coordinate") -> List[float]:
        """Return the arithmetic midpoint as a ``[lat, lng]`` pair."""
        return [(self.lat + other.lat) / 2, (self.lng + other.lng) / 2]


@dataclass(frozen=True)
class PlaceSuggestion:
    """A ranked autocomplete candidate."""

    display_name: str
    lat: float
    lng: float

    def to_dict(self) -> Dict[str, Any]:
        return {"display_name": self.display_name, "lat": self.lat, "lng": self.lng}


@dataclass
class RouteResult:
    """A path ordered start to end, with human-readable distance and duration.

    Attributes:
        coordinates: ``[lat, lng]`` pairs, at least two.
        distance: e.g. ``"215.4 mi (346.7 km)"``; prefixed ``"~"`` when estimated.
        duration: e.g. ``"3h 45m"`` or ``"40 min"``; prefixed ``"~"`` when estimated.
        estimated: True when the straight-line fallback produced the result.
    """

    coordinates: List[List[float]]
    distance: str
    duration: str
    estimated: bool = False


@dataclass
class MapData:
    """Everything the client needs to draw a route on the map."""

    center: List[float]
    zoom: int
    route: List[List[float]]
    markers: List[Dict[str, Any]]
    distance: str
    duration: str

    @classmethod
    def for_route(
        cls,
        start: Coordinate,
        end: Coordinate,
        route: RouteResult,
        *,
        start_label: str,
        end_label: str,
        zoom: int,
    ) -> "MapData":
        """Build map data centred between the two endpoints with labeled markers."""
        return cls(
            center=start.midpoint(end),
            zoom=zoom,
            route=route.coordinates,
            markers=[
                {"lat": start.lat, "lng": start.lng, "label": f"Start: {start_label}"},
                {"lat": end.lat, "lng": end.lng, "label": f"End: {end_label}"},
            ],
            distance=route.distance,
            duration=route.duration,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "center": self.center,
            "zoom": self.zoom,
            "route": self.route,
            "markers": self.markers,
            "distance": self.distance,
            "duration": self.duration,
        }


def parse_float(value: Any) -> Optional[float]:
    """Convert a service-provided coordinate value to float, or None."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
