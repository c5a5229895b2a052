"""Point-to-point routing with an offline great-circle fallback."""

import logging
import math
from typing import Any, Dict, Optional

import httpx

from models.geo_models import Coordinate, RouteResult

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0
FALLBACK_SPEED_KMH = 50.0
METERS_PER_MILE = 1609.34

# The public routing service only serves the driving profile; other modes are
# approximated by stretching the driving duration.
MODE_DURATION_FACTORS: Dict[str, float] = {
    "Driving": 1.0,
    "Biking": 2.0,
    "Walking": 4.0,
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_distance(meters: float, prefix: str = "") -> str:
    """Return ``"<mi> mi (<km> km)"`` with one decimal place each."""
    miles = meters / METERS_PER_MILE
    km = meters / 1000
    return f"{prefix}{miles:.1f} mi ({km:.1f} km)"


def format_duration(seconds: float, prefix: str = "") -> str:
    """Return ``"Hh Mm"`` for an hour or more, otherwise ``"M min"``."""
    total_minutes = _round_half_up(seconds / 60)
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{prefix}{hours}h {minutes}m"
    return f"{prefix}{minutes} min"


def haversine_km(start: Coordinate, end: Coordinate) -> float:
    """Great-circle distance between two points in kilometres."""
    d_lat = math.radians(end.lat - start.lat)
    d_lng = math.radians(end.lng - start.lng)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(start.lat)) * math.cos(math.radians(end.lat)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def straight_line_route(start: Coordinate, end: Coordinate) -> RouteResult:
    """Estimate a route as the straight segment between both points at 50 km/h."""
    distance_km = haversine_km(start, end)
    duration_seconds = distance_km / FALLBACK_SPEED_KMH * 3600
    return RouteResult(
        coordinates=[[start.lat, start.lng], [end.lat, end.lng]],
        distance=format_distance(distance_km * 1000, prefix="~"),
        duration=format_duration(duration_seconds, prefix="~"),
        estimated=True,
    )


class RouteService:
    """Compute driving paths via an OSRM-compatible API.

    `compute_route` never raises: any failure to obtain a usable path yields
    the straight-line estimate instead.
    """

    def __init__(self, client: httpx.AsyncClient, *, base_url: str = "https://router.project-osrm.org") -> None:
        if client is None:
            raise ValueError("httpx.AsyncClient is required.")
        self.client = client
        self.base_url = base_url.rstrip("/")

    async def compute_route(self, start: Coordinate, end: Coordinate, mode: str = "Driving") -> RouteResult:
        """Return the path, distance and mode-adjusted duration from `start` to `end`."""
        try:
            route = await self._fetch_route(start, end)
        except Exception as exc:
            logger.error("Routing error: %s", exc)
            route = None

        if route is None:
            logger.info("Falling back to straight-line route")
            return straight_line_route(start, end)

        coordinates = [[c[1], c[0]] for c in route["geometry"]["coordinates"]]
        factor = MODE_DURATION_FACTORS.get(mode, 1.0)
        return RouteResult(
            coordinates=coordinates,
            distance=format_distance(float(route["distance"])),
            duration=format_duration(float(route["duration"]) * factor),
        )

    async def _fetch_route(self, start: Coordinate, end: Coordinate) -> Optional[Dict[str, Any]]:
        lonlat = f"{start.lng},{start.lat};{end.lng},{end.lat}"
        url = f"{self.base_url}/route/v1/driving/{lonlat}"
        params = {"overview": "full", "geometries": "geojson"}

        logger.debug("Fetching route from %s", url)
        r = await self.client.get(url, params=params)
        r.raise_for_status()
        data = r.json()
        logger.debug("Routing response code: %s", data.get("code"))

        if data.get("code") != "Ok":
            return None
        routes = data.get("routes") or []
        if not routes:
            return None
        route = routes[0]
        geom = (route.get("geometry") or {}).get("coordinates")
        if not _usable_geometry(geom):
            return None
        if route.get("distance") is None or route.get("duration") is None:
            return None
        return route


def _usable_geometry(geom: Any) -> bool:
    if not isinstance(geom, list) or len(geom) < 2:
        return False
    return all(isinstance(c, list) and len(c) >= 2 for c in geom)
