"""Place-name lookups against a Nominatim-compatible search endpoint."""

import logging
from typing import Any, Dict, List, Optional

import httpx

from models.geo_models import Coordinate, PlaceSuggestion, parse_float

logger = logging.getLogger(__name__)

AUTOCOMPLETE_LIMIT = 5
AUTOCOMPLETE_MIN_CHARS = 2


class GeoResolver:
    """Resolve free-text place names to coordinates.

    Both lookups swallow failures: callers only ever see a result or an
    empty/None value.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        base_url: str = "https://nominatim.openstreetmap.org",
        user_agent: str = "Wandermap/1.0",
    ) -> None:
        if client is None:
            raise ValueError("httpx.AsyncClient is required.")
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent

    async def resolve_one(self, text: Optional[str]) -> Optional[Coordinate]:
        """Return the best match for a full place description, or None."""
        if not text:
            return None
        try:
            candidates = await self._search({"q": text, "limit": 1})
        except Exception as exc:
            logger.error("Geocoding error for %r: %s", text, exc)
            return None
        if not candidates:
            return None
        lat = parse_float(candidates[0].get("lat"))
        lng = parse_float(candidates[0].get("lon"))
        if lat is None or lng is None:
            logger.warning("Geocoder returned unusable coordinates for %r", text)
            return None
        return Coordinate(lat=lat, lng=lng)

    async def resolve_many(self, text: Optional[str]) -> List[PlaceSuggestion]:
        """Return up to five ranked suggestions for a partial place name."""
        if not text or len(text) < AUTOCOMPLETE_MIN_CHARS:
            return []
        try:
            candidates = await self._search(
                {"q": text, "limit": AUTOCOMPLETE_LIMIT, "addressdetails": 1}
            )
        except Exception as exc:
            logger.error("Autocomplete fetch error for %r: %s", text, exc)
            return []

        suggestions: List[PlaceSuggestion] = []
        for item in candidates[:AUTOCOMPLETE_LIMIT]:
            lat = parse_float(item.get("lat"))
            lng = parse_float(item.get("lon"))
            if lat is None or lng is None:
                continue
            suggestions.append(
                PlaceSuggestion(display_name=str(item.get("display_name", "")), lat=lat, lng=lng)
            )
        return suggestions

    async def _search(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        r = await self.client.get(
            f"{self.base_url}/search",
            params={"format": "json", **params},
            headers={"User-Agent": self.user_agent},
        )
        r.raise_for_status()
        data = r.json()
        if not isinstance(data, list):
            raise ValueError(f"Unexpected search payload: {type(data).__name__}")
        return [item for item in data if isinstance(item, dict)]
