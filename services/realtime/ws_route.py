"""Handle map form events: direct route requests and place autocomplete."""
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict

from models.events import (
	AutocompleteEvent,
	RouteRequestEvent,
	autocomplete_results_event,
	error_event,
	map_update_event,
	route_loading_event,
)
from models.geo_models import MapData
from services.maps.geocoder import GeoResolver
from services.maps.route_service import RouteService

logger = logging.getLogger(__name__)

Send = Callable[[Dict[str, Any]], Awaitable[None]]

LOCATIONS_NOT_FOUND = "Could not find one or both locations. Please try different addresses."
ROUTE_FAILED = "Failed to generate route. Please try again."
FORM_ROUTE_ZOOM = 12


class RouteMessageHandler:
	"""Geocode both form fields and push the resulting route to the map."""

	def __init__(self, geo: GeoResolver, router: RouteService) -> None:
		self.geo = geo
		self.router = router

	async def handle(self, send: Send, event: RouteRequestEvent) -> None:
		"""Emit loading on, then either a map update or an error, then loading off."""
		try:
			logger.info("Route request received: %r -> %r (%s)", event.start, event.end, event.mode)
			await send(route_loading_event(True))

			start = await self.geo.resolve_one(event.start)
			end = await self.geo.resolve_one(event.end)
			if start is None or end is None:
				await send(error_event(LOCATIONS_NOT_FOUND))
				await send(route_loading_event(False))
				return

			route = await self.router.compute_route(start, end, event.mode)
			map_data = MapData.for_route(
				start,
				end,
				route,
				start_label=event.start,
				end_label=event.end,
				zoom=FORM_ROUTE_ZOOM,
			)
			await send(map_update_event(map_data.to_dict()))
			await send(route_loading_event(False))
		except Exception:
			logger.exception("Route generation error")
			await send(error_event(ROUTE_FAILED))
			await send(route_loading_event(False))


class AutocompleteMessageHandler:
	"""Return place suggestions for a partially typed form field."""

	def __init__(self, geo: GeoResolver) -> None:
		self.geo = geo

	async def suggest(self, send: Send, event: AutocompleteEvent) -> None:
		try:
			suggestions = [item.to_dict() for item in await self.geo.resolve_many(event.query)]
		except Exception:
			logger.exception("Autocomplete error")
			suggestions = []
		await send(autocomplete_results_event(event.field, suggestions))
