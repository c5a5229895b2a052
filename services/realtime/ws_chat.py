"""Handle free-text chat: intent, endpoint extraction, routing or a plain reply."""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from models.events import ChatEvent, agent_response_event
from models.geo_models import MapData
from models.session_models import SessionMessage
from services.maps.geocoder import GeoResolver
from services.maps.route_service import RouteService
from services.realtime.intent_classifier import IntentClassifier
from services.realtime.location_extractor import ExtractedLocations, LocationExtractor
from services.realtime.prompts import clarify_endpoints_hint
from services.realtime.reply_generator import CONTEXT_LIMIT, ReplyGenerator
from services.realtime.session_store import SessionStore
from services.realtime.ws_route import Send

logger = logging.getLogger(__name__)

CHAT_ERROR_REPLY = "Sorry, I encountered an error. Please try again."
LOCATIONS_UNCLEAR_REPLY = (
	"I couldn't find those locations. Could you be more specific about the places you want to visit?"
)
CHAT_ROUTE_ZOOM = 10
CHAT_ROUTE_MODE = "Driving"


def route_summary(start: str, end: str, distance: str, duration: str) -> str:
	return (
		f"I found a route from {start} to {end}! "
		f"The journey is approximately {distance} and will take about {duration}."
	)


class ChatMessageHandler:
	"""Answer a chat message and keep the session history in step with the reply."""

	def __init__(
		self,
		store: SessionStore,
		geo: GeoResolver,
		router: RouteService,
		classifier: IntentClassifier,
		extractor: LocationExtractor,
		replier: ReplyGenerator,
	) -> None:
		self.store = store
		self.geo = geo
		self.router = router
		self.classifier = classifier
		self.extractor = extractor
		self.replier = replier

	async def handle(self, send: Send, session_id: str, event: ChatEvent) -> None:
		"""Append the user turn, answer it, and emit exactly one agent_response."""
		user_message = event.text
		await self.store.add_message(session_id, "user", user_message)
		try:
			response = await self._respond(session_id, user_message)
		except Exception:
			logger.exception("Error processing message")
			response = agent_response_event(CHAT_ERROR_REPLY)
		await send(response)

	async def _respond(self, session_id: str, user_message: str) -> Dict[str, Any]:
		if not await self.classifier.classify(user_message):
			reply = await self.replier.reply(self.store.get(session_id).recent(CONTEXT_LIMIT))
			return await self._assistant_reply(session_id, reply)

		locations = await self.extractor.extract(user_message)
		if not locations.complete:
			reply = await self.replier.reply(self._clarification_context(session_id, user_message))
			return await self._assistant_reply(session_id, reply)

		return await self._route_reply(session_id, locations)

	async def _route_reply(self, session_id: str, locations: ExtractedLocations) -> Dict[str, Any]:
		start = await self.geo.resolve_one(locations.start)
		end = await self.geo.resolve_one(locations.end)
		if start is None or end is None:
			return await self._assistant_reply(session_id, LOCATIONS_UNCLEAR_REPLY)

		route = await self.router.compute_route(start, end, CHAT_ROUTE_MODE)
		text = route_summary(locations.start, locations.end, route.distance, route.duration)
		map_data = MapData.for_route(
			start,
			end,
			route,
			start_label=locations.start,
			end_label=locations.end,
			zoom=CHAT_ROUTE_ZOOM,
		)
		await self.store.add_message(session_id, "assistant", text)
		return agent_response_event(text, map_data=map_data.to_dict(), locations=locations.to_dict())

	async def _assistant_reply(self, session_id: str, text: str) -> Dict[str, Any]:
		await self.store.add_message(session_id, "assistant", text)
		return agent_response_event(text)

	def _clarification_context(self, session_id: str, user_message: str) -> List[SessionMessage]:
		# The hint only reaches the model; stored history keeps the user's own words.
		history = self.store.get(session_id).recent(CONTEXT_LIMIT)
		if history and history[-1].role == "user":
			history = history[:-1]
		history.append(SessionMessage(role="user", content=clarify_endpoints_hint(user_message)))
		return history
