"""Dispatch realtime websocket events to the appropriate handlers."""
from __future__ import annotations

import json
import logging
from functools import partial
from typing import Any, Dict

from fastapi import WebSocket

from models.events import (
	AutocompleteEvent,
	ChatEvent,
	ClearHistoryEvent,
	RouteRequestEvent,
	history_event,
	parse_inbound,
)
from services.maps.geocoder import GeoResolver
from services.maps.route_service import RouteService
from services.realtime.intent_classifier import IntentClassifier
from services.realtime.location_extractor import LocationExtractor
from services.realtime.reply_generator import ReplyGenerator
from services.realtime.session_store import SessionStore
from services.realtime.ws_chat import ChatMessageHandler
from services.realtime.ws_route import AutocompleteMessageHandler, RouteMessageHandler

logger = logging.getLogger(__name__)


class SessionDispatcher:
	"""Route websocket messages for a chat session to the matching handler."""

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
		self.route_handler = RouteMessageHandler(geo, router)
		self.autocomplete_handler = AutocompleteMessageHandler(geo)
		self.chat_handler = ChatMessageHandler(store, geo, router, classifier, extractor, replier)

	async def start_session(self, websocket: WebSocket, session_id: str) -> None:
		"""Reset history for a freshly connected client and tell it so."""
		await self.store.start(session_id)
		await self._send(websocket, history_event())

	async def handle(self, websocket: WebSocket, session_id: str, payload: Dict[str, Any]) -> None:
		"""Process a single inbound websocket payload.

		Unknown event types are dropped without a reply. Validation errors for
		known types propagate to the caller.
		"""
		event = parse_inbound(payload)
		if event is None:
			logger.debug("Ignoring unsupported message type %r", payload.get("type"))
			return

		send = partial(self._send, websocket)
		if isinstance(event, ClearHistoryEvent):
			await self.store.clear(session_id)
			await send(history_event())
		elif isinstance(event, AutocompleteEvent):
			await self.autocomplete_handler.suggest(send, event)
		elif isinstance(event, RouteRequestEvent):
			await self.route_handler.handle(send, event)
		elif isinstance(event, ChatEvent):
			await self.chat_handler.handle(send, session_id, event)
		else:
			raise TypeError(f"Unhandled event type {type(event).__name__}")

	async def _send(self, websocket: WebSocket, payload: Dict[str, Any]) -> None:
		await websocket.send_text(json.dumps(payload))
