"""WebSocket endpoint for the trip-planning chat."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketException, status
from fastapi.responses import PlainTextResponse
from starlette.websockets import WebSocketDisconnect

from models.events import error_event
from services.realtime.ws_session import SessionDispatcher

logger = logging.getLogger(__name__)

router = APIRouter()

UNEXPECTED_ERROR = "An unexpected error occurred."


def _require_dispatcher(websocket: WebSocket) -> SessionDispatcher:
	dispatcher = getattr(websocket.app.state, "dispatcher", None)
	if dispatcher is None:
		raise WebSocketException(code=status.WS_1011_INTERNAL_ERROR, reason="Dispatcher unavailable")
	return dispatcher


@router.get("/api/chat", include_in_schema=False)
async def chat_requires_upgrade():
	return PlainTextResponse("Expected Upgrade: websocket", status_code=426)


@router.websocket("/api/chat")
async def chat_socket(websocket: WebSocket, dispatcher: SessionDispatcher = Depends(_require_dispatcher)):
	"""Bind the connection to the shared demo session and relay its events."""
	session_id = websocket.app.state.settings.demo_session_id
	await websocket.accept()
	await dispatcher.start_session(websocket, session_id)
	logger.info("WebSocket opened for session %s", session_id)

	close_code = None
	while True:
		try:
			raw = await websocket.receive_text()
		except WebSocketDisconnect as exc:
			close_code = exc.code
			break
		except RuntimeError as exc:
			logger.warning("WebSocket receive failed: %s", exc)
			break
		try:
			payload = json.loads(raw)
			if not isinstance(payload, dict):
				raise ValueError("Payload must be a JSON object")
			await dispatcher.handle(websocket, session_id, payload)
		except WebSocketDisconnect as exc:
			close_code = exc.code
			break
		except Exception:
			logger.exception("WebSocket message error")
			try:
				await websocket.send_text(json.dumps(error_event(UNEXPECTED_ERROR)))
			except Exception:
				# Connection may already be closing.
				pass
	logger.info("WebSocket closed: %s", close_code)
