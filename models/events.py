"""Websocket event shapes: inbound tagged union and outbound payload builders."""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _InboundEvent(BaseModel):
	model_config = ConfigDict(extra="ignore")


class ClearHistoryEvent(_InboundEvent):
	type: Literal["clear_history"]


class AutocompleteEvent(_InboundEvent):
	type: Literal["autocomplete"]
	field: Optional[str] = None
	query: Optional[str] = ""


class RouteRequestEvent(_InboundEvent):
	type: Literal["route_request"]
	start: str = ""
	end: str = ""
	mode: str = "Driving"


class ChatEvent(_InboundEvent):
	type: Literal["chat"]
	text: str = ""


InboundEvent = Annotated[
	Union[ClearHistoryEvent, AutocompleteEvent, RouteRequestEvent, ChatEvent],
	Field(discriminator="type"),
]

_ADAPTER: TypeAdapter = TypeAdapter(InboundEvent)

KNOWN_EVENT_TYPES = frozenset({"clear_history", "autocomplete", "route_request", "chat"})


def parse_inbound(payload: Dict[str, Any]) -> Optional[InboundEvent]:
	"""Return the typed event, or None when `type` is not a known event.

	Raises:
		pydantic.ValidationError: a known type carries fields of the wrong shape.
	"""
	if payload.get("type") not in KNOWN_EVENT_TYPES:
		return None
	return _ADAPTER.validate_python(payload)


def history_event() -> Dict[str, Any]:
	return {"type": "history", "messages": []}


def error_event(message: str) -> Dict[str, Any]:
	return {"type": "error", "message": message}


def route_loading_event(loading: bool) -> Dict[str, Any]:
	return {"type": "route_loading", "loading": loading}


def autocomplete_results_event(field: Optional[str], suggestions: List[Dict[str, Any]]) -> Dict[str, Any]:
	return {"type": "autocomplete_results", "field": field, "suggestions": suggestions}


def map_update_event(map_data: Dict[str, Any]) -> Dict[str, Any]:
	return {"type": "map_update", "mapData": map_data}


def agent_response_event(
	text: str,
	map_data: Optional[Dict[str, Any]] = None,
	locations: Optional[Dict[str, Optional[str]]] = None,
) -> Dict[str, Any]:
	"""Build an assistant reply; `mapData` is always present, `locations` only when known."""
	payload: Dict[str, Any] = {"type": "agent_response", "text": text}
	if locations is not None:
		payload["locations"] = locations
	payload["mapData"] = map_data
	return payload
