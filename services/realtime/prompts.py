"""Prompt helpers for intent classification, location extraction and chat."""

from __future__ import annotations

CHAT_FALLBACK_REPLY = "I'm here to help! Ask me anything or describe a trip you'd like to take."


def intent_system_prompt() -> str:
	"""Return the prompt that asks the model whether a message wants directions."""
	return (
		"Determine if the user wants directions, a route, or map-related help.\n\n"
		"Return ONLY valid JSON, no other text:\n"
		'{"isMapRequest": true} or {"isMapRequest": false}\n\n'
		'Return true for: directions, routes, navigation, "take me to", "how do I get to"\n'
		"Return false for: greetings, general questions, non-travel topics"
	)


def extraction_system_prompt() -> str:
	"""Return the prompt that pulls start and end places out of a message."""
	return (
		"Extract the start and end locations from the user's message.\n\n"
		"Return ONLY valid JSON, no other text:\n"
		'{"start": "starting location or null", "end": "destination or null"}\n\n'
		"Examples:\n"
		'"Take me from San Francisco to Los Angeles" -> {"start": "San Francisco, CA", "end": "Los Angeles, CA"}\n'
		'"I want to go to New York" -> {"start": null, "end": "New York, NY"}'
	)


def assistant_system_prompt() -> str:
	"""Return the persona used for free-text replies."""
	return (
		"You are Wander Assistant, a friendly AI for the Wandermap app. "
		"Keep responses concise. Help users with directions using the navigation panel or chat."
	)


def clarify_endpoints_hint(user_message: str) -> str:
	"""Annotate a message whose start or destination could not be extracted."""
	return (
		f"{user_message}\n\n"
		"[System: The user seems to want directions but didn't specify clear start and end points. "
		"Ask them to clarify both the starting point and destination.]"
	)
