"""Decide whether a chat message is asking for directions."""
from __future__ import annotations

import logging

from services.realtime.model_client import ModelClient
from services.realtime.prompts import intent_system_prompt
from services.realtime.response_parser import parse_json_object

logger = logging.getLogger(__name__)


class IntentClassifier:
	"""Classify utterances as map requests, failing closed toward plain chat."""

	def __init__(self, model: ModelClient) -> None:
		self.model = model

	async def classify(self, utterance: str) -> bool:
		"""Return True only when the model clearly answers ``isMapRequest: true``."""
		try:
			output = await self.model.complete(
				[
					{"role": "system", "content": intent_system_prompt()},
					{"role": "user", "content": utterance},
				]
			)
		except Exception as exc:
			logger.error("Classify intent error: %s", exc)
			return False

		result = parse_json_object(output)
		if not result.ok:
			logger.warning("Could not understand intent output (%s): %r", result.reason, output)
			return False
		decision = result.value.get("isMapRequest")
		if not isinstance(decision, bool):
			logger.warning("Intent output lacks a boolean isMapRequest: %r", result.value)
			return False
		return decision
