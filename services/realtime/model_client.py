"""Thin text-in/text-out wrapper around the OpenAI Responses API."""
from __future__ import annotations

import logging
from typing import Dict, List

from openai import AsyncOpenAI

from services.realtime.response_parser import extract_text

logger = logging.getLogger(__name__)


class ModelClient:
	"""Send role-tagged messages to a model and return its text output."""

	def __init__(self, client: AsyncOpenAI, model: str = "gpt-4o-mini") -> None:
		if client is None:
			raise ValueError("AsyncOpenAI client is required.")
		self.client = client
		self.model = model

	async def complete(self, messages: List[Dict[str, str]]) -> str:
		"""Return the model's text reply. Errors from the API propagate."""
		try:
			response = await self.client.responses.create(model=self.model, input=messages)
		except Exception as exc:
			logger.error("Error during OpenAI Responses API call: %s", exc)
			raise
		text = extract_text(response)
		logger.debug("Model output: %r", text)
		return text
