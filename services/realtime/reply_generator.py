"""Free-text assistant replies for non-routing chat."""
from __future__ import annotations

import logging
from typing import Iterable, List

from models.session_models import SessionMessage
from services.realtime.model_client import ModelClient
from services.realtime.prompts import CHAT_FALLBACK_REPLY, assistant_system_prompt

logger = logging.getLogger(__name__)

CONTEXT_LIMIT = 10


class ReplyGenerator:
	"""Generate a persona reply from the most recent conversation turns."""

	def __init__(self, model: ModelClient, context_limit: int = CONTEXT_LIMIT) -> None:
		self.model = model
		self.context_limit = context_limit

	async def reply(self, history: Iterable[SessionMessage]) -> str:
		"""Return the model's reply, or a fixed friendly fallback on any failure."""
		recent: List[SessionMessage] = list(history)[-self.context_limit :]
		messages = [{"role": "system", "content": assistant_system_prompt()}]
		messages.extend(msg.to_dict() for msg in recent)
		try:
			text = await self.model.complete(messages)
		except Exception as exc:
			logger.error("Generate chat response error: %s", exc)
			return CHAT_FALLBACK_REPLY
		text = (text or "").strip()
		return text or CHAT_FALLBACK_REPLY
