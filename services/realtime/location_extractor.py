"""Pull start and destination place names out of a directions request."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from services.realtime.model_client import ModelClient
from services.realtime.prompts import extraction_system_prompt
from services.realtime.response_parser import parse_json_object

logger = logging.getLogger(__name__)

_NULL_WORDS = {"null", "none"}


@dataclass(frozen=True)
class ExtractedLocations:
	start: Optional[str] = None
	end: Optional[str] = None

	@property
	def complete(self) -> bool:
		return bool(self.start and self.end)

	def to_dict(self) -> Dict[str, Optional[str]]:
		return {"start": self.start, "end": self.end}


def _clean(value: Any) -> Optional[str]:
	if not isinstance(value, str):
		return None
	value = value.strip()
	if not value or value.lower() in _NULL_WORDS:
		return None
	return value


class LocationExtractor:
	"""Ask the model for ``{"start": ..., "end": ...}`` and normalise the answer."""

	def __init__(self, model: ModelClient) -> None:
		self.model = model

	async def extract(self, utterance: str) -> ExtractedLocations:
		try:
			output = await self.model.complete(
				[
					{"role": "system", "content": extraction_system_prompt()},
					{"role": "user", "content": utterance},
				]
			)
		except Exception as exc:
			logger.error("Extract locations error: %s", exc)
			return ExtractedLocations()

		result = parse_json_object(output)
		if not result.ok:
			logger.warning("Could not understand extraction output (%s): %r", result.reason, output)
			return ExtractedLocations()
		if "start" not in result.value and "end" not in result.value:
			return ExtractedLocations()
		return ExtractedLocations(start=_clean(result.value.get("start")), end=_clean(result.value.get("end")))
