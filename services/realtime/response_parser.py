"""Helpers to extract text and structured data from model output."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional


def extract_text(response: Any) -> str:
	"""Extract the first output_text entry from a Responses API result."""
	for item in getattr(response, "output", None) or []:
		if getattr(item, "type", None) != "message":
			continue
		for content in getattr(item, "content", None) or []:
			if _get(content, "type") == "output_text":
				return _get(content, "text") or ""
	return coerce_text(response)


def coerce_text(response: Any) -> str:
	"""Return a string from whatever shape the text-generation endpoint produced."""
	if response is None:
		return ""
	if isinstance(response, str):
		return response
	for attr in ("output_text", "response", "text"):
		value = _get(response, attr)
		if value:
			return value if isinstance(value, str) else json.dumps(value)
	if isinstance(response, dict):
		return json.dumps(response)
	return str(response)


def _get(obj: Any, name: str) -> Any:
	if isinstance(obj, dict):
		return obj.get(name)
	return getattr(obj, name, None)


@dataclass(frozen=True)
class JSONParseResult:
	"""Outcome of parsing model text as a JSON object.

	`value` is set when `ok`; otherwise `reason` says why nothing parsed.
	"""

	value: Optional[Dict[str, Any]] = None
	reason: Optional[str] = None

	@property
	def ok(self) -> bool:
		return self.value is not None


def _load_object(candidate: str) -> Optional[Dict[str, Any]]:
	try:
		parsed = json.loads(candidate)
	except (TypeError, ValueError):
		return None
	return parsed if isinstance(parsed, dict) else None


def _first_balanced_object(text: str) -> Optional[str]:
	start = text.find("{")
	if start < 0:
		return None
	depth = 0
	in_string = False
	escaped = False
	for index in range(start, len(text)):
		char = text[index]
		if in_string:
			if escaped:
				escaped = False
			elif char == "\\":
				escaped = True
			elif char == '"':
				in_string = False
		elif char == '"':
			in_string = True
		elif char == "{":
			depth += 1
		elif char == "}":
			depth -= 1
			if depth == 0:
				return text[start : index + 1]
	return None


def parse_json_object(text: Optional[str]) -> JSONParseResult:
	"""Parse a JSON object out of free-form model output.

	Tries the whole text, then the first balanced ``{...}`` block, then the
	widest span from the first ``{`` to the last ``}``.
	"""
	if not text or not text.strip():
		return JSONParseResult(reason="empty output")

	value = _load_object(text.strip())
	if value is not None:
		return JSONParseResult(value=value)

	block = _first_balanced_object(text)
	if block is not None:
		value = _load_object(block)
		if value is not None:
			return JSONParseResult(value=value)

	first, last = text.find("{"), text.rfind("}")
	if 0 <= first < last:
		value = _load_object(text[first : last + 1])
		if value is not None:
			return JSONParseResult(value=value)

	return JSONParseResult(reason="no JSON object found")
