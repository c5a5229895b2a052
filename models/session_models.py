"""Session domain models for the chat relay."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Literal

Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class SessionMessage:
	"""One conversation turn; immutable once appended."""

	role: Role
	content: str

	def to_dict(self) -> Dict[str, str]:
		return asdict(self)

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "SessionMessage":
		return cls(role=data["role"], content=str(data.get("content", "")))


@dataclass
class SessionState:
	"""In-memory history for one logical conversation."""

	session_id: str
	messages: List[SessionMessage] = field(default_factory=list)

	def recent(self, limit: int = 10) -> List[SessionMessage]:
		"""Return the last `limit` messages in order."""
		return list(self.messages[-limit:]) if limit else list(self.messages)
