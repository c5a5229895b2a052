"""In-memory session history backed by the durable key/value store."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List

from dal.session_kv_dal import SessionKVDAL
from models.session_models import Role, SessionMessage, SessionState

logger = logging.getLogger(__name__)

HISTORY_KEY = "history"


class SessionStore:
	"""Own each session's message history and persist it after every change.

	Persistence is best-effort: a failed write is logged and the in-memory
	history stays authoritative for the running process.
	"""

	def __init__(self, kv: SessionKVDAL) -> None:
		self.kv = kv
		self._sessions: Dict[str, SessionState] = {}
		self._locks: Dict[str, asyncio.Lock] = {}

	def get(self, session_id: str) -> SessionState:
		"""Return a session or raise KeyError if it was never started."""
		state = self._sessions.get(session_id)
		if state is None:
			raise KeyError(f"Session {session_id} not found")
		return state

	async def start(self, session_id: str) -> SessionState:
		"""Begin a session with empty history, replacing any previous one."""
		return await self.clear(session_id)

	async def clear(self, session_id: str) -> SessionState:
		"""Reset history to empty and persist it."""
		async with self._lock(session_id):
			state = self._sessions.get(session_id)
			if state is None:
				state = SessionState(session_id=session_id)
				self._sessions[session_id] = state
			state.messages.clear()
			await self._persist(state)
			return state

	async def add_message(self, session_id: str, role: Role, content: str) -> SessionState:
		"""Append a message to the session conversation and persist it."""
		async with self._lock(session_id):
			state = self.get(session_id)
			state.messages.append(SessionMessage(role=role, content=content))
			await self._persist(state)
			return state

	async def persisted_history(self, session_id: str) -> List[SessionMessage]:
		"""Read back the history as last written to the durable store."""
		stored = await self.kv.get(session_id, HISTORY_KEY) or []
		return [SessionMessage.from_dict(item) for item in stored]

	def _lock(self, session_id: str) -> asyncio.Lock:
		lock = self._locks.get(session_id)
		if lock is None:
			lock = self._locks[session_id] = asyncio.Lock()
		return lock

	async def _persist(self, state: SessionState) -> bool:
		try:
			await self.kv.put(state.session_id, HISTORY_KEY, [msg.to_dict() for msg in state.messages])
		except Exception as exc:
			logger.error("Failed to persist history for session %s: %s", state.session_id, exc)
			return False
		return True
