"""Async Data Access Layer for the SESSION_KV table.

Stores one JSON-encoded value per (session id, key) pair. The relay uses it
for the conversation history under the ``"history"`` key.
"""

from __future__ import annotations

import json
import time
from typing import Any, Optional

from utils.database_init import AsyncDatabaseInitializer


class SessionKVDAL:
    """Durable per-session key/value store.

    The constructor accepts an `AsyncDatabaseInitializer` (or any object
    exposing an async `connection()` context manager that yields an
    `aiosqlite.Connection`).
    """

    def __init__(self, db_initializer: AsyncDatabaseInitializer) -> None:
        self._db = db_initializer

    async def put(self, session_id: str, key: str, value: Any) -> None:
        """Insert or replace the value stored under `key` for a session.

        Args:
            session_id: Owning session.
            key: Key within the session, e.g. ``"history"``.
            value: Any JSON-serializable value.
        """
        encoded = json.dumps(value)
        async with self._db.connection() as conn:
            await conn.execute(
                """
                INSERT INTO SESSION_KV (session_id, key, value, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(session_id, key)
                DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (session_id, key, encoded, int(time.time())),
            )
            await conn.commit()

    async def get(self, session_id: str, key: str) -> Optional[Any]:
        """Return the decoded value for `key`, or None if nothing is stored."""
        async with self._db.connection() as conn:
            cur = await conn.execute(
                "SELECT value FROM SESSION_KV WHERE session_id = ? AND key = ?",
                (session_id, key),
            )
            row = await cur.fetchone()
        return json.loads(row[0]) if row else None
