"""
In-Memory Session Store for HTTP-driven playback.

Each HTTP client creates its own playback session and drives it with
transition requests. This module keeps those sessions addressable by UUID.

Responsibilities
----------------
- **Create**: Build a session for a catalog entry and register it.
- **Read**: Retrieve a session record by id.
- **Delete**: Cancel the session's pending autoplay timer and forget it.

Note on Persistence
-------------------
This is a volatile memory store. If the server restarts, all sessions are
lost; traces are regenerated from their input on demand anyway.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, ClassVar

from algoplay.algorithms.catalog import create_session
from algoplay.core.playback import PlaybackSession, Scheduler, ThreadingScheduler
from algoplay.core.result import Result
from algoplay.core.settings import get_logger

logger = get_logger("algoplay.api")


@dataclass
class SessionRecord:
    session_id: str
    algorithm: str
    session: PlaybackSession[Any]
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class SessionStore:
    """A dictionary-backed store of live playback sessions."""

    _instance: ClassVar[SessionStore | None] = None

    def __init__(self, scheduler: Scheduler | None = None) -> None:
        self._sessions: dict[str, SessionRecord] = {}
        self._lock = threading.Lock()
        self.scheduler: Scheduler = scheduler if scheduler is not None else ThreadingScheduler()

    @classmethod
    def get_instance(cls) -> SessionStore:
        """Accessor for the global singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls, store: SessionStore | None = None) -> None:
        """Replace the singleton (closing the old one). Used by tests and shutdown."""
        if cls._instance is not None:
            cls._instance.close_all()
        cls._instance = store

    def create(
        self,
        algorithm: str,
        initial_input: Any = None,
        *,
        speed: float = 1.0,
        seed: int | None = None,
    ) -> Result[SessionRecord, str]:
        """Build and register a session; ``Err`` for unknown algorithms."""

        def _register(session: PlaybackSession[Any]) -> SessionRecord:
            record = SessionRecord(str(uuid.uuid4()), algorithm, session)
            with self._lock:
                self._sessions[record.session_id] = record
            logger.info("session %s created for %s (%d steps)", record.session_id, algorithm, session.total_steps)
            return record

        return create_session(
            algorithm,
            initial_input,
            scheduler=self.scheduler,
            speed_multiplier=speed,
            seed=seed,
        ).map(_register)

    def get(self, session_id: str) -> SessionRecord | None:
        with self._lock:
            return self._sessions.get(session_id)

    def delete(self, session_id: str) -> bool:
        with self._lock:
            record = self._sessions.pop(session_id, None)
        if record is None:
            return False
        record.session.close()
        logger.info("session %s closed", session_id)
        return True

    def close_all(self) -> None:
        with self._lock:
            records = list(self._sessions.values())
            self._sessions.clear()
        for record in records:
            record.session.close()

    def __len__(self) -> int:
        return len(self._sessions)


def get_session_store() -> SessionStore:
    return SessionStore.get_instance()


__all__ = ["SessionRecord", "SessionStore", "get_session_store"]
