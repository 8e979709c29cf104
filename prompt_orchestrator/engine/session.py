"""
Session Mode Store — last classified execution mode per session.

Written when a request starts, read when a tool is called. Single-threaded
event dispatch means no locking. Capacity is bounded: once full, the session
recorded least recently is evicted and behaves like an unknown session.
"""

from __future__ import annotations

import logging
from collections import OrderedDict

from prompt_orchestrator.config import DEFAULT_MAX_SESSIONS
from prompt_orchestrator.engine.models import ExecutionMode

logger = logging.getLogger(__name__)


class SessionModeStore:
    """Bounded session_id → ExecutionMode map with last-write-wins semantics."""

    def __init__(self, max_sessions: int = DEFAULT_MAX_SESSIONS) -> None:
        self.max_sessions = max(1, max_sessions)
        self._modes: OrderedDict[str, ExecutionMode] = OrderedDict()

    def record(self, session_id: str | None, mode: ExecutionMode) -> None:
        """Store the mode for a session, replacing any earlier entry."""
        if not session_id:
            return
        if session_id in self._modes:
            self._modes.move_to_end(session_id)
        self._modes[session_id] = mode

        while len(self._modes) > self.max_sessions:
            evicted, _ = self._modes.popitem(last=False)
            logger.debug("Session store full, evicted %s", evicted)

    def lookup(self, session_id: str | None) -> ExecutionMode | None:
        """Return the last recorded mode, or None if the session is unknown."""
        if not session_id:
            return None
        return self._modes.get(session_id)

    def __len__(self) -> int:
        return len(self._modes)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._modes

    def clear(self) -> None:
        """Drop all entries."""
        self._modes.clear()
