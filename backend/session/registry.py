"""
Session registry.

The only process-wide mutable state: session_id -> VoiceSession.
Owned by the app (via the pipeline) and injected into gateways; never a
module global.
"""

from __future__ import annotations

from session.voice_session import OutboundSink, VoiceSession


class SessionExists(KeyError):
    """Raised when creating a session whose id is already registered."""


class SessionRegistry:
    """Mapping of live sessions, single writer per key."""

    def __init__(self) -> None:
        self._sessions: dict[str, VoiceSession] = {}

    def create(self, session_id: str, *, send: OutboundSink | None = None) -> VoiceSession:
        if session_id in self._sessions:
            raise SessionExists(session_id)
        session = VoiceSession(session_id=session_id, send=send)
        self._sessions[session_id] = session
        return session

    def get(self, session_id: str) -> VoiceSession | None:
        return self._sessions.get(session_id)

    def remove(self, session_id: str) -> VoiceSession | None:
        """Unregister and mark closed. Returns None for unknown ids."""
        session = self._sessions.pop(session_id, None)
        if session is not None:
            session.closed = True
        return session

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
