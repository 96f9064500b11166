from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Dict

from utility.translation_state import SessionState


@dataclass
class SessionData:
    """One browser tab's form, keyed by the session id the page generates"""
    session_id: str
    created_at: datetime = field(default_factory=datetime.now)
    last_accessed: datetime = field(default_factory=datetime.now)

    # Replaced wholesale on every transition, never edited in place
    state: SessionState = field(default_factory=SessionState)

    def touch(self):
        self.last_accessed = datetime.now()

    def is_expired(self, ttl_hours: int = 2) -> bool:
        """Idle past the TTL. A session with a request in flight never expires."""
        if self.state.is_loading:
            return False
        return datetime.now() - self.last_accessed > timedelta(hours=ttl_hours)


class SessionManager:
    """In-memory registry of form sessions with TTL-based eviction"""

    def __init__(self, ttl_hours: int = 2, cleanup_interval: int = 300):
        self.sessions: Dict[str, SessionData] = {}
        self.ttl_hours = ttl_hours
        self.cleanup_interval = cleanup_interval  # seconds
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._cleanup_thread = threading.Thread(target=self._cleanup_loop, daemon=True)
        self._cleanup_thread.start()

    def get_or_create_session(self, session_id: str) -> SessionData:
        """Get existing session or create new one; expired ones start over"""
        with self._lock:
            session = self.sessions.get(session_id)
            if session is None or session.is_expired(self.ttl_hours):
                return self._create_session(session_id)
            session.touch()
            return session

    def apply(self, session_id: str, transition: Callable[[SessionState], SessionState]) -> SessionState:
        """Run a pure state transition against a session and store the result."""
        session = self.get_or_create_session(session_id)
        with self._lock:
            session.state = transition(session.state)
            return session.state

    def reset_session(self, session_id: str) -> bool:
        """
        Back to a blank form, same id. Unknown ids are left alone, and a session
        with a request in flight is not touched (returns False).
        """
        with self._lock:
            session = self.sessions.get(session_id)
            if session is None:
                return True
            if session.state.is_loading:
                return False
            self._create_session(session_id)
            return True

    def cleanup_expired_sessions(self) -> int:
        """Drop idle sessions past the TTL, returning how many went"""
        with self._lock:
            expired = [sid for sid, s in self.sessions.items() if s.is_expired(self.ttl_hours)]
            for sid in expired:
                del self.sessions[sid]

        if expired:
            print(f"🗑️ Cleaned up {len(expired)} expired session(s)")
        return len(expired)

    def get_session_count(self) -> int:
        """Get number of active sessions"""
        with self._lock:
            return len(self.sessions)

    def close(self):
        """Stop the background cleanup thread"""
        self._stop.set()

    def _create_session(self, session_id: str) -> SessionData:
        session = SessionData(session_id=session_id)
        self.sessions[session_id] = session
        print(f"✅ Created new session: {session_id}")
        return session

    def _cleanup_loop(self):
        while not self._stop.wait(self.cleanup_interval):
            self.cleanup_expired_sessions()
