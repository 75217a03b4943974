"""Thread-safe in-memory store for conversational search sessions."""

import threading
import uuid
from collections import OrderedDict
from datetime import datetime, timedelta, timezone

from models.conversation import Session
from utils.logger import get_logger

logger = get_logger(__name__)


class SessionStore:
    """
    Maps session identifiers to live ``Session`` objects.

    Entries are kept in least-recently-used order. When ``max_sessions`` is
    exceeded the least recently used session is evicted; when ``ttl_seconds``
    is set, sessions idle for longer than that are dropped on lookup.
    A bound or TTL of 0 disables that limit.

    The store only inserts and looks up; sessions are mutated by the
    orchestrator under each session's own lock.
    """

    ID_LENGTH = 12

    def __init__(self, max_sessions: int = 0, ttl_seconds: int = 0):
        if max_sessions < 0 or ttl_seconds < 0:
            raise ValueError("max_sessions and ttl_seconds must be >= 0")
        self._lock = threading.Lock()
        self._sessions: OrderedDict[str, Session] = OrderedDict()
        self._max_sessions = max_sessions
        self._ttl = timedelta(seconds=ttl_seconds) if ttl_seconds else None

    def _new_id(self) -> str:
        session_id = uuid.uuid4().hex[: self.ID_LENGTH]
        while session_id in self._sessions:
            session_id = uuid.uuid4().hex[: self.ID_LENGTH]
        return session_id

    def _is_expired(self, session: Session) -> bool:
        if self._ttl is None:
            return False
        return datetime.now(timezone.utc) - session.last_accessed > self._ttl

    def new_session(self) -> Session:
        """
        Build an empty session with a fresh identifier, without registering it.

        Returns:
            The new, unregistered Session
        """
        with self._lock:
            return Session(id=self._new_id())

    def add(self, session: Session) -> None:
        """
        Register a session, evicting the least recently used ones past ``max_sessions``.

        Args:
            session: Session built by ``new_session``
        """
        with self._lock:
            if session.id in self._sessions:
                raise ValueError(f"Session {session.id} is already registered")
            self._sessions[session.id] = session
            evicted = []
            if self._max_sessions:
                while len(self._sessions) > self._max_sessions:
                    evicted_id, _ = self._sessions.popitem(last=False)
                    evicted.append(evicted_id)

        for evicted_id in evicted:
            logger.info(
                "Evicted least recently used session",
                extra={"extra_fields": {"session_id": evicted_id}},
            )

    def create(self) -> Session:
        """Build and register a new, empty session."""
        session = self.new_session()
        self.add(session)
        return session

    def get(self, session_id: str) -> Session | None:
        """
        Look up a session and mark it as recently used.

        Args:
            session_id: Session identifier

        Returns:
            Session if it exists and has not expired, None otherwise
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if self._is_expired(session):
                del self._sessions[session_id]
                expired = True
            else:
                self._sessions.move_to_end(session_id)
                session.touch()
                expired = False

        if expired:
            logger.info(
                "Dropped expired session",
                extra={"extra_fields": {"session_id": session_id}},
            )
            return None
        return session

    def clear(self) -> None:
        """Drop all sessions (for testing)."""
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions


_store: SessionStore | None = None
_store_lock = threading.Lock()


def get_session_store() -> SessionStore:
    """Get the process-wide session store, sized from configuration."""
    global _store
    with _store_lock:
        if _store is None:
            from config.config import get_config

            config = get_config()
            _store = SessionStore(
                max_sessions=config.SESSION_MAX_ENTRIES,
                ttl_seconds=config.SESSION_TTL_SECONDS,
            )
        return _store
