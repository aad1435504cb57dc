"""Per-user session state held by the gateway."""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from google.oauth2.credentials import Credentials

from ..utils.logger import get_logger
from ..utils.security import generate_session_id

logger = get_logger(__name__)

SESSION_TTL = 24 * 60 * 60
LOGIN_STATE_TTL = 10 * 60


@dataclass
class UserSession:
    """Credentials and pending-login state for one browser or client.

    ``credentials`` is the whole token set or ``None``; it is never partially
    populated.
    """

    session_id: str
    credentials: Optional[Credentials] = None
    oauth_state: Optional[str] = None
    code_verifier: Optional[str] = None
    last_used: float = 0.0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def is_authenticated(self) -> bool:
        return self.credentials is not None

    def begin_login(self, state: str, code_verifier: Optional[str]) -> None:
        self.oauth_state = state
        self.code_verifier = code_verifier

    def complete_login(self, credentials: Credentials) -> None:
        self.credentials = credentials
        self.oauth_state = None
        self.code_verifier = None

    def clear(self) -> None:
        """Discard the token set and any half-finished login."""
        self.credentials = None
        self.oauth_state = None
        self.code_verifier = None


class SessionStore:
    """In-memory registry of user sessions; nothing is persisted.

    Sessions idle for longer than ``session_ttl`` seconds and login states
    older than ``login_state_ttl`` seconds are dropped.
    """

    def __init__(
        self,
        session_ttl: float = SESSION_TTL,
        login_state_ttl: float = LOGIN_STATE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.session_ttl = session_ttl
        self.login_state_ttl = login_state_ttl
        self._clock = clock
        self._sessions: Dict[str, UserSession] = {}
        self._pending: Dict[str, Tuple[str, float]] = {}
        self._lock = threading.Lock()

    def _is_expired(self, session: UserSession, now: float) -> bool:
        return now - session.last_used > self.session_ttl

    def _sweep(self, now: float) -> int:
        expired = [sid for sid, s in self._sessions.items() if self._is_expired(s, now)]
        for sid in expired:
            del self._sessions[sid]

        stale = [
            state for state, (sid, started) in self._pending.items()
            if now - started > self.login_state_ttl or sid not in self._sessions
        ]
        for state in stale:
            del self._pending[state]

        return len(expired) + len(stale)

    def get(self, session_id: Optional[str]) -> Optional[UserSession]:
        if not session_id:
            return None
        now = self._clock()
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if self._is_expired(session, now):
                del self._sessions[session_id]
                return None
            session.last_used = now
            return session

    def create(self) -> UserSession:
        now = self._clock()
        session = UserSession(session_id=generate_session_id(), last_used=now)
        with self._lock:
            self._sweep(now)
            self._sessions[session.session_id] = session
        logger.debug("Created new session")
        return session

    def discard(self, session_id: str) -> None:
        with self._lock:
            session = self._sessions.pop(session_id, None)
            if session is not None and session.oauth_state:
                self._pending.pop(session.oauth_state, None)

    def register_login(self, session: UserSession, state: str, code_verifier: Optional[str]) -> None:
        """Remember which session started the consent flow for ``state``."""
        with self._lock:
            if session.oauth_state:
                self._pending.pop(session.oauth_state, None)
            session.begin_login(state, code_verifier)
            self._pending[state] = (session.session_id, self._clock())

    def pop_pending(self, state: Optional[str]) -> Optional[UserSession]:
        """Take the session waiting on ``state``; each state is usable once."""
        if not state:
            return None
        now = self._clock()
        with self._lock:
            entry = self._pending.pop(state, None)
            if entry is None:
                return None
            session_id, started = entry
            if now - started > self.login_state_ttl:
                logger.debug("Login state expired before the callback arrived")
                return None
            session = self._sessions.get(session_id)
            if session is None or self._is_expired(session, now):
                self._sessions.pop(session_id, None)
                return None
            session.last_used = now
            return session

    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
