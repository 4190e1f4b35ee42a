"""In-process session store keyed by the id carried in the signed cookie."""
import secrets
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

SESSION_ID_KEY = "sid"


@dataclass(frozen=True)
class SessionUser:
    user_id: int
    username: str
    is_admin: bool


class SessionStore:
    """Maps session ids to the identity captured at login.

    Entries older than ``max_age`` seconds are treated as missing and are
    pruned on the next login, matching the lifetime of the signed cookie.
    """

    def __init__(self, max_age: Optional[int] = None, clock: Callable[[], float] = time.monotonic) -> None:
        self.max_age = max_age
        self._clock = clock
        self._sessions: Dict[str, SessionUser] = {}
        self._created: Dict[str, float] = {}

    def _expired(self, session_id: str, now: float) -> bool:
        return self.max_age is not None and now - self._created[session_id] >= self.max_age

    def prune(self) -> int:
        """Drop expired entries and return how many were removed."""
        now = self._clock()
        stale = [session_id for session_id in self._sessions if self._expired(session_id, now)]
        for session_id in stale:
            self.discard(session_id)
        return len(stale)

    def create(self, user_id: int, username: str, is_admin: bool) -> str:
        self.prune()
        session_id = secrets.token_urlsafe(32)
        self._sessions[session_id] = SessionUser(user_id=user_id, username=username, is_admin=bool(is_admin))
        self._created[session_id] = self._clock()
        return session_id

    def get(self, session_id: Optional[str]) -> Optional[SessionUser]:
        if not session_id or session_id not in self._sessions:
            return None
        if self._expired(session_id, self._clock()):
            self.discard(session_id)
            return None
        return self._sessions[session_id]

    def discard(self, session_id: Optional[str]) -> Optional[SessionUser]:
        if not session_id:
            return None
        self._created.pop(session_id, None)
        return self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
