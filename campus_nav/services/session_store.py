# campus_nav/services/session_store.py
import threading
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, Optional

from campus_nav.core.errors import SessionNotFoundError
from campus_nav.core.logger import logger
from campus_nav.services.navigation_session import NavigationSession


@dataclass
class _Entry:
    session: NavigationSession
    last_used: float
    lock: threading.Lock = field(default_factory=threading.Lock)


class SessionStore:
    # In-memory registry of navigation sessions for the HTTP layer.
    #
    # Sessions themselves do no locking; `checkout` serializes all calls
    # into one session while leaving other sessions free to proceed.
    # Sessions unused for longer than `idle_ttl_s` are dropped on the next
    # add or checkout; clients that are done should still remove theirs.

    def __init__(
        self,
        idle_ttl_s: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.idle_ttl_s = idle_ttl_s
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: Dict[str, _Entry] = {}

    def add(self, session: NavigationSession) -> str:
        session_id = uuid.uuid4().hex
        with self._lock:
            self._evict_idle()
            self._sessions[session_id] = _Entry(session=session, last_used=self._clock())
        logger.info("Navigation session {} created", session_id)
        return session_id

    @contextmanager
    def checkout(self, session_id: str) -> Iterator[NavigationSession]:
        """
        Hold exclusive access to one session for the duration of the block.
        """
        entry = self._entry(session_id)
        with entry.lock:
            try:
                yield entry.session
            finally:
                entry.last_used = self._clock()

    def remove(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFoundError(session_id)
        logger.info("Navigation session {} removed", session_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _entry(self, session_id: str) -> _Entry:
        with self._lock:
            self._evict_idle()
            try:
                entry = self._sessions[session_id]
            except KeyError:
                raise SessionNotFoundError(session_id) from None
            entry.last_used = self._clock()
            return entry

    def _evict_idle(self) -> None:
        # Caller holds self._lock
        if self.idle_ttl_s is None:
            return

        cutoff = self._clock() - self.idle_ttl_s
        stale = [
            session_id
            for session_id, entry in self._sessions.items()
            if entry.last_used < cutoff and not entry.lock.locked()
        ]
        for session_id in stale:
            del self._sessions[session_id]

        if stale:
            logger.info("Evicted {} idle navigation session(s)", len(stale))
