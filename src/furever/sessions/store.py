"""In-memory session store with lazy, expiration-ordered eviction.

The store keeps two structures in lock-step:

- ``_sessions``: token string -> ``Session``
- ``_expirations``: min-heap of ``(expiration, token string)``

Every live session has exactly one heap entry, and both are removed
together. ``remove_expired()`` pops from the front of the heap; it is
called after sign-in rather than on a timer, so ``get``/``has`` check
the expiration themselves.

Thread safety:
    A ``threading.Lock`` guards both structures as a unit. Under asyncio
    no method crosses an ``await``, so each call is atomic either way.
"""

import heapq
import logging
import threading
from collections.abc import Callable
from datetime import datetime
from typing import TypeAlias

from furever.sessions.session import Session, utc_now

logger = logging.getLogger("furever.sessions")

Clock: TypeAlias = Callable[[], datetime]


class SessionStore:
    """Mapping from token string to ``Session``.

    Usage::

        store = SessionStore()
        session = Session.create(user.id)
        store.add(session)
        store.remove_expired()

        store.has(session.token_string)   # True until expiry or sign-out
        store.remove(session.token_string)
    """

    __slots__ = ("_clock", "_expirations", "_lock", "_sessions")

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: dict[str, Session] = {}
        self._expirations: list[tuple[datetime, str]] = []

    @property
    def clock(self) -> Clock:
        return self._clock

    def add(self, session: Session) -> None:
        """Record *session* under its token string."""
        token = session.token_string
        with self._lock:
            previous = self._sessions.get(token)
            if previous is not None:
                self._drop_entry(previous.expiration, token)
            self._sessions[token] = session
            heapq.heappush(self._expirations, (session.expiration, token))

    def get(self, token_string: str) -> Session | None:
        """Return the live session for *token_string*, or ``None``.

        A session past its expiration is reported absent even if the
        sweep hasn't evicted it yet.
        """
        with self._lock:
            session = self._sessions.get(token_string)
        if session is None or session.is_expired(self._clock()):
            return None
        return session

    def has(self, token_string: str) -> bool:
        """True if *token_string* names a live, unexpired session."""
        return self.get(token_string) is not None

    def remove(self, token_string: str) -> None:
        """Delete a session unconditionally. Unknown tokens are ignored."""
        with self._lock:
            session = self._sessions.pop(token_string, None)
            if session is not None:
                self._drop_entry(session.expiration, token_string)

    def remove_expired(self) -> int:
        """Evict every session whose expiration is at or before now.

        Stops at the first live entry. Returns the number evicted.
        """
        now = self._clock()
        evicted = 0
        with self._lock:
            while self._expirations and self._expirations[0][0] <= now:
                _, token = heapq.heappop(self._expirations)
                del self._sessions[token]
                evicted += 1
        if evicted:
            logger.debug("Evicted %d expired session(s)", evicted)
        return evicted

    def expiration_order(self) -> list[tuple[datetime, str]]:
        """Snapshot of ``(expiration, token)`` entries, earliest first."""
        with self._lock:
            return sorted(self._expirations)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _drop_entry(self, expiration: datetime, token: str) -> None:
        # Caller holds the lock.
        self._expirations.remove((expiration, token))
        heapq.heapify(self._expirations)
