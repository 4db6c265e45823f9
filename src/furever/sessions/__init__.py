"""Bearer-token sessions: issue, look up, expire.

Sessions live in process memory for the lifetime of the server.
"""

from furever.sessions.session import DEFAULT_TTL, TOKEN_BYTES, Session, utc_now
from furever.sessions.store import Clock, SessionStore

__all__ = ["DEFAULT_TTL", "TOKEN_BYTES", "Clock", "Session", "SessionStore", "utc_now"]
