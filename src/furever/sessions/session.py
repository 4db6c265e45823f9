"""Session value object.

A session binds a random 64-byte token to a user id until an absolute
expiration instant. The token travels as 128 lowercase hex characters.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta

TOKEN_BYTES = 64
DEFAULT_TTL = timedelta(hours=24)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class Session:
    """Server-issued proof of authentication.

    Create with ``Session.create(user_id)``; the token is drawn from
    ``secrets`` and never reused.
    """

    token: bytes
    user_id: int
    expiration: datetime

    @classmethod
    def create(
        cls,
        user_id: int,
        *,
        now: datetime | None = None,
        ttl: timedelta = DEFAULT_TTL,
    ) -> Session:
        """Mint a session for *user_id* expiring *ttl* after *now*."""
        issued_at = now or utc_now()
        return cls(
            token=secrets.token_bytes(TOKEN_BYTES),
            user_id=user_id,
            expiration=issued_at + ttl,
        )

    @property
    def token_string(self) -> str:
        """The token rendered for transport (128 lowercase hex chars)."""
        return self.token.hex()

    @staticmethod
    def token_from_string(token_string: str) -> bytes:
        """Decode a transport token back to its raw bytes.

        Raises ``ValueError`` if *token_string* is not exactly
        ``2 * TOKEN_BYTES`` hex characters.
        """
        if len(token_string) != TOKEN_BYTES * 2:
            msg = f"Session token must be {TOKEN_BYTES * 2} hex characters."
            raise ValueError(msg)
        return bytes.fromhex(token_string)

    def is_expired(self, now: datetime) -> bool:
        """True once *now* has reached the expiration instant."""
        return self.expiration <= now

    def refreshed(self, *, now: datetime | None = None, ttl: timedelta = DEFAULT_TTL) -> Session:
        """Same token and user, expiration moved to *now* + *ttl*."""
        return replace(self, expiration=(now or utc_now()) + ttl)
