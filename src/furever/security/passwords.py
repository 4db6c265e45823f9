"""Password hashing: argon2id via ``argon2-cffi``.

Hashes are PHC-format strings (``$argon2id$v=19$m=...``), safe to store
as-is in the ``passwordHash`` column.

The module-level functions are blocking. ``PasswordHasher`` wraps them
for handlers: each call runs in an anyio worker thread so hashing never
stalls the event loop.
"""

import anyio.to_thread
from argon2 import PasswordHasher as _Argon2Hasher
from argon2.exceptions import InvalidHashError, VerificationError

_ARGON2_PREFIX = "$argon2"

_hasher = _Argon2Hasher()


def hash_password(password: str) -> str:
    """Hash a password with argon2id.

    Args:
        password: The plaintext password to hash.

    Returns:
        A PHC-format hash string (``$argon2id$...``).

    Raises:
        ValueError: If *password* is empty.
    """
    if not password:
        msg = "Password must not be empty."
        raise ValueError(msg)
    return _hasher.hash(password)


def verify_password(password: str, phc_hash: str) -> bool:
    """Verify a password against a stored argon2 hash.

    Returns ``False`` for a wrong password or an empty input.
    Raises ``ValueError`` when *phc_hash* is not an argon2 hash at all,
    since that means the stored row is corrupt rather than the user
    mistyped.
    """
    if not password or not phc_hash:
        return False

    if not phc_hash.startswith(_ARGON2_PREFIX):
        msg = f"Unknown hash format: {phc_hash[:20]}..."
        raise ValueError(msg)

    try:
        return _hasher.verify(phc_hash, password)
    except VerificationError:
        return False
    except InvalidHashError as exc:
        msg = f"Malformed argon2 hash: {phc_hash[:20]}..."
        raise ValueError(msg) from exc


class PasswordHasher:
    """Async facade over ``hash_password`` / ``verify_password``.

    Routes take one of these instead of calling the functions directly,
    so tests can substitute a cheaper hasher.
    """

    __slots__ = ()

    async def hash(self, password: str) -> str:
        return await anyio.to_thread.run_sync(hash_password, password)

    async def verify(self, password: str, phc_hash: str) -> bool:
        return await anyio.to_thread.run_sync(verify_password, password, phc_hash)
