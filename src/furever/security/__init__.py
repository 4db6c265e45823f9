"""Security utilities: password hashing.

Usage::

    from furever.security import PasswordHasher

    hasher = PasswordHasher()
    hashed = await hasher.hash("my-password")
    ok = await hasher.verify("my-password", hashed)
"""

from furever.security.passwords import PasswordHasher, hash_password, verify_password

__all__ = ["PasswordHasher", "hash_password", "verify_password"]
