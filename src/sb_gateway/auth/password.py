"""Password hashing utilities using bcrypt.

Uses the ``bcrypt`` library directly (>=4.0).  passlib[bcrypt] is intentionally
avoided because passlib is unmaintained and incompatible with bcrypt >=4.

The cost factor is fixed by settings.BCRYPT_ROUNDS (default 10). Hashes made
with another cost still verify, since the cost is embedded in the hash.

bcrypt only reads the first 72 bytes of a password, and bcrypt >=5 raises on
longer input. Passwords are cut to 72 bytes before hashing and verifying.
"""

import bcrypt

from config.settings import settings

_BCRYPT_MAX_BYTES = 72


def _encode(plain: str) -> bytes:
    return plain.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(plain: str) -> str:
    """Hash a plain-text password with bcrypt. Returns a utf-8 hash string."""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    hashed_bytes: bytes = bcrypt.hashpw(_encode(plain), salt)
    return hashed_bytes.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plain-text password against a bcrypt hash (constant-time).

    A stored value that is not a bcrypt hash never matches.
    """
    try:
        return bcrypt.checkpw(_encode(plain), hashed.encode("utf-8"))
    except ValueError:
        return False
