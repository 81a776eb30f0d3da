"""Password hashing for user accounts.

Hashes are stored as ``pbkdf2_sha256$<iterations>$<salt>$<digest>`` so the
work factor can be raised later without invalidating existing rows.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets

ALGORITHM = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 260_000


def _derive(password: str, salt: str, iterations: int, pepper: str) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        f"{pepper}:{password}".encode("utf-8"),
        salt.encode("utf-8"),
        iterations,
    )
    return digest.hex()


def hash_password(password: str, pepper: str = "", iterations: int = DEFAULT_ITERATIONS) -> str:
    salt = secrets.token_hex(16)
    digest = _derive(password, salt=salt, iterations=iterations, pepper=pepper)
    return f"{ALGORITHM}${iterations}${salt}${digest}"


def verify_password(password: str, hashed_password: str, pepper: str = "") -> bool:
    """Constant-time check of a password against a stored hash."""
    try:
        algorithm, iterations, salt, expected = hashed_password.split("$", 3)
        rounds = int(iterations)
    except ValueError:
        return False
    if algorithm != ALGORITHM:
        return False
    candidate = _derive(password, salt=salt, iterations=rounds, pepper=pepper)
    return hmac.compare_digest(candidate, expected)
