"""
Password hashing and verification.

Wraps Werkzeug's salted PBKDF2-SHA256 helpers; the iteration count is
fixed per hasher and never below ``config.MIN_HASH_ITERATIONS``.
"""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from config import MIN_HASH_ITERATIONS

from .errors import HashingError

DEFAULT_HASH_ITERATIONS = 600_000
SALT_LENGTH = 16


class PasswordHasher:
    """One-way salted hashing of plaintext secrets."""

    def __init__(self, iterations: int = DEFAULT_HASH_ITERATIONS):
        if iterations < MIN_HASH_ITERATIONS:
            raise ValueError(
                f"iterations must be at least {MIN_HASH_ITERATIONS}, got {iterations}"
            )
        self.iterations = iterations
        self.method = f"pbkdf2:sha256:{iterations}"

    def hash(self, plaintext: str) -> str:
        """Return a new salted hash; two calls on the same input differ."""
        try:
            return generate_password_hash(
                plaintext, method=self.method, salt_length=SALT_LENGTH
            )
        except (OSError, MemoryError) as exc:
            raise HashingError("Password hashing failed.") from exc

    def verify(self, plaintext: str, hashed: str | None) -> bool:
        """Constant-time check of ``plaintext`` against ``hashed``."""
        if not hashed:
            return False
        try:
            return check_password_hash(hashed, plaintext)
        except ValueError:
            # Unknown method or corrupt parameters embedded in the stored hash.
            return False
