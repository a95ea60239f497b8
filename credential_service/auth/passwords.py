"""
Password hashing and verification.

Uses bcrypt with automatic salting and a fixed work factor.
"""
import bcrypt

from credential_service.config import BCRYPT_ROUNDS

# bcrypt only reads the first 72 bytes of a secret
BCRYPT_MAX_BYTES = 72


def _encode(secret: str) -> bytes:
    return secret.encode("utf-8")[:BCRYPT_MAX_BYTES]


class CredentialHasher:
    """One-way hashing of plaintext secrets."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        """Generate a salted bcrypt hash for ``plaintext``."""
        return bcrypt.hashpw(_encode(plaintext), bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Check ``plaintext`` against a stored hash. Malformed hashes never match."""
        try:
            return bcrypt.checkpw(_encode(plaintext), hashed.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            return False
