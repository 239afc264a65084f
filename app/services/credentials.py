"""Random secret generation and bcrypt hashing."""

import secrets

import bcrypt

from app.exceptions import ValidationError

DEFAULT_SECRET_BYTES = 16


def generate_secret(byte_length: int = DEFAULT_SECRET_BYTES) -> str:
    """Return `byte_length` cryptographically random bytes, hex encoded."""
    if byte_length <= 0:
        raise ValidationError("byte_length must be positive")
    return secrets.token_hex(byte_length)


def hash_secret(secret: str, rounds: int) -> str:
    """Salted one-way hash of `secret` at the given bcrypt cost."""
    return bcrypt.hashpw(secret.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_secret(secret: str, hashed: str) -> bool:
    return bcrypt.checkpw(secret.encode("utf-8"), hashed.encode("utf-8"))
