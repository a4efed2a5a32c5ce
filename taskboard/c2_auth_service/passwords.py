"""Password hashing and verification."""

import logging
import secrets

import bcrypt

from taskboard.c1_errors.errors import ValidationFailed

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
DEFAULT_BCRYPT_ROUNDS = 12

# bcrypt only considers the first 72 bytes of its input
_BCRYPT_MAX_BYTES = 72


def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(
    plaintext: str,
    rounds: int = DEFAULT_BCRYPT_ROUNDS,
    min_length: int = MIN_PASSWORD_LENGTH,
) -> str:
    """Hash a plaintext password with a fresh random salt.

    Args:
        plaintext: Password supplied by the caller
        rounds: bcrypt cost factor
        min_length: Minimum accepted length, checked before hashing

    Returns:
        The bcrypt digest ("$2b$...")

    Raises:
        ValidationFailed: If the password is shorter than ``min_length``
    """
    if not isinstance(plaintext, str) or len(plaintext) < min_length:
        raise ValidationFailed(f"Password must be at least {min_length} characters long")
    return bcrypt.hashpw(_encode(plaintext), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(plaintext: str, digest: str) -> bool:
    """Check a plaintext against a stored digest in constant time."""
    if not plaintext or not digest:
        return False
    try:
        return bcrypt.checkpw(_encode(plaintext), digest.encode("ascii"))
    except ValueError:
        logger.warning("Stored password digest is malformed")
        return False


def generate_random_password() -> str:
    """Random plaintext for accounts that never log in with a password."""
    return secrets.token_urlsafe(32)
