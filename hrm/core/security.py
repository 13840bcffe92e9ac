"""
Credential store: password digests and verification

Digests are a SHA-256 hex digest of a fixed salt followed by the password.
This keeps stored hashes deterministic and comparable across database copies;
it is not a strong password hash (no per-user salt, no work factor).
"""
import logging
from typing import Optional

from passlib.hash import hex_sha256

from hrm.core.config import settings

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _salted(password: str, salt: Optional[str] = None) -> str:
    return f"{settings.PASSWORD_SALT if salt is None else salt}{password}"


def hash_password(password: str, salt: Optional[str] = None) -> str:
    """Hash a password with the embedded salt"""
    return hex_sha256.hash(_salted(password, salt))


def verify_password(plain_password: str, hashed_password: str, salt: Optional[str] = None) -> bool:
    """Verify a password against its digest"""
    if not hashed_password:
        return False
    try:
        return hash_password(plain_password, salt) == hashed_password
    except (TypeError, ValueError) as e:
        logger.warning(f"Password verification failed: {e}")
        return False


def validate_password(password: Optional[str]) -> str:
    """
    Validate a new password before hashing

    Args:
        password: Raw password string

    Returns:
        The password unchanged

    Raises:
        ValueError: If password is missing or too short
    """
    if password is None or not password.strip():
        raise ValueError("Password cannot be empty")

    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    return password
