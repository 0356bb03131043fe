"""Password hashing helpers."""

from passlib.hash import pbkdf2_sha256


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    return pbkdf2_sha256.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash.

    Malformed hashes count as a mismatch.
    """
    try:
        return pbkdf2_sha256.verify(password, password_hash)
    except ValueError:
        return False
