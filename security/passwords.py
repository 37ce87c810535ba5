"""
security/passwords.py
---------------------
Password hashing for user accounts.
Plaintext passwords are never stored; only bcrypt hashes go into users.password_hash.
"""

import bcrypt

# Work factor for bcrypt. Each increment doubles the hashing cost.
BCRYPT_ROUNDS: int = 10


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """
    Hash a password with a fresh random salt.

    Args:
        password: The plaintext password.
        rounds: bcrypt cost factor.

    Returns:
        The salted hash as text, e.g. ``$2b$10$...``.
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
