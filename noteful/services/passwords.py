"""
Noteful API: Password Hashing
==============================

Thin wrapper over `bcrypt`. Every digest carries its own random salt and the
cost factor it was made with, so changing `BCRYPT_ROUNDS` only affects new
hashes and old ones keep verifying.
"""

import bcrypt

from noteful.config import settings

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Constant-time check of `password` against a stored digest.

    Returns False for a digest bcrypt cannot parse instead of raising, so a
    corrupted row reads as a failed login.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False
