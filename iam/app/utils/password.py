"""
Password Policy & Hashing

bcrypt hashing at cost 10 plus the strength policy applied on signup and
password change. Rules are checked in a fixed order and the first failing
rule decides the error.
"""

import re
from typing import Optional

import bcrypt

from iam.domain import errors
from iam.domain.result import Error

BCRYPT_COST = 10
# bcrypt only reads the first 72 bytes; truncate explicitly so hash and verify agree
BCRYPT_MAX_BYTES = 72

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 128

_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_DIGIT = re.compile(r"[0-9]")
_SPECIAL = re.compile(r"""[!@#$%^&*()_+\-=\[\]{};':"\\|,.<>/?~`]""")


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Salted one-way hash; two calls on the same input give different hashes."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(BCRYPT_COST)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison. Garbled hashes verify False instead of raising."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


def validate_password_strength(password: str) -> Optional[Error]:
    """Return the first violated rule, or None when the password is acceptable."""
    if len(password) < PASSWORD_MIN_LENGTH:
        return errors.PASSWORD_TOO_SHORT
    if len(password) > PASSWORD_MAX_LENGTH:
        return errors.PASSWORD_TOO_LONG
    if not _UPPER.search(password):
        return errors.PASSWORD_NO_UPPER
    if not _LOWER.search(password):
        return errors.PASSWORD_NO_LOWER
    if not _DIGIT.search(password):
        return errors.PASSWORD_NO_DIGIT
    if not _SPECIAL.search(password):
        return errors.PASSWORD_NO_SPECIAL
    return None
