"""
Password hashing, API token generation and Authorization header parsing.
"""

import secrets
from typing import Optional

import argon2

from app.config import get_settings

settings = get_settings()

_hasher = argon2.PasswordHasher(
    time_cost=2,
    memory_cost=65536,  # 64 MB
    parallelism=1,
    hash_len=32,
    salt_len=16,
    type=argon2.Type.ID,  # argon2id
)

BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


class BadAuthHeaderError(Exception):
    """Base class for malformed Authorization headers."""


class BadAuthHeaderFormatError(BadAuthHeaderError):
    """The header is not "<type> <credentials>"."""

    def __init__(self):
        super().__init__(
            f"Authorization header must be of the form '{settings.security.TOKEN_HEADER_KEY} ABCDEF'"
        )


class BadAuthHeaderTypeError(BadAuthHeaderError):
    """The header uses an authorization type other than token or Basic."""

    def __init__(self):
        super().__init__("Unknown authorization type")


def hash_password(password: str) -> str:
    """Hash a password using argon2id. Returns the full hash string."""
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against its argon2id hash.

    Returns True if the password matches. Never raises on mismatch.
    """
    try:
        return _hasher.verify(password_hash, password)
    except argon2.exceptions.VerificationError:
        return False
    except argon2.exceptions.InvalidHashError:
        return False


def to_base36(number: int) -> str:
    if number == 0:
        return "0"

    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_DIGITS[remainder])

    return "".join(reversed(digits))


def generate_token() -> str:
    """Generate a random API token string (base-36, at most TOKEN_MAX_LENGTH chars)."""
    token = to_base36(secrets.randbits(settings.security.TOKEN_BITS))
    return token[:settings.security.TOKEN_MAX_LENGTH]


def parse_authorization_header(header: str) -> Optional[str]:
    """
    Extract the token from an Authorization header.

    "token ABCDEFG" returns "ABCDEFG". Basic credentials are left for
    other handlers and return None.

    Raises:
        BadAuthHeaderFormatError: If the header isn't two space-separated parts
        BadAuthHeaderTypeError: If the type is neither "token" nor "Basic"
    """
    pieces = header.split(" ")
    if len(pieces) != 2:
        raise BadAuthHeaderFormatError()

    if pieces[0] == "Basic":
        return None

    if pieces[0] != settings.security.TOKEN_HEADER_KEY:
        raise BadAuthHeaderTypeError()

    return pieces[1]
