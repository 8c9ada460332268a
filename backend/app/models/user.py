"""
User model for programmer ownership and authentication.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class User:
    """
    A registered account.

    Attributes:
        id: Primary key (None until first saved)
        email: Unique email address, also the login name
        username: Unique display name
        password: Argon2 hash of the password
        plain_password: Transient plaintext password, hashed on save and never persisted
    """
    id: Optional[int] = None
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    plain_password: Optional[str] = field(default=None, repr=False, compare=False)

    def erase_credentials(self):
        self.plain_password = None
