"""
User repository.

Hashes the transient plain_password on save so only the argon2 hash is
ever written to the database.
"""

import logging
from typing import Optional

from app.core.security import hash_password, verify_password
from app.database import user_table
from app.models.user import User
from app.repository.base import BaseRepository
from app.repository.mapping import Field

logger = logging.getLogger(__name__)


class UserNotFoundError(LookupError):
    """Raised when a user to authenticate cannot be found."""


class UserRepository(BaseRepository):
    entity_class = User
    table = user_table
    fields = (
        Field("id"),
        Field("email"),
        Field("username"),
        Field("password"),
    )

    def save(self, entity: User) -> User:
        if isinstance(entity, User) and entity.plain_password:
            entity.password = hash_password(entity.plain_password)
            entity.erase_credentials()

        return super().save(entity)

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self.find_one_by({"email": email})

    def find_user_by_username(self, username: str) -> Optional[User]:
        return self.find_one_by({"username": username})

    def load_user_by_username(self, email: str) -> User:
        """
        Load the user who logs in with this email.

        Raises:
            UserNotFoundError: If no user has this email
        """
        user = self.find_user_by_email(email)
        if user is None:
            raise UserNotFoundError(f'Email "{email}" does not exist.')

        return user

    def check_password(self, user: User, plain_password: str) -> bool:
        if not user.password or not plain_password:
            return False

        return verify_password(plain_password, user.password)
