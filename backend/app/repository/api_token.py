"""
API token repository: creates and looks up authentication tokens.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from app.core.security import generate_token
from app.database import api_token_table
from app.models.api_token import ApiToken
from app.models.user import User
from app.repository.base import BaseRepository
from app.repository.mapping import Field

logger = logging.getLogger(__name__)


class ApiTokenRepository(BaseRepository):
    entity_class = ApiToken
    table = api_token_table
    fields = (
        Field("id"),
        Field("token"),
        Field("user_id"),
        Field("notes"),
        Field("created_at"),
    )

    def create_token(self, user: User, notes: str = None, clock: Callable[[], datetime] = datetime.now) -> ApiToken:
        """
        Create and save a new random token for a user.

        Args:
            user: Saved user the token authenticates
            notes: What the token will be used for
            clock: Source of the creation time

        Returns:
            The saved ApiToken
        """
        token = ApiToken(
            token=generate_token(),
            user_id=user.id,
            notes=notes,
            created_at=clock().replace(microsecond=0),
        )
        self.save(token)
        logger.info(f"Created API token #{token.id} for user #{user.id}")

        return token

    def find_one_by_token(self, token: str) -> Optional[ApiToken]:
        return self.find_one_by({"token": token})

    def find_all_for_user(self, user: User) -> List[ApiToken]:
        return self.find_all_by({"user_id": user.id})

    def finish_hydrate(self, entity: ApiToken) -> None:
        self.normalize_date(entity, "created_at")
