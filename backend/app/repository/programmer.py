"""
Programmer repository.
"""

from typing import List, Optional

from app.database import programmer_table
from app.models.programmer import Programmer
from app.models.user import User
from app.repository.base import BaseRepository
from app.repository.mapping import Field


class ProgrammerRepository(BaseRepository):
    entity_class = Programmer
    table = programmer_table
    fields = (
        Field("id"),
        Field("nickname"),
        Field("avatar_number"),
        Field("tag_line"),
        Field("user_id"),
        Field("power_level"),
    )

    def find_one_by_nickname(self, nickname: str) -> Optional[Programmer]:
        return self.find_one_by({"nickname": nickname})

    def find_all_for_user(self, user: User) -> List[Programmer]:
        return self.find_all_by({"user_id": user.id})
