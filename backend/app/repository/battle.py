"""
Battle repository.

Battles reference their programmer and project through programmerId and
projectId columns, which are loaded back as full entities.
"""

from typing import List

from app.database import battle_table
from app.models.battle import Battle
from app.models.programmer import Programmer
from app.repository.base import BaseRepository
from app.repository.mapping import BelongsTo, Field


class BattleRepository(BaseRepository):
    entity_class = Battle
    table = battle_table
    fields = (
        Field("id"),
        BelongsTo("programmer", "programmer"),
        BelongsTo("project", "project"),
        Field("did_programmer_win"),
        Field("fought_at"),
        Field("notes"),
    )

    def find_all_for_programmer(self, programmer: Programmer) -> List[Battle]:
        return self.find_all_by({"programmer": programmer})

    def finish_hydrate(self, entity: Battle) -> None:
        # SQLite hands back the outcome as an integer and the date as text
        if entity.did_programmer_win is not None:
            entity.did_programmer_win = bool(entity.did_programmer_win)
        self.normalize_date(entity, "fought_at")
