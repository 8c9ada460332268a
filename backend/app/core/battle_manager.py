"""
Battle manager: wages battles between programmers and projects.

A programmer whose power level is below the project's difficulty loses
straight away and keeps their power. Otherwise the outcome is drawn at
random (two chances in three to win) and the project's difficulty is
subtracted from the programmer's power level whatever happens.
"""

import logging
import random
from datetime import datetime
from typing import Callable, Optional

from app.config import BattleConfig, get_settings
from app.models.battle import Battle
from app.models.programmer import Programmer
from app.models.project import Project
from app.repository.battle import BattleRepository
from app.repository.programmer import ProgrammerRepository

logger = logging.getLogger(__name__)

NOTES_NOT_ENOUGH_POWER = (
    "You don't have the skills to even start this project. "
    "Read the documentation (i.e. power up) and try again!"
)
NOTES_WIN = "You developed this project and it was an amazing success!"
NOTES_LOSS = (
    "Hmm, the project is behind schedule and the budget is blown. "
    "Your co-workers are cursing your name. Maybe try powering up and making a second attempt?"
)


class BattleManager:
    """Creates battles and applies their outcome to the programmer."""

    def __init__(
        self,
        battle_repository: BattleRepository,
        programmer_repository: ProgrammerRepository,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.now,
        config: Optional[BattleConfig] = None,
    ):
        """
        Initialize battle manager.

        Args:
            battle_repository: Where battles are saved
            programmer_repository: Where the programmer's new power level is saved
            rng: Random source for the outcome draw
            clock: Source of the battle timestamp
            config: Battle rules (global settings by default)
        """
        self.battle_repository = battle_repository
        self.programmer_repository = programmer_repository
        self.rng = rng or random.Random()
        self.clock = clock
        self.config = config or get_settings().battle

    def battle(self, programmer: Programmer, project: Project) -> Battle:
        """
        Create and wage an epic battle.

        Saves the new battle and the programmer's changed power level as
        two separate writes.

        Args:
            programmer: Saved programmer doing the fighting
            project: Saved project being fought

        Returns:
            The saved Battle
        """
        battle = Battle(
            programmer=programmer,
            project=project,
            fought_at=self.clock().replace(microsecond=0),
        )

        if programmer.power_level < project.difficulty_level:
            battle.did_programmer_win = False
            battle.notes = NOTES_NOT_ENOUGH_POWER
        else:
            draw = self.rng.randint(0, self.config.DRAW_MAX)
            battle.did_programmer_win = draw != self.config.LOSING_DRAW
            battle.notes = NOTES_WIN if battle.did_programmer_win else NOTES_LOSS
            programmer.power_level = programmer.power_level - project.difficulty_level

        self.battle_repository.save(battle)
        self.programmer_repository.save(programmer)

        outcome = "won" if battle.did_programmer_win else "lost"
        logger.info(
            f"Programmer '{programmer.nickname}' {outcome} battle #{battle.id} "
            f"against '{project.name}' (power level now {programmer.power_level})"
        )

        return battle
