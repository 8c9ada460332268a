"""
Power manager: random power-ups for programmers.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from app.config import BattleConfig, get_settings
from app.models.programmer import Programmer
from app.repository.programmer import ProgrammerRepository

logger = logging.getLogger(__name__)

POSITIVE_MESSAGES = (
    "Wow, you just read the documentation from beginning to end! That's {} more energy for you.",
    "You just got back from a conference in a sunny city. That's worth {} more energy!",
    "When do you sleep!? You read RESTful Web APIs cover to cover - {} energy for you",
    "You went for a walk and the solution just came to you - {} more energy.",
)

NEGATIVE_MESSAGES = (
    "You *meant* to read something, but watched re-runs of Star Trek instead. "
    "Awesome, but that'll cost you {} energy",
    "You fell asleep at the office while trying to read the docs and your co-workers "
    "think you're kinda weird: {} energy",
    "Drank too much coffee and ran laps around the office instead of watching a screencast: {} energy",
)


@dataclass(frozen=True)
class PowerUpResult:
    """Outcome of a power-up: the flavour message and the power level change."""
    message: str
    delta: int

    @property
    def is_positive(self) -> bool:
        return self.delta > 0


def power_level_class(programmer: Programmer, config: Optional[BattleConfig] = None) -> str:
    """
    Style class for a programmer's power level.

    Returns:
        "danger", "warning" or "success"
    """
    config = config or get_settings().battle
    if programmer.power_level <= config.DANGER_MAX_POWER:
        return "danger"
    if programmer.power_level <= config.WARNING_MAX_POWER:
        return "warning"
    return "success"


class PowerManager:
    """Powers up programmers (sometimes it backfires)."""

    def __init__(
        self,
        programmer_repository: ProgrammerRepository,
        rng: Optional[random.Random] = None,
        config: Optional[BattleConfig] = None,
    ):
        self.programmer_repository = programmer_repository
        self.rng = rng or random.Random()
        self.config = config or get_settings().battle

    def roll_delta(self) -> int:
        """
        Draw a power change.

        The magnitude is drawn from POWER_UP_MIN..POWER_UP_MAX. One time in
        three it is halved (floor) and made negative, so losses are smaller
        than gains.
        """
        magnitude = self.rng.randint(self.config.POWER_UP_MIN, self.config.POWER_UP_MAX)
        if self.rng.randint(0, self.config.DRAW_MAX) == self.config.NEGATIVE_DRAW:
            return -(magnitude // self.config.NEGATIVE_DIVISOR)
        return magnitude

    def power_up(self, programmer: Programmer) -> PowerUpResult:
        """
        Power up this programmer and save the new power level.

        Args:
            programmer: Saved programmer

        Returns:
            PowerUpResult with a description of what happened and the change
        """
        delta = self.roll_delta()
        programmer.power_level = programmer.power_level + delta
        self.programmer_repository.save(programmer)

        messages = POSITIVE_MESSAGES if delta > 0 else NEGATIVE_MESSAGES
        message = self.rng.choice(messages).format(delta)

        logger.info(f"Programmer '{programmer.nickname}' powered up by {delta} (now {programmer.power_level})")

        return PowerUpResult(message=message, delta=delta)
