"""
Tests for PowerManager and the power level style helper.
"""

import random
from unittest.mock import MagicMock

import pytest

from app.core.power_manager import (
    NEGATIVE_MESSAGES,
    POSITIVE_MESSAGES,
    PowerManager,
    PowerUpResult,
    power_level_class,
)
from app.models.programmer import Programmer


def message_templates_for(result: PowerUpResult):
    pool = POSITIVE_MESSAGES if result.delta > 0 else NEGATIVE_MESSAGES
    return [template.format(result.delta) for template in pool]


class TestPowerUp:
    """Test power_up() against the database."""

    @pytest.mark.parametrize("draws,expected", [
        ([3, 0], 3),
        ([7, 1], 7),
        ([3, 2], -1),
        ([5, 2], -2),
        ([7, 2], -3),
    ])
    def test_delta(self, repositories, programmer, scripted_random, draws, expected):
        manager = PowerManager(repositories.get("programmer"), rng=scripted_random(draws))

        result = manager.power_up(programmer)

        assert result.delta == expected
        assert programmer.power_level == 10 + expected
        assert repositories.get("programmer").find(programmer.id).power_level == 10 + expected

    def test_positive_message(self, repositories, programmer, scripted_random):
        manager = PowerManager(repositories.get("programmer"), rng=scripted_random([6, 0]))

        result = manager.power_up(programmer)

        assert result.is_positive
        assert result.message in message_templates_for(result)
        assert "6" in result.message

    def test_negative_message(self, repositories, programmer, scripted_random):
        manager = PowerManager(repositories.get("programmer"), rng=scripted_random([6, 2]))

        result = manager.power_up(programmer)

        assert not result.is_positive
        assert result.message in message_templates_for(result)
        assert "-3" in result.message


class TestDeltaDistribution:
    """Bounds and sign balance over many draws."""

    def test_bounds_and_message_pool(self):
        manager = PowerManager(MagicMock(), rng=random.Random(42))
        programmer = Programmer(id=1, nickname="Grinder", power_level=0)

        deltas = []
        for _ in range(2000):
            result = manager.power_up(programmer)
            assert result.delta in (-3, -2, -1, 3, 4, 5, 6, 7)
            assert result.message in message_templates_for(result)
            deltas.append(result.delta)

        negative_share = sum(1 for d in deltas if d < 0) / len(deltas)
        assert negative_share == pytest.approx(1 / 3, abs=0.05)
        assert programmer.power_level == sum(deltas)


class TestPowerLevelClass:
    """Test the danger/warning/success styling."""

    @pytest.mark.parametrize("power_level,expected", [
        (-4, "danger"),
        (3, "danger"),
        (4, "warning"),
        (7, "warning"),
        (8, "success"),
    ])
    def test_power_level_class(self, power_level, expected):
        assert power_level_class(Programmer(power_level=power_level)) == expected
