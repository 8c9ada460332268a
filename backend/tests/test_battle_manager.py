"""
Tests for BattleManager: eligibility, random outcome and power cost.
"""

import random
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from app.core.battle_manager import (
    BattleManager,
    NOTES_LOSS,
    NOTES_NOT_ENOUGH_POWER,
    NOTES_WIN,
)
from app.models.programmer import Programmer
from app.models.project import Project

FIXED_NOW = datetime(2014, 6, 2, 14, 30, 5, 123456)


def make_manager(repositories, rng=None):
    return BattleManager(
        repositories.get("battle"),
        repositories.get("programmer"),
        rng=rng,
        clock=lambda: FIXED_NOW,
    )


class TestNotEnoughPower:
    """A programmer weaker than the project loses without spending power."""

    def test_automatic_loss(self, repositories, user):
        programmer = Programmer(nickname="Newbie", avatar_number=1, user_id=user.id, power_level=3)
        repositories.get("programmer").save(programmer)
        project = repositories.get("project").save(Project(name="Hard", difficulty_level=5))

        battle = make_manager(repositories).battle(programmer, project)

        assert battle.did_programmer_win is False
        assert battle.notes == NOTES_NOT_ENOUGH_POWER
        assert programmer.power_level == 3
        assert repositories.get("programmer").find(programmer.id).power_level == 3

    def test_no_random_draw(self, repositories, user):
        """The outcome is decided without touching the random source."""
        rng = MagicMock(spec=random.Random)
        programmer = Programmer(nickname="Newbie", avatar_number=1, user_id=user.id, power_level=0)
        repositories.get("programmer").save(programmer)
        project = repositories.get("project").save(Project(name="Hard", difficulty_level=1))

        make_manager(repositories, rng).battle(programmer, project)

        rng.randint.assert_not_called()


class TestEnoughPower:
    """A programmer at least as strong as the project fights for real."""

    def test_win(self, repositories, programmer, project, scripted_random):
        battle = make_manager(repositories, scripted_random([0])).battle(programmer, project)

        assert battle.did_programmer_win is True
        assert battle.notes == NOTES_WIN
        assert programmer.power_level == 8

    def test_loss_still_costs_power(self, repositories, programmer, project, scripted_random):
        battle = make_manager(repositories, scripted_random([2])).battle(programmer, project)

        assert battle.did_programmer_win is False
        assert battle.notes == NOTES_LOSS
        assert programmer.power_level == 8

    def test_equal_power_can_fight(self, repositories, user, scripted_random):
        programmer = Programmer(nickname="Even", avatar_number=1, user_id=user.id, power_level=5)
        repositories.get("programmer").save(programmer)
        project = repositories.get("project").save(Project(name="Same", difficulty_level=5))

        battle = make_manager(repositories, scripted_random([1])).battle(programmer, project)

        assert battle.did_programmer_win is True
        assert programmer.power_level == 0

    def test_battle_and_programmer_are_saved(self, repositories, programmer, project, scripted_random):
        battle = make_manager(repositories, scripted_random([1])).battle(programmer, project)

        saved = repositories.get("battle").find(battle.id)
        assert saved.programmer.id == programmer.id
        assert saved.programmer.power_level == 8
        assert saved.project == project
        assert saved.did_programmer_win is True
        assert saved.fought_at == FIXED_NOW.replace(microsecond=0)
        assert saved.notes == NOTES_WIN

    def test_battles_are_listed_per_programmer(self, repositories, programmer, project, scripted_random):
        manager = make_manager(repositories, scripted_random([0, 2]))
        manager.battle(programmer, project)
        manager.battle(programmer, project)

        battles = repositories.get("battle").find_all_for_programmer(programmer)
        assert [b.did_programmer_win for b in battles] == [True, False]


class TestOutcomeDistribution:
    """Statistical behaviour over many battles, with in-memory repositories."""

    def test_two_thirds_win_rate(self):
        battle_repository = MagicMock()
        programmer_repository = MagicMock()
        manager = BattleManager(battle_repository, programmer_repository, rng=random.Random(1234))
        project = Project(id=1, name="Easy", difficulty_level=2)
        programmer = Programmer(id=1, nickname="Grinder", power_level=10)

        trials = 3000
        wins = 0
        for _ in range(trials):
            programmer.power_level = 10
            battle = manager.battle(programmer, project)
            assert programmer.power_level == 8
            wins += battle.did_programmer_win

        assert wins / trials == pytest.approx(2 / 3, abs=0.05)
        assert battle_repository.save.call_count == trials
        assert programmer_repository.save.call_count == trials
