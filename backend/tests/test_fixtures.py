"""
Tests for FixturesManager.
"""

import random

from app.fixtures import DEMO_PROJECTS, FixturesManager
from app.models.programmer import Programmer


def test_populate_data(engine, repositories):
    FixturesManager(engine, repositories, rng=random.Random(3)).populate_data()

    user = repositories.get("user").find_user_by_username("weaverryan")
    assert user.email == "ryan@knplabs.com"
    assert repositories.get("user").check_password(user, "foo")

    projects = repositories.get("project").find_all()
    assert [p.name for p in projects] == list(DEMO_PROJECTS)
    assert all(1 <= p.difficulty_level <= 10 for p in projects)


def test_clear_tables(engine, repositories, programmer, project):
    FixturesManager(engine, repositories).clear_tables()

    assert repositories.get("programmer").find_all() == []
    assert repositories.get("project").find_all() == []
    assert repositories.get("user").find_all() == []


def test_reset_database(engine, repositories, user):
    manager = FixturesManager(engine, repositories)
    manager.reset_database()

    assert repositories.get("user").find_all() == []

    # tables are usable again after the reset
    manager.populate_data()
    owner = repositories.get("user").find_last()
    repositories.get("programmer").save(Programmer(nickname="Again", avatar_number=1, user_id=owner.id))
    assert repositories.get("programmer").find_one_by_nickname("Again") is not None
