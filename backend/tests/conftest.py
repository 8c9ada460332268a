"""
Shared fixtures: an in-memory database, the repositories on top of it,
a scripted random source and an authenticated API client.
"""

import random

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.pool import StaticPool

from main import app
from app.database import get_engine, make_engine, metadata
from app.models.programmer import Programmer
from app.models.project import Project
from app.models.user import User
from app.repository.container import build_repositories


class ScriptedRandom(random.Random):
    """Random source whose randint() returns a fixed sequence of draws."""

    def __init__(self, draws):
        super().__init__(0)
        self.draws = list(draws)

    def randint(self, a, b):
        value = self.draws.pop(0)
        assert a <= value <= b, f"scripted draw {value} outside {a}..{b}"
        return value


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database for each test."""
    test_engine = make_engine("sqlite://", poolclass=StaticPool)
    metadata.create_all(bind=test_engine)
    yield test_engine
    metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def repositories(engine):
    return build_repositories(engine)


@pytest.fixture
def statements(engine):
    """Record every SQL statement executed against the engine."""
    executed = []

    def record(conn, cursor, statement, parameters, context, executemany):
        executed.append(statement.strip().split()[0].upper())

    event.listen(engine, "before_cursor_execute", record)
    yield executed
    event.remove(engine, "before_cursor_execute", record)


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture
def user(repositories):
    user = User(email="ryan@knplabs.com", username="weaverryan", plain_password="foo")
    repositories.get("user").save(user)
    return user


@pytest.fixture
def other_user(repositories):
    user = User(email="leanna@knplabs.com", username="leannapelham", plain_password="bar")
    repositories.get("user").save(user)
    return user


@pytest.fixture
def programmer(repositories, user):
    programmer = Programmer(nickname="Fred", avatar_number=3, tag_line="Loves tests", user_id=user.id, power_level=10)
    repositories.get("programmer").save(programmer)
    return programmer


@pytest.fixture
def project(repositories):
    project = Project(name="InstaFaceTweet", difficulty_level=2)
    repositories.get("project").save(project)
    return project


@pytest.fixture
def client(engine):
    """Test client whose requests run against the in-memory database."""
    app.dependency_overrides[get_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(repositories, user):
    token = repositories.get("api_token").create_token(user, "Testing")
    return {"Authorization": f"token {token.token}"}
