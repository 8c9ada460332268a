"""
Tests for the repository lookup registry and mapping descriptors.
"""

import pytest
from sqlalchemy.pool import StaticPool

from app.api.dependencies import get_repositories, repositories_for
from app.database import make_engine
from app.repository.battle import BattleRepository
from app.repository.container import RepositoryContainer, RepositoryNotFoundError
from app.repository.mapping import BelongsTo, Field, camelize
from app.repository.programmer import ProgrammerRepository


class TestRepositoryContainer:
    """Test name -> repository lookup."""

    def test_get_registered(self, repositories):
        assert isinstance(repositories.get("programmer"), ProgrammerRepository)
        assert isinstance(repositories.get("battle"), BattleRepository)

    def test_get_returns_same_instance(self, repositories):
        assert repositories.get("project") is repositories.get("project")

    def test_repositories_share_the_container(self, repositories):
        assert repositories.get("battle").repositories is repositories

    def test_unknown_name(self, repositories):
        with pytest.raises(RepositoryNotFoundError, match="wizard"):
            repositories.get("wizard")

    def test_names(self, repositories):
        assert repositories.names() == ["api_token", "battle", "programmer", "project", "user"]
        assert "user" in repositories
        assert "wizard" not in repositories

    def test_empty_container(self):
        with pytest.raises(KeyError):
            RepositoryContainer({}).get("programmer")


class TestMapping:
    """Test column naming of mapping descriptors."""

    @pytest.mark.parametrize("attribute,column", [
        ("id", "id"),
        ("avatar_number", "avatarNumber"),
        ("did_programmer_win", "didProgrammerWin"),
    ])
    def test_camelize(self, attribute, column):
        assert camelize(attribute) == column

    def test_field_defaults_to_camel_case_column(self):
        assert Field("power_level").column == "powerLevel"

    def test_field_explicit_column(self):
        assert Field("tag_line", "tagline").column == "tagline"

    def test_belongs_to_column(self):
        relation = BelongsTo("programmer", "programmer")
        assert relation.column == "programmerId"
        assert relation.repository == "programmer"


class TestRequestRepositories:
    """Test the container handed to API requests."""

    def test_one_container_per_engine(self, engine):
        first = get_repositories(engine)

        assert get_repositories(engine) is first
        assert get_repositories(engine).get("programmer") is first.get("programmer")

    def test_engines_do_not_share_containers(self, engine):
        other_engine = make_engine("sqlite://", poolclass=StaticPool)
        try:
            assert repositories_for(other_engine) is not repositories_for(engine)
        finally:
            other_engine.dispose()
