"""
Repository lookup registry.

Lets a repository find the repository of a related entity by its short
name ("programmer", "project", ...) without importing every sibling.
"""

from typing import Callable, Dict, Mapping, TYPE_CHECKING

from sqlalchemy.engine import Engine

if TYPE_CHECKING:
    from app.repository.base import BaseRepository


class RepositoryNotFoundError(KeyError):
    """Raised when an unregistered repository name is requested."""


class RepositoryContainer:
    """
    Maps relationship names to repositories.

    The mapping is fixed at construction. Each entry is a factory that
    receives the container, so repositories can hold a reference to it
    before all of their siblings exist; instances are created on first
    lookup and reused afterwards.
    """

    def __init__(self, factories: Mapping[str, Callable[["RepositoryContainer"], "BaseRepository"]]):
        self._factories = dict(factories)
        self._instances: Dict[str, "BaseRepository"] = {}

    def get(self, name: str) -> "BaseRepository":
        """
        Get the repository registered under name.

        Raises:
            RepositoryNotFoundError: If name is not registered
        """
        if name not in self._factories:
            raise RepositoryNotFoundError(f"Unknown repository name '{name}'")

        if name not in self._instances:
            self._instances[name] = self._factories[name](self)

        return self._instances[name]

    def __contains__(self, name: str) -> bool:
        return name in self._factories

    def names(self):
        return sorted(self._factories)


def build_repositories(engine: Engine) -> RepositoryContainer:
    """
    Build the container holding every repository of the application.

    Args:
        engine: Database engine shared by all repositories

    Returns:
        RepositoryContainer keyed by relationship name
    """
    from app.repository.user import UserRepository
    from app.repository.programmer import ProgrammerRepository
    from app.repository.project import ProjectRepository
    from app.repository.battle import BattleRepository
    from app.repository.api_token import ApiTokenRepository

    return RepositoryContainer({
        "user": lambda container: UserRepository(engine, container),
        "programmer": lambda container: ProgrammerRepository(engine, container),
        "project": lambda container: ProjectRepository(engine, container),
        "battle": lambda container: BattleRepository(engine, container),
        "api_token": lambda container: ApiTokenRepository(engine, container),
    })
