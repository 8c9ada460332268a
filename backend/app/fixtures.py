"""
Database fixtures: schema reset, table clearing and demo data.

Used on startup (when DatabaseConfig.LOAD_FIXTURES is set) and by tests.
"""

import logging
import random
from typing import Optional

from sqlalchemy.engine import Engine

from app.config import get_settings
from app.database import metadata
from app.models.project import Project
from app.models.user import User
from app.repository.container import RepositoryContainer

logger = logging.getLogger(__name__)

DEMO_PROJECTS = (
    "BurningBot",
    "InstaFaceTweet",
    "MountBox",
    "Video Game",
    "Bike Shop Project",
)


class FixturesManager:
    """Builds and fills the database."""

    def __init__(self, engine: Engine, repositories: RepositoryContainer, rng: Optional[random.Random] = None):
        self.engine = engine
        self.repositories = repositories
        self.rng = rng or random.Random()

    def reset_database(self) -> None:
        """Drop and recreate every table."""
        metadata.drop_all(bind=self.engine)
        metadata.create_all(bind=self.engine)
        logger.info("Database schema recreated")

    def clear_tables(self) -> None:
        """Delete every row of every table in a single transaction."""
        with self.engine.begin() as conn:
            # children first so foreign keys stay satisfied
            for table in reversed(metadata.sorted_tables):
                conn.execute(table.delete())

    def populate_data(self) -> None:
        """Insert the demo user and projects."""
        config = get_settings().battle

        user = User(username="weaverryan", email="ryan@knplabs.com", plain_password="foo")
        self.repositories.get("user").save(user)

        project_repository = self.repositories.get("project")
        for name in DEMO_PROJECTS:
            project = Project(
                name=name,
                difficulty_level=self.rng.randint(config.PROJECT_DIFFICULTY_MIN, config.PROJECT_DIFFICULTY_MAX),
            )
            project_repository.save(project)

        logger.info(f"Loaded fixtures: 1 user, {len(DEMO_PROJECTS)} projects")
