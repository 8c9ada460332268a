"""
Project repository.
"""

import random
from typing import List

from app.database import project_table
from app.models.project import Project
from app.repository.base import BaseRepository
from app.repository.mapping import Field


class ProjectRepository(BaseRepository):
    entity_class = Project
    table = project_table
    fields = (
        Field("id"),
        Field("name"),
        Field("difficulty_level"),
    )

    def find_random(self, limit: int, rng: random.Random = None) -> List[Project]:
        """
        Get up to limit projects in random order.

        Args:
            limit: Maximum number of projects
            rng: Random source (module-level random by default)

        Returns:
            Shuffled list of projects
        """
        projects = self.find_all()
        (rng or random).shuffle(projects)

        return projects[:limit]
