"""
Project API endpoints (read only).
"""

from typing import List

from fastapi import APIRouter, Depends

from app.api.dependencies import get_repositories
from app.api.schemas import ProjectResponse
from app.repository.container import RepositoryContainer

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("", response_model=List[ProjectResponse])
async def list_projects(repositories: RepositoryContainer = Depends(get_repositories)):
    """List every project programmers can battle."""
    return [ProjectResponse.from_entity(project) for project in repositories.get("project").find_all()]
