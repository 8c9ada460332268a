"""
Battle API endpoints.
"""

from fastapi import APIRouter, Depends, Request, Response

from app.api.dependencies import (
    enforce_programmer_ownership,
    get_battle_manager,
    get_repositories,
    require_user,
)
from app.api.problem import ApiProblem, ApiProblemException, validation_problem
from app.api.schemas import ApiModel, BattleResponse
from app.core.battle_manager import BattleManager
from app.models.user import User
from app.repository.container import RepositoryContainer

router = APIRouter(prefix="/api/battles", tags=["battles"])


class CreateBattleRequest(ApiModel):
    """Request model for starting a battle."""
    programmer_id: int
    project_id: int


@router.post("", response_model=BattleResponse, status_code=201)
async def create_battle(
    body: CreateBattleRequest,
    request: Request,
    response: Response,
    user: User = Depends(require_user),
    repositories: RepositoryContainer = Depends(get_repositories),
    battle_manager: BattleManager = Depends(get_battle_manager),
):
    """
    Send one of your programmers into battle against a project.

    Raises:
        400: Unknown programmer or project
        401: Missing or invalid token
        403: Programmer belongs to another user
    """
    programmer = repositories.get("programmer").find(body.programmer_id)
    project = repositories.get("project").find(body.project_id)

    errors = {}
    if programmer is None:
        errors["programmerId"] = ["Invalid or missing programmerId"]
    if project is None:
        errors["projectId"] = ["Invalid or missing projectId"]
    if errors:
        raise validation_problem(errors)

    enforce_programmer_ownership(programmer, user)

    battle = battle_manager.battle(programmer, project)

    response.headers["Location"] = str(request.app.url_path_for("api_battles_show", id=str(battle.id)))
    return BattleResponse.from_entity(battle, request)


@router.get("/{id}", response_model=BattleResponse, name="api_battles_show")
async def show_battle(
    id: int,
    request: Request,
    repositories: RepositoryContainer = Depends(get_repositories),
):
    """
    Get a battle by id.

    Raises:
        404: Battle not found
    """
    battle = repositories.get("battle").find(id)
    if battle is None:
        problem = ApiProblem(404)
        problem.set("detail", f"No battle found with id {id}")
        raise ApiProblemException(problem)

    return BattleResponse.from_entity(battle, request)
