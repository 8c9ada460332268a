"""
Programmer API endpoints.

Create, read, update and delete programmers, power them up and list
their battles. Writes require an "Authorization: token ..." header and
only the owning user may change a programmer.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response
from pydantic import Field, field_validator

from app.api.dependencies import (
    enforce_programmer_ownership,
    get_power_manager,
    get_repositories,
    programmer_not_found,
    require_user,
)
from app.api.problem import validation_problem
from app.api.schemas import ApiModel, BattleResponse, ProgrammerResponse
from app.config import get_settings
from app.core.power_manager import PowerManager
from app.models.programmer import Programmer
from app.models.user import User
from app.repository.container import RepositoryContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/programmers", tags=["programmers"])

battle_config = get_settings().battle


# Request/Response models
class ProgrammerUpdateRequest(ApiModel):
    """Request model for PUT/PATCH. The nickname can't be changed."""
    avatar_number: Optional[int] = Field(None, ge=battle_config.AVATAR_MIN, le=battle_config.AVATAR_MAX)
    tag_line: Optional[str] = Field(None, max_length=255)


class ProgrammerCreateRequest(ApiModel):
    """Request model for creating a programmer."""
    nickname: str = Field(..., max_length=255)
    avatar_number: int = Field(..., ge=battle_config.AVATAR_MIN, le=battle_config.AVATAR_MAX)
    tag_line: Optional[str] = Field(None, max_length=255)

    @field_validator("nickname")
    @classmethod
    def nickname_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please enter a clever nickname")
        # The nickname is a URL path segment
        if "/" in value:
            raise ValueError("A nickname can't contain a slash")
        return value


class ProgrammerListResponse(ApiModel):
    """Response model for the programmer collection."""
    programmers: List[ProgrammerResponse]
    count: int


class PowerUpResponse(ApiModel):
    """Response model for a power-up."""
    message: str
    delta: int
    programmer: ProgrammerResponse


def load_programmer(nickname: str, repositories: RepositoryContainer) -> Programmer:
    programmer = repositories.get("programmer").find_one_by_nickname(nickname)
    if programmer is None:
        raise programmer_not_found()
    return programmer


@router.post("", response_model=ProgrammerResponse, status_code=201)
async def create_programmer(
    request: Request,
    response: Response,
    body: ProgrammerCreateRequest,
    user: User = Depends(require_user),
    repositories: RepositoryContainer = Depends(get_repositories),
):
    """
    Create a programmer owned by the authenticated user.

    Returns:
        Created programmer, with a Location header pointing at it

    Raises:
        400: Validation error (blank or duplicate nickname, bad avatar number)
        401: Missing or invalid token
    """
    programmer_repository = repositories.get("programmer")
    if programmer_repository.find_one_by_nickname(body.nickname):
        raise validation_problem({"nickname": ["A programmer with this nickname already exists"]})

    programmer = Programmer(
        nickname=body.nickname,
        avatar_number=body.avatar_number,
        tag_line=body.tag_line,
        user_id=user.id,
    )
    programmer_repository.save(programmer)
    logger.info(f"User #{user.id} created programmer '{programmer.nickname}'")

    response.headers["Location"] = str(request.app.url_path_for("api_programmers_show", nickname=programmer.nickname))
    return ProgrammerResponse.from_entity(programmer, request)


@router.get("", response_model=ProgrammerListResponse, name="api_programmers_list")
async def list_programmers(
    request: Request,
    repositories: RepositoryContainer = Depends(get_repositories),
):
    """List every programmer."""
    programmers = repositories.get("programmer").find_all()
    return ProgrammerListResponse(
        programmers=[ProgrammerResponse.from_entity(p, request) for p in programmers],
        count=len(programmers),
    )


@router.get("/{nickname}", response_model=ProgrammerResponse, name="api_programmers_show")
async def show_programmer(
    nickname: str,
    request: Request,
    repositories: RepositoryContainer = Depends(get_repositories),
):
    """
    Get a programmer by nickname.

    Raises:
        404: Programmer not found
    """
    return ProgrammerResponse.from_entity(load_programmer(nickname, repositories), request)


async def _update_programmer(
    nickname: str,
    body: ProgrammerUpdateRequest,
    request: Request,
    user: User,
    repositories: RepositoryContainer,
    partial: bool,
) -> ProgrammerResponse:
    programmer = load_programmer(nickname, repositories)
    enforce_programmer_ownership(programmer, user)

    # PUT replaces both fields, PATCH only touches the ones sent
    for attribute in ("avatar_number", "tag_line"):
        if partial and attribute not in body.model_fields_set:
            continue
        setattr(programmer, attribute, getattr(body, attribute))

    if programmer.avatar_number is None:
        raise validation_problem({"avatarNumber": ["Please select an avatar"]})

    repositories.get("programmer").save(programmer)
    return ProgrammerResponse.from_entity(programmer, request)


@router.put("/{nickname}", response_model=ProgrammerResponse)
async def replace_programmer(
    nickname: str,
    body: ProgrammerUpdateRequest,
    request: Request,
    user: User = Depends(require_user),
    repositories: RepositoryContainer = Depends(get_repositories),
):
    """
    Update a programmer, resetting fields missing from the body.

    Raises:
        400: Validation error
        401: Missing or invalid token
        403: Programmer belongs to another user
        404: Programmer not found
    """
    return await _update_programmer(nickname, body, request, user, repositories, partial=False)


@router.patch("/{nickname}", response_model=ProgrammerResponse)
async def patch_programmer(
    nickname: str,
    body: ProgrammerUpdateRequest,
    request: Request,
    user: User = Depends(require_user),
    repositories: RepositoryContainer = Depends(get_repositories),
):
    """Partially update a programmer; fields missing from the body are kept."""
    return await _update_programmer(nickname, body, request, user, repositories, partial=True)


@router.delete("/{nickname}", status_code=204)
async def delete_programmer(
    nickname: str,
    user: User = Depends(require_user),
    repositories: RepositoryContainer = Depends(get_repositories),
):
    """
    Delete a programmer. Deleting an unknown nickname still returns 204.

    Raises:
        403: Programmer belongs to another user
    """
    programmer_repository = repositories.get("programmer")
    programmer = programmer_repository.find_one_by_nickname(nickname)
    enforce_programmer_ownership(programmer, user)

    if programmer is not None:
        programmer_repository.delete(programmer)
        logger.info(f"User #{user.id} deleted programmer '{nickname}'")

    return Response(status_code=204)


@router.post("/{nickname}/powerup", response_model=PowerUpResponse)
async def power_up_programmer(
    nickname: str,
    request: Request,
    user: User = Depends(require_user),
    repositories: RepositoryContainer = Depends(get_repositories),
    power_manager: PowerManager = Depends(get_power_manager),
):
    """
    Power up a programmer.

    Returns:
        The flavour message, the power change and the updated programmer
    """
    programmer = load_programmer(nickname, repositories)
    enforce_programmer_ownership(programmer, user)

    result = power_manager.power_up(programmer)
    return PowerUpResponse(
        message=result.message,
        delta=result.delta,
        programmer=ProgrammerResponse.from_entity(programmer, request),
    )


@router.get("/{nickname}/battles", response_model=List[BattleResponse], name="api_programmers_battles_list")
async def list_programmer_battles(
    nickname: str,
    request: Request,
    repositories: RepositoryContainer = Depends(get_repositories),
):
    """List every battle a programmer has fought."""
    programmer = load_programmer(nickname, repositories)
    battles = repositories.get("battle").find_all_for_programmer(programmer)
    return [BattleResponse.from_entity(battle, request) for battle in battles]
