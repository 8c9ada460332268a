"""
FastAPI dependencies: repositories, battle/power managers and authentication.
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.engine import Engine

from app.api.problem import ApiProblem, ApiProblemException
from app.core.battle_manager import BattleManager
from app.core.power_manager import PowerManager
from app.core.security import BadAuthHeaderError, parse_authorization_header
from app.database import get_engine
from app.models.programmer import Programmer
from app.models.user import User
from app.repository.container import RepositoryContainer, build_repositories

logger = logging.getLogger(__name__)

basic_auth = HTTPBasic(auto_error=False)


@lru_cache(maxsize=8)
def repositories_for(engine: Engine) -> RepositoryContainer:
    """Build the repository container for an engine once and reuse it afterwards."""
    return build_repositories(engine)


def get_repositories(engine: Engine = Depends(get_engine)) -> RepositoryContainer:
    return repositories_for(engine)


def get_battle_manager(repositories: RepositoryContainer = Depends(get_repositories)) -> BattleManager:
    return BattleManager(repositories.get("battle"), repositories.get("programmer"))


def get_power_manager(repositories: RepositoryContainer = Depends(get_repositories)) -> PowerManager:
    return PowerManager(repositories.get("programmer"))


def unauthorized(detail: str = "Invalid or missing credentials", scheme: str = "token") -> ApiProblemException:
    problem = ApiProblem(401)
    problem.set("detail", detail)
    return ApiProblemException(problem, headers={"WWW-Authenticate": scheme})


def get_token_user(
    request: Request,
    repositories: RepositoryContainer = Depends(get_repositories),
) -> Optional[User]:
    """
    Resolve the user from an "Authorization: token ABCDEF" header.

    Returns None when the request carries no token.

    Raises:
        ApiProblemException: 401 for a malformed header or unknown token
    """
    header = request.headers.get("Authorization")
    if not header:
        return None

    try:
        token_string = parse_authorization_header(header)
    except BadAuthHeaderError as e:
        logger.warning(f"Rejected Authorization header: {e}")
        raise unauthorized(str(e))

    if token_string is None:
        return None

    token = repositories.get("api_token").find_one_by_token(token_string)
    if token is None:
        raise unauthorized("Invalid credentials.")

    user = repositories.get("user").find(token.user_id)
    if user is None:
        raise unauthorized("Invalid credentials.")

    return user


def require_user(user: Optional[User] = Depends(get_token_user)) -> User:
    if user is None:
        raise unauthorized()
    return user


def require_basic_user(
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_auth),
    repositories: RepositoryContainer = Depends(get_repositories),
) -> User:
    """Authenticate with HTTP Basic email/password (used to obtain tokens)."""
    if credentials is None:
        raise unauthorized(scheme="Basic")

    user_repository = repositories.get("user")
    user = user_repository.find_user_by_email(credentials.username)
    if user is None or not user_repository.check_password(user, credentials.password):
        raise unauthorized("Invalid credentials.", scheme="Basic")

    return user


def enforce_programmer_ownership(programmer: Optional[Programmer], user: User) -> None:
    if programmer is not None and programmer.user_id != user.id:
        problem = ApiProblem(403)
        problem.set("detail", "You don't own this programmer")
        raise ApiProblemException(problem)


def programmer_not_found() -> ApiProblemException:
    problem = ApiProblem(404)
    problem.set("detail", "Oh no! This programmer has deserted! We'll send a search party!")
    return ApiProblemException(problem)
