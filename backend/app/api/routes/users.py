"""
User registration endpoint.
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import Field, field_validator

from app.api.dependencies import get_repositories
from app.api.problem import validation_problem
from app.api.schemas import ApiModel
from app.models.user import User
from app.repository.container import RepositoryContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


class RegisterUserRequest(ApiModel):
    """Request model for user registration."""
    email: str = Field(..., max_length=255)
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def email_looks_valid(cls, value: str) -> str:
        value = value.strip()
        if "@" not in value:
            raise ValueError("Please enter a valid email address")
        return value


class UserResponse(ApiModel):
    """Response model for user data. The password hash is never exposed."""
    id: int
    email: str
    username: str


@router.post("", response_model=UserResponse, status_code=201)
async def register_user(
    body: RegisterUserRequest,
    repositories: RepositoryContainer = Depends(get_repositories),
):
    """
    Register a new user.

    Raises:
        400: Validation error, or email/username already taken
    """
    user_repository = repositories.get("user")

    errors = {}
    if user_repository.find_user_by_email(body.email):
        errors["email"] = ["This email is already registered"]
    if user_repository.find_user_by_username(body.username):
        errors["username"] = ["This username is already taken"]
    if errors:
        raise validation_problem(errors)

    user = User(email=body.email, username=body.username, plain_password=body.password)
    user_repository.save(user)
    logger.info(f"Registered user #{user.id} ({user.username})")

    return UserResponse(id=user.id, email=user.email, username=user.username)
