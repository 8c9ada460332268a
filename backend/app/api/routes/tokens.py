"""
API token endpoints.

Tokens are obtained with HTTP Basic credentials (email + password) and
then sent as "Authorization: token <TOKEN>" on every other request.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import Field

from app.api.dependencies import get_repositories, require_basic_user, require_user
from app.api.schemas import ApiModel
from app.models.user import User
from app.repository.container import RepositoryContainer

router = APIRouter(prefix="/api/tokens", tags=["tokens"])


class CreateTokenRequest(ApiModel):
    """Request model for creating a token."""
    notes: str = Field(..., min_length=1, max_length=255)


class TokenResponse(ApiModel):
    """Response model for token data."""
    id: int
    token: str
    notes: Optional[str] = None
    created_at: datetime


@router.post("", response_model=TokenResponse, status_code=201)
async def create_token(
    body: CreateTokenRequest,
    user: User = Depends(require_basic_user),
    repositories: RepositoryContainer = Depends(get_repositories),
):
    """
    Create a token for the user identified by HTTP Basic credentials.

    Raises:
        400: Missing notes
        401: Missing or invalid credentials
    """
    token = repositories.get("api_token").create_token(user, body.notes)
    return TokenResponse(id=token.id, token=token.token, notes=token.notes, created_at=token.created_at)


@router.get("", response_model=List[TokenResponse])
async def list_tokens(
    user: User = Depends(require_user),
    repositories: RepositoryContainer = Depends(get_repositories),
):
    """List the authenticated user's tokens."""
    tokens = repositories.get("api_token").find_all_for_user(user)
    return [
        TokenResponse(id=t.id, token=t.token, notes=t.notes, created_at=t.created_at)
        for t in tokens
    ]
