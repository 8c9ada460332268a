"""
API token model used for stateless API authentication.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ApiToken:
    """
    Attributes:
        id: Primary key
        token: Unique random token string sent in the Authorization header
        user_id: Id of the user this token authenticates
        notes: What the token is used for
        created_at: Creation timestamp
    """
    id: Optional[int] = None
    token: Optional[str] = None
    user_id: Optional[int] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
