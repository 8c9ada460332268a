"""
Programmer model.

A programmer belongs to exactly one user and gains or loses power
through power-ups and battles.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Programmer:
    """
    Attributes:
        id: Primary key
        nickname: Unique nickname, used in API URLs
        avatar_number: Avatar image number (1-6)
        tag_line: Optional free text
        user_id: Owning user's id
        power_level: Current power level, changed by battles and power-ups
    """
    id: Optional[int] = None
    nickname: Optional[str] = None
    avatar_number: Optional[int] = None
    tag_line: Optional[str] = None
    user_id: Optional[int] = None
    power_level: int = 0
