"""
Project model: something a programmer can battle against.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Project:
    id: Optional[int] = None
    name: Optional[str] = None
    difficulty_level: Optional[int] = None  # 1-10
