"""
Battle model.

A battle is recorded once when a programmer takes on a project and is
never changed afterwards.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.models.programmer import Programmer
from app.models.project import Project


@dataclass
class Battle:
    """
    Attributes:
        id: Primary key
        programmer: The programmer who fought (stored as programmerId)
        project: The project fought against (stored as projectId)
        did_programmer_win: Outcome of the battle
        fought_at: When the battle happened
        notes: Narrative describing the outcome
    """
    id: Optional[int] = None
    programmer: Optional[Programmer] = None
    project: Optional[Project] = None
    did_programmer_win: Optional[bool] = None
    fought_at: Optional[datetime] = None
    notes: Optional[str] = None
