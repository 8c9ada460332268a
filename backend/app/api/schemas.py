"""
Response models shared by the API routes.

JSON keys are the camelCase entity field names (avatarNumber, powerLevel,
didProgrammerWin, ...). Links to related resources live under "_links".
"""

from datetime import datetime
from typing import Dict, Optional

from fastapi import Request
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.core.power_manager import power_level_class
from app.models.battle import Battle
from app.models.programmer import Programmer
from app.models.project import Project


class ApiModel(BaseModel):
    """Base model serializing attributes in camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def avatar_path(number: Optional[int]) -> str:
    return f"img/avatar{number}.png"


class ProgrammerResponse(ApiModel):
    """Response model for programmer data."""
    nickname: str
    avatar_number: int
    avatar_path: str
    tag_line: Optional[str] = None
    power_level: int
    power_level_class: str
    user_id: int
    links: Dict[str, str] = Field(default_factory=dict, alias="_links")

    @classmethod
    def from_entity(cls, programmer: Programmer, request: Request) -> "ProgrammerResponse":
        return cls(
            nickname=programmer.nickname,
            avatar_number=programmer.avatar_number,
            avatar_path=avatar_path(programmer.avatar_number),
            tag_line=programmer.tag_line,
            power_level=programmer.power_level,
            power_level_class=power_level_class(programmer),
            user_id=programmer.user_id,
            links={
                "self": str(request.app.url_path_for("api_programmers_show", nickname=programmer.nickname)),
                "battles": str(request.app.url_path_for("api_programmers_battles_list", nickname=programmer.nickname)),
            },
        )


class ProjectResponse(ApiModel):
    """Response model for project data."""
    id: int
    name: str
    difficulty_level: int

    @classmethod
    def from_entity(cls, project: Project) -> "ProjectResponse":
        return cls(id=project.id, name=project.name, difficulty_level=project.difficulty_level)


class BattleResponse(ApiModel):
    """Response model for a fought battle."""
    id: int
    programmer: ProgrammerResponse
    project: ProjectResponse
    did_programmer_win: bool
    fought_at: datetime
    notes: Optional[str] = None
    links: Dict[str, str] = Field(default_factory=dict, alias="_links")

    @classmethod
    def from_entity(cls, battle: Battle, request: Request) -> "BattleResponse":
        return cls(
            id=battle.id,
            programmer=ProgrammerResponse.from_entity(battle.programmer, request),
            project=ProjectResponse.from_entity(battle.project),
            did_programmer_win=battle.did_programmer_win,
            fought_at=battle.fought_at,
            notes=battle.notes,
            links={
                "self": str(request.app.url_path_for("api_battles_show", id=str(battle.id))),
                "programmer": str(request.app.url_path_for(
                    "api_programmers_show", nickname=battle.programmer.nickname
                )),
            },
        )
