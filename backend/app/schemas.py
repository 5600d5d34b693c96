from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

MAX_TEAM_SIZE = 50


class ConstraintIn(BaseModel):
    id: Optional[str] = None
    p1: str = ""
    p2: str = ""


class GenerateTeamsRequest(BaseModel):
    players: List[str]
    team_size: int = Field(default=5, le=MAX_TEAM_SIZE, description="Players per team")
    same_team: List[ConstraintIn] = Field(default_factory=list)
    diff_team: List[ConstraintIn] = Field(default_factory=list)
    max_attempts: Optional[int] = Field(default=None, ge=0, description="Lower attempt budget; capped at the configured maximum")
    seed: Optional[int] = Field(default=None, description="Random seed for reproducible teams")


class GenerateTeamsResponse(BaseModel):
    team_blue: List[str]
    team_red: List[str]
    attempts: int


class DuplicateName(BaseModel):
    name: str
    positions: List[int]


class ErrorDetail(BaseModel):
    code: str
    message: str
    duplicates: Optional[List[DuplicateName]] = None
    attempts: Optional[int] = None


class LogResultRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    players: List[str]
    team_blue: List[str] = Field(alias="teamBlue")
    team_red: List[str] = Field(alias="teamRed")


class StatusResponse(BaseModel):
    status: str
    message: Optional[str] = None


class FormState(BaseModel):
    team_size: int = Field(default=5, ge=1, le=MAX_TEAM_SIZE)
    players: List[str] = Field(default_factory=lambda: [""] * 10)
    same_team: List[ConstraintIn] = Field(default_factory=list)
    diff_team: List[ConstraintIn] = Field(default_factory=list)
