from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class LadderStartRequest(BaseModel):
    user_id: int = Field(gt=0)


class LadderAnswerRequest(BaseModel):
    user_id: int = Field(gt=0)
    letter: str = Field(min_length=1, max_length=1)


class LadderTakeMoneyRequest(BaseModel):
    user_id: int = Field(gt=0)


class LadderHelpRequest(BaseModel):
    user_id: int = Field(gt=0)
    help_type: str = Field(min_length=1, max_length=32)


class LadderQuestionResponse(BaseModel):
    level: int = Field(ge=0)
    text: str
    variants: dict[str, str]
    help: dict[str, Any]


class LadderGameResponse(BaseModel):
    game_id: UUID
    user_id: int
    status: str
    status_label: str
    current_level: int = Field(ge=0)
    max_level: int = Field(ge=1)
    prize: int = Field(ge=0)
    used_lifelines: list[str]
    created_at: datetime
    finished_at: datetime | None = None
    current_question: LadderQuestionResponse | None = None


class LadderAnswerResponse(BaseModel):
    advanced: bool
    correct_letter: str | None = None
    game: LadderGameResponse


class LadderHelpResponse(BaseModel):
    help_type: str
    payload: Any
    game: LadderGameResponse


class LadderGameListResponse(BaseModel):
    games: list[LadderGameResponse]
