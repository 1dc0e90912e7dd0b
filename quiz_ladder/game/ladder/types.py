from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID

from quiz_ladder.game.ladder.constants import SLOT_LABELS


class GameStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    FAIL = "fail"
    TIMEOUT = "timeout"
    MONEY = "money"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.IN_PROGRESS


class Lifeline(str, Enum):
    FIFTY_FIFTY = "fifty_fifty"
    AUDIENCE_HELP = "audience_help"
    FRIEND_CALL = "friend_call"


@dataclass(frozen=True, slots=True)
class QuestionTemplate:
    question_id: str
    text: str
    answers: tuple[str, str, str, str]
    correct_index: int
    level: int


@dataclass(slots=True)
class QuestionInstance:
    """A question as it appears in one game: answers scrambled onto slots a..d."""

    template: QuestionTemplate
    slot_to_original: dict[str, int]
    help_payloads: dict[str, object] = field(default_factory=dict)

    @property
    def level(self) -> int:
        return self.template.level

    @property
    def correct_slot(self) -> str:
        for label in SLOT_LABELS:
            if self.slot_to_original[label] == self.template.correct_index:
                return label
        raise ValueError(f"question {self.template.question_id} has no slot for the correct answer")

    @property
    def variants(self) -> dict[str, str]:
        return {
            label: self.template.answers[self.slot_to_original[label]] for label in SLOT_LABELS
        }

    def is_correct(self, slot_label: str) -> bool:
        return slot_label.strip().lower() == self.correct_slot


@dataclass(slots=True)
class Game:
    game_id: UUID
    user_id: int
    created_at: datetime
    questions: list[QuestionInstance]
    current_level: int = 0
    status: GameStatus = GameStatus.IN_PROGRESS
    prize: int = 0
    used_lifelines: set[Lifeline] = field(default_factory=set)
    finished_at: datetime | None = None

    @property
    def max_level(self) -> int:
        return len(self.questions)

    @property
    def is_finished(self) -> bool:
        return self.status.is_terminal

    @property
    def previous_level(self) -> int:
        return self.current_level - 1

    @property
    def current_question(self) -> QuestionInstance | None:
        if self.current_level >= self.max_level:
            return None
        return self.questions[self.current_level]


@dataclass(frozen=True, slots=True)
class AnswerOutcome:
    advanced: bool
    status: GameStatus
    current_level: int
    prize: int
    correct_slot: str | None = None

    def __bool__(self) -> bool:
        return self.advanced
