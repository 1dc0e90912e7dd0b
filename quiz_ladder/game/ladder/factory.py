from __future__ import annotations

import random
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from quiz_ladder.economy.prizes.table import DEFAULT_PRIZE_TABLE
from quiz_ladder.game.ladder.errors import InsufficientQuestionPoolError
from quiz_ladder.game.ladder.shuffle import shuffle_answer_slots
from quiz_ladder.game.ladder.types import Game, QuestionInstance

if TYPE_CHECKING:
    from quiz_ladder.game.questions.types import QuestionRepository


def create_game(
    *,
    user_id: int,
    repository: QuestionRepository,
    rng: random.Random,
    now_utc: datetime,
    max_level: int = DEFAULT_PRIZE_TABLE.max_level,
    game_id: UUID | None = None,
) -> Game:
    """Assembles a fresh game with one shuffled question per ladder level.

    The caller guarantees the user has no other game in progress; nothing
    here looks that up.
    """
    levels = set(range(max_level))
    templates = repository.fetch_questions_for_levels(levels)
    missing_levels = sorted(level for level in levels if level not in templates)
    if missing_levels:
        raise InsufficientQuestionPoolError(missing_levels)

    questions: list[QuestionInstance] = []
    for level in range(max_level):
        template = templates[level]
        slot_to_original, _ = shuffle_answer_slots(
            template.correct_index,
            rng=rng,
            answer_count=len(template.answers),
        )
        questions.append(QuestionInstance(template=template, slot_to_original=slot_to_original))

    return Game(
        game_id=game_id or uuid4(),
        user_id=user_id,
        created_at=now_utc,
        questions=questions,
    )
