from __future__ import annotations

from collections.abc import Mapping, Set
from typing import Protocol

from quiz_ladder.game.ladder.types import QuestionTemplate


class QuestionRepository(Protocol):
    def fetch_questions_for_levels(self, levels: Set[int]) -> Mapping[int, QuestionTemplate]:
        ...
