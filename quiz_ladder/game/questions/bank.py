from __future__ import annotations

import random
from collections import defaultdict
from collections.abc import Iterable, Set

from quiz_ladder.game.ladder.types import QuestionTemplate


class InMemoryQuestionRepository:
    """Question repository over an already loaded pool of templates.

    Draws one template per requested level; levels without any template are
    left out of the result.
    """

    def __init__(self, templates: Iterable[QuestionTemplate], *, rng: random.Random) -> None:
        self._rng = rng
        by_level: dict[int, list[QuestionTemplate]] = defaultdict(list)
        for template in templates:
            by_level[template.level].append(template)
        for pool in by_level.values():
            pool.sort(key=lambda template: template.question_id)
        self._by_level = dict(by_level)

    def fetch_questions_for_levels(self, levels: Set[int]) -> dict[int, QuestionTemplate]:
        return {
            level: self._rng.choice(self._by_level[level])
            for level in sorted(levels)
            if self._by_level.get(level)
        }
