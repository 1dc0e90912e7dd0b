from __future__ import annotations

import random
from collections import Counter

from quiz_ladder.game.questions.bank import InMemoryQuestionRepository
from quiz_ladder.game.questions.static_bank import STATIC_LADDER_BANK
from tests.game.ladder_fixtures import _template


def test_repository_draws_each_level_from_its_own_pool() -> None:
    repository = InMemoryQuestionRepository(
        [_template(0, suffix="001"), _template(0, suffix="002"), _template(2)],
        rng=random.Random(1),
    )

    picked = repository.fetch_questions_for_levels({0, 2})

    assert picked[0].question_id in {"q_00_001", "q_00_002"}
    assert picked[2].question_id == "q_02_001"


def test_repository_leaves_out_levels_without_templates() -> None:
    repository = InMemoryQuestionRepository([_template(0), _template(2)], rng=random.Random(1))

    picked = repository.fetch_questions_for_levels({0, 1, 2})

    assert set(picked) == {0, 2}
    assert all(template.level == level for level, template in picked.items())


def test_repository_draws_from_whole_level_pool() -> None:
    repository = InMemoryQuestionRepository(
        [_template(4, suffix=f"{index:03d}") for index in range(3)],
        rng=random.Random(21),
    )

    drawn = Counter(
        repository.fetch_questions_for_levels({4})[4].question_id for _ in range(300)
    )

    assert set(drawn) == {"q_04_000", "q_04_001", "q_04_002"}


def test_builtin_bank_covers_every_level_once() -> None:
    levels = Counter(template.level for template in STATIC_LADDER_BANK)

    assert levels == Counter(range(15))
    assert len({template.question_id for template in STATIC_LADDER_BANK}) == len(STATIC_LADDER_BANK)
    for template in STATIC_LADDER_BANK:
        assert len(template.answers) == 4
        assert all(answer.strip() for answer in template.answers)
        assert 0 <= template.correct_index < 4
