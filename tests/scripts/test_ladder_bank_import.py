from __future__ import annotations

import pytest

from quiz_ladder.game.questions.static_bank import STATIC_LADDER_BANK
from scripts.ladder_bank_import import _missing_levels, _templates_from_rows


def _row(question_id: str = "ladder_00_001", **overrides: str) -> dict[str, str]:
    row = {
        "question_id": question_id,
        "level": "0",
        "question": "Which planet is known as the red planet?",
        "option_1": "Mars",
        "option_2": "Venus",
        "option_3": "Jupiter",
        "option_4": "Saturn",
        "correct_option_id": "0",
    }
    row.update(overrides)
    return row


def test_templates_from_rows_builds_templates() -> None:
    templates = _templates_from_rows(
        [_row(), _row("ladder_03_001", level="3", correct_option_id="2")],
        source_name="bank.csv",
        max_level=15,
    )

    assert [template.level for template in templates] == [0, 3]
    assert templates[0].answers == ("Mars", "Venus", "Jupiter", "Saturn")
    assert templates[1].correct_index == 2


@pytest.mark.parametrize(
    ("row", "message"),
    [
        (_row(question_id=""), "empty question_id"),
        (_row(level="15"), "level must be 0..14"),
        (_row(level="-1"), "level must be 0..14"),
        (_row(option_3=" "), "all options must be non-empty"),
        (_row(correct_option_id="4"), "invalid correct_option_id"),
        (_row(question=""), "empty question"),
    ],
)
def test_templates_from_rows_rejects_invalid_row(row: dict[str, str], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        _templates_from_rows([row], source_name="bank.csv", max_level=15)


def test_templates_from_rows_rejects_duplicate_question_id() -> None:
    with pytest.raises(ValueError, match="bank.csv:3: duplicate question_id"):
        _templates_from_rows([_row(), _row()], source_name="bank.csv", max_level=15)


def test_missing_levels_reports_uncovered_levels() -> None:
    templates = _templates_from_rows(
        [_row(), _row("ladder_02_001", level="2")],
        source_name="bank.csv",
        max_level=4,
    )

    assert _missing_levels(templates, max_level=4) == [1, 3]


def test_builtin_bank_covers_the_whole_ladder() -> None:
    assert _missing_levels(list(STATIC_LADDER_BANK), max_level=15) == []
