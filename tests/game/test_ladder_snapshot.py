from __future__ import annotations

import random
from datetime import timedelta

from quiz_ladder.game.ladder.rules import answer_current_question, use_lifeline
from quiz_ladder.game.ladder.snapshot import game_from_snapshot, game_to_snapshot
from quiz_ladder.game.ladder.types import GameStatus, Lifeline
from tests.game.ladder_fixtures import GAME_ID, GAME_STARTED_AT, _game


def test_snapshot_is_json_friendly() -> None:
    game = _game(max_level=2)

    snapshot = game_to_snapshot(game)

    assert snapshot["game_id"] == str(GAME_ID)
    assert snapshot["created_at"] == "2026-03-01T12:00:00+00:00"
    assert snapshot["status"] == "in_progress"
    assert snapshot["finished_at"] is None
    assert snapshot["used_lifelines"] == []
    assert snapshot["questions"][0] == {
        "question_id": "q_00_001",
        "text": "Question for level 0?",
        "answers": ["right 0", "wrong 0-1", "wrong 0-2", "wrong 0-3"],
        "correct_index": 0,
        "level": 0,
        "slots": {"a": 0, "b": 1, "c": 2, "d": 3},
        "help": {},
    }


def test_restored_game_keeps_progress_and_hints() -> None:
    game = _game()
    now_utc = GAME_STARTED_AT + timedelta(minutes=3)
    answer_current_question(game, "a", now_utc=now_utc)
    hint = use_lifeline(game, Lifeline.FIFTY_FIFTY, rng=random.Random(2))
    answer_current_question(game, "b", now_utc=now_utc)

    restored = game_from_snapshot(game_to_snapshot(game))

    assert restored.status == GameStatus.FAIL
    assert restored.current_level == 1
    assert restored.finished_at == now_utc
    assert restored.used_lifelines == {Lifeline.FIFTY_FIFTY}
    assert restored.questions[1].help_payloads == {"fifty_fifty": hint}
    assert restored.questions[4].correct_slot == game.questions[4].correct_slot


def test_restore_accepts_row_values_with_native_datetimes() -> None:
    game = _game(max_level=3)
    snapshot = game_to_snapshot(game)
    snapshot["game_id"] = GAME_ID
    snapshot["created_at"] = GAME_STARTED_AT

    restored = game_from_snapshot(snapshot)

    assert restored.game_id == GAME_ID
    assert restored.created_at == GAME_STARTED_AT
    assert restored.finished_at is None
    assert restored.max_level == 3
