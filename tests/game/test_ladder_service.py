from __future__ import annotations

import random
from datetime import timedelta
from types import SimpleNamespace
from uuid import UUID

import pytest
from sqlalchemy.exc import IntegrityError

from quiz_ladder.db.models.ladder_games import LadderGame
from quiz_ladder.db.repo.ladder_games_repo import LadderGamesRepo
from quiz_ladder.db.repo.quiz_questions_repo import QuizQuestionsRepo
from quiz_ladder.db.repo.users_repo import UsersRepo
from quiz_ladder.economy.ledger.service import BalanceLedgerService
from quiz_ladder.game.ladder.errors import (
    ActiveGameExistsError,
    GameAlreadyFinishedError,
    GameNotFoundError,
    InsufficientQuestionPoolError,
    LifelineAlreadyUsedError,
    PlayerNotFoundError,
)
from quiz_ladder.game.ladder.service import LadderGameService
from quiz_ladder.game.ladder.snapshot import questions_to_payload
from quiz_ladder.game.ladder.types import GameStatus
from tests.game.ladder_fixtures import GAME_ID, GAME_STARTED_AT, _game

NOW = GAME_STARTED_AT + timedelta(minutes=4)


class _FakeSession:
    def __init__(self) -> None:
        self.flushes = 0

    async def flush(self) -> None:
        self.flushes += 1


def _question_record(level: int) -> SimpleNamespace:
    return SimpleNamespace(
        question_id=f"db_{level:02d}",
        level=level,
        question_text=f"Stored question {level}?",
        option_1="right",
        option_2="wrong 1",
        option_3="wrong 2",
        option_4="wrong 3",
        correct_option_id=0,
        status="ACTIVE",
    )


def _stored_game(*, user_id: int = 7, current_level: int = 0) -> LadderGame:
    game = _game(user_id=user_id, current_level=current_level)
    return LadderGame(
        id=game.game_id,
        user_id=user_id,
        status=game.status.value,
        current_level=current_level,
        prize=0,
        used_lifelines=[],
        questions=questions_to_payload(game.questions),
        created_at=game.created_at,
        finished_at=None,
    )


@pytest.fixture(autouse=True)
def _known_users(monkeypatch) -> None:
    async def _fake_get_user(session, user_id: int):
        del session
        return SimpleNamespace(id=user_id, balance=0) if user_id == 7 else None

    monkeypatch.setattr(UsersRepo, "get_by_id", _fake_get_user)


@pytest.fixture
def ledger_credits(monkeypatch) -> list[dict[str, object]]:
    credits: list[dict[str, object]] = []

    async def _fake_credit_prize(session, **kwargs):
        del session
        credits.append(kwargs)
        return SimpleNamespace(**kwargs)

    monkeypatch.setattr(BalanceLedgerService, "credit_prize", _fake_credit_prize)
    return credits


def _patch_game_lookup(monkeypatch, model: LadderGame | None) -> None:
    async def _fake_get_for_update(session, game_id: UUID):
        del session
        if model is not None and model.id == game_id:
            return model
        return None

    monkeypatch.setattr(LadderGamesRepo, "get_by_id_for_update", _fake_get_for_update)


@pytest.mark.asyncio
async def test_start_game_persists_new_game(monkeypatch) -> None:
    created: list[LadderGame] = []
    requested_levels: list[list[int]] = []

    async def _fake_get_in_progress(session, *, user_id: int):
        del session, user_id
        return None

    async def _fake_list_active(session, *, levels):
        del session
        requested_levels.append(list(levels))
        return [_question_record(level) for level in levels]

    async def _fake_create(session, *, game: LadderGame):
        del session
        created.append(game)
        return game

    monkeypatch.setattr(LadderGamesRepo, "get_in_progress_for_user", _fake_get_in_progress)
    monkeypatch.setattr(QuizQuestionsRepo, "list_active_for_levels", _fake_list_active)
    monkeypatch.setattr(LadderGamesRepo, "create", _fake_create)

    game = await LadderGameService.start_game(
        _FakeSession(),
        user_id=7,
        now_utc=GAME_STARTED_AT,
        rng=random.Random(3),
    )

    assert requested_levels == [list(range(15))]
    assert game.status == GameStatus.IN_PROGRESS
    assert game.max_level == 15
    assert len(created) == 1
    assert created[0].id == game.game_id
    assert created[0].status == "in_progress"
    assert created[0].used_lifelines == []
    assert [question["level"] for question in created[0].questions] == list(range(15))


@pytest.mark.asyncio
async def test_start_game_refuses_second_active_game(monkeypatch) -> None:
    async def _fake_get_in_progress(session, *, user_id: int):
        del session
        return SimpleNamespace(id=GAME_ID, user_id=user_id)

    async def _unexpected(*args, **kwargs):
        raise AssertionError("question pool must not be loaded")

    monkeypatch.setattr(LadderGamesRepo, "get_in_progress_for_user", _fake_get_in_progress)
    monkeypatch.setattr(QuizQuestionsRepo, "list_active_for_levels", _unexpected)

    with pytest.raises(ActiveGameExistsError) as exc_info:
        await LadderGameService.start_game(_FakeSession(), user_id=7, now_utc=GAME_STARTED_AT)

    assert exc_info.value.game_id == GAME_ID


@pytest.mark.asyncio
async def test_start_game_fails_on_incomplete_question_pool(monkeypatch) -> None:
    async def _fake_get_in_progress(session, *, user_id: int):
        del session, user_id
        return None

    async def _fake_list_active(session, *, levels):
        del session
        return [_question_record(level) for level in levels if level != 9]

    monkeypatch.setattr(LadderGamesRepo, "get_in_progress_for_user", _fake_get_in_progress)
    monkeypatch.setattr(QuizQuestionsRepo, "list_active_for_levels", _fake_list_active)

    with pytest.raises(InsufficientQuestionPoolError) as exc_info:
        await LadderGameService.start_game(_FakeSession(), user_id=7, now_utc=GAME_STARTED_AT)

    assert exc_info.value.missing_levels == [9]


@pytest.mark.asyncio
async def test_correct_answer_updates_row_without_credit(monkeypatch, ledger_credits) -> None:
    model = _stored_game()
    _patch_game_lookup(monkeypatch, model)
    session = _FakeSession()

    game, outcome = await LadderGameService.answer(
        session,
        user_id=7,
        game_id=GAME_ID,
        slot_label="a",
        now_utc=NOW,
    )

    assert outcome.advanced is True
    assert game.current_level == 1
    assert model.current_level == 1
    assert model.status == "in_progress"
    assert session.flushes == 1
    assert ledger_credits == []


@pytest.mark.asyncio
async def test_wrong_answer_on_checkpoint_credits_prize_once(monkeypatch, ledger_credits) -> None:
    model = _stored_game(current_level=9)
    _patch_game_lookup(monkeypatch, model)

    game, outcome = await LadderGameService.answer(
        _FakeSession(),
        user_id=7,
        game_id=GAME_ID,
        slot_label="b",
        now_utc=NOW,
    )

    assert outcome.advanced is False
    assert game.status == GameStatus.FAIL
    assert model.status == "fail"
    assert model.prize == 32_000
    assert model.finished_at == NOW
    assert ledger_credits == [
        {"user_id": 7, "game_id": GAME_ID, "amount": 32_000, "now_utc": NOW},
    ]

    with pytest.raises(GameAlreadyFinishedError):
        await LadderGameService.answer(
            _FakeSession(),
            user_id=7,
            game_id=GAME_ID,
            slot_label="a",
            now_utc=NOW,
        )
    assert len(ledger_credits) == 1


@pytest.mark.asyncio
async def test_zero_prize_is_not_credited(monkeypatch, ledger_credits) -> None:
    model = _stored_game()
    _patch_game_lookup(monkeypatch, model)

    await LadderGameService.answer(
        _FakeSession(),
        user_id=7,
        game_id=GAME_ID,
        slot_label="c",
        now_utc=NOW,
    )

    assert model.status == "fail"
    assert model.prize == 0
    assert ledger_credits == []


@pytest.mark.asyncio
async def test_expired_game_times_out_on_answer(monkeypatch, ledger_credits) -> None:
    model = _stored_game(current_level=10)
    _patch_game_lookup(monkeypatch, model)

    game, outcome = await LadderGameService.answer(
        _FakeSession(),
        user_id=7,
        game_id=GAME_ID,
        slot_label="a",
        now_utc=GAME_STARTED_AT + timedelta(minutes=40),
    )

    assert outcome.advanced is False
    assert game.status == GameStatus.TIMEOUT
    assert model.status == "timeout"
    assert model.current_level == 10
    assert [credit["amount"] for credit in ledger_credits] == [32_000]


@pytest.mark.asyncio
async def test_take_money_credits_last_answered_value(monkeypatch, ledger_credits) -> None:
    model = _stored_game(current_level=3)
    _patch_game_lookup(monkeypatch, model)

    game = await LadderGameService.take_money(
        _FakeSession(),
        user_id=7,
        game_id=GAME_ID,
        now_utc=NOW,
    )

    assert game.status == GameStatus.MONEY
    assert model.status == "money"
    assert model.prize == 300
    assert [credit["amount"] for credit in ledger_credits] == [300]


@pytest.mark.asyncio
async def test_use_lifeline_stores_hint_on_row(monkeypatch, ledger_credits) -> None:
    model = _stored_game(current_level=2)
    _patch_game_lookup(monkeypatch, model)

    game, hint = await LadderGameService.use_lifeline(
        _FakeSession(),
        user_id=7,
        game_id=GAME_ID,
        lifeline="fifty_fifty",
        rng=random.Random(5),
    )

    assert "a" in hint
    assert model.used_lifelines == ["fifty_fifty"]
    assert model.questions[2]["help"] == {"fifty_fifty": hint}
    assert game.status == GameStatus.IN_PROGRESS
    assert ledger_credits == []

    with pytest.raises(LifelineAlreadyUsedError):
        await LadderGameService.use_lifeline(
            _FakeSession(),
            user_id=7,
            game_id=GAME_ID,
            lifeline="fifty_fifty",
        )


@pytest.mark.asyncio
async def test_foreign_game_is_not_found(monkeypatch, ledger_credits) -> None:
    _patch_game_lookup(monkeypatch, _stored_game(user_id=8))

    with pytest.raises(GameNotFoundError):
        await LadderGameService.take_money(
            _FakeSession(),
            user_id=7,
            game_id=GAME_ID,
            now_utc=NOW,
        )
    assert ledger_credits == []


@pytest.mark.asyncio
async def test_get_active_game_rebuilds_stored_game(monkeypatch) -> None:
    model = _stored_game(current_level=6)

    async def _fake_get_in_progress(session, *, user_id: int):
        del session
        return model if user_id == 7 else None

    monkeypatch.setattr(LadderGamesRepo, "get_in_progress_for_user", _fake_get_in_progress)

    game = await LadderGameService.get_active_game(_FakeSession(), user_id=7)

    assert game is not None
    assert game.game_id == GAME_ID
    assert game.current_level == 6
    assert game.questions[6].correct_slot == "a"
    assert await LadderGameService.get_active_game(_FakeSession(), user_id=8) is None


def _patch_fresh_start(monkeypatch, *, create_error: Exception | None = None) -> None:
    async def _fake_get_in_progress(session, *, user_id: int):
        del session, user_id
        return None

    async def _fake_list_active(session, *, levels):
        del session
        return [_question_record(level) for level in levels]

    async def _fake_create(session, *, game: LadderGame):
        del session
        if create_error is not None:
            raise create_error
        return game

    monkeypatch.setattr(LadderGamesRepo, "get_in_progress_for_user", _fake_get_in_progress)
    monkeypatch.setattr(QuizQuestionsRepo, "list_active_for_levels", _fake_list_active)
    monkeypatch.setattr(LadderGamesRepo, "create", _fake_create)


@pytest.mark.asyncio
async def test_start_game_rejects_unknown_user(monkeypatch) -> None:
    async def _unexpected(*args, **kwargs):
        raise AssertionError("unknown user must be rejected before any game lookup")

    monkeypatch.setattr(LadderGamesRepo, "get_in_progress_for_user", _unexpected)
    monkeypatch.setattr(LadderGamesRepo, "create", _unexpected)

    with pytest.raises(PlayerNotFoundError):
        await LadderGameService.start_game(_FakeSession(), user_id=999, now_utc=GAME_STARTED_AT)


@pytest.mark.asyncio
async def test_start_game_maps_concurrent_active_game_insert(monkeypatch) -> None:
    _patch_fresh_start(
        monkeypatch,
        create_error=IntegrityError(
            "INSERT INTO ladder_games ...",
            {},
            Exception(
                'duplicate key value violates unique constraint "uq_ladder_games_user_in_progress"'
            ),
        ),
    )

    with pytest.raises(ActiveGameExistsError) as exc_info:
        await LadderGameService.start_game(_FakeSession(), user_id=7, now_utc=GAME_STARTED_AT)

    assert exc_info.value.game_id is None


@pytest.mark.asyncio
async def test_start_game_reraises_other_integrity_errors(monkeypatch) -> None:
    _patch_fresh_start(
        monkeypatch,
        create_error=IntegrityError(
            "INSERT INTO ladder_games ...",
            {},
            Exception(
                'insert or update on table "ladder_games" violates foreign key constraint '
                '"ladder_games_user_id_fkey"'
            ),
        ),
    )

    with pytest.raises(IntegrityError):
        await LadderGameService.start_game(_FakeSession(), user_id=7, now_utc=GAME_STARTED_AT)
