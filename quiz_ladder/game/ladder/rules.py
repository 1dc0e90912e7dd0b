from __future__ import annotations

import random
from datetime import datetime, timedelta

from quiz_ladder.economy.prizes.table import DEFAULT_PRIZE_TABLE, PrizeTable
from quiz_ladder.game.ladder.constants import FRIEND_CALL_ACCURACY, GAME_TIME_LIMIT, SLOT_LABELS
from quiz_ladder.game.ladder.errors import (
    GameAlreadyFinishedError,
    InvalidSlotLabelError,
    LifelineAlreadyUsedError,
    UnknownLifelineError,
)
from quiz_ladder.game.ladder.lifelines import apply_lifeline
from quiz_ladder.game.ladder.types import AnswerOutcome, Game, GameStatus, Lifeline


def _ensure_in_progress(game: Game) -> None:
    if game.status.is_terminal:
        raise GameAlreadyFinishedError(f"game {game.game_id} is already {game.status.value}")


def _finish(
    game: Game,
    *,
    status: GameStatus,
    prize_table: PrizeTable,
    now_utc: datetime,
) -> None:
    game.prize = prize_table.payout_for(game.current_level, status.value)
    game.status = status
    game.finished_at = now_utc


def _normalize_slot_label(slot_label: str) -> str:
    normalized = slot_label.strip().lower() if isinstance(slot_label, str) else ""
    if normalized not in SLOT_LABELS:
        raise InvalidSlotLabelError(f"unknown answer slot {slot_label!r}")
    return normalized


def is_expired(
    game: Game,
    *,
    now_utc: datetime,
    time_limit: timedelta = GAME_TIME_LIMIT,
) -> bool:
    return now_utc - game.created_at > time_limit


def answer_current_question(
    game: Game,
    slot_label: str,
    *,
    now_utc: datetime,
    prize_table: PrizeTable = DEFAULT_PRIZE_TABLE,
    time_limit: timedelta = GAME_TIME_LIMIT,
) -> AnswerOutcome:
    _ensure_in_progress(game)

    if is_expired(game, now_utc=now_utc, time_limit=time_limit):
        _finish(game, status=GameStatus.TIMEOUT, prize_table=prize_table, now_utc=now_utc)
        return AnswerOutcome(
            advanced=False,
            status=game.status,
            current_level=game.current_level,
            prize=game.prize,
        )

    normalized = _normalize_slot_label(slot_label)
    question = game.current_question
    if question is None:
        raise GameAlreadyFinishedError(f"game {game.game_id} has no question left")
    correct_slot = question.correct_slot

    if not question.is_correct(normalized):
        _finish(game, status=GameStatus.FAIL, prize_table=prize_table, now_utc=now_utc)
        return AnswerOutcome(
            advanced=False,
            status=game.status,
            current_level=game.current_level,
            prize=game.prize,
            correct_slot=correct_slot,
        )

    game.current_level += 1
    if game.current_level >= game.max_level:
        _finish(game, status=GameStatus.WON, prize_table=prize_table, now_utc=now_utc)

    return AnswerOutcome(
        advanced=True,
        status=game.status,
        current_level=game.current_level,
        prize=game.prize,
        correct_slot=correct_slot,
    )


def take_money(
    game: Game,
    *,
    now_utc: datetime,
    prize_table: PrizeTable = DEFAULT_PRIZE_TABLE,
) -> int:
    _ensure_in_progress(game)
    _finish(game, status=GameStatus.MONEY, prize_table=prize_table, now_utc=now_utc)
    return game.prize


def use_lifeline(
    game: Game,
    lifeline: Lifeline | str,
    *,
    rng: random.Random,
    friend_call_accuracy: float = FRIEND_CALL_ACCURACY,
) -> object:
    _ensure_in_progress(game)
    try:
        resolved = Lifeline(lifeline)
    except ValueError as exc:
        raise UnknownLifelineError(str(lifeline)) from exc
    if resolved in game.used_lifelines:
        raise LifelineAlreadyUsedError(f"{resolved.value} was already used in game {game.game_id}")

    question = game.current_question
    if question is None:
        raise GameAlreadyFinishedError(f"game {game.game_id} has no question left")

    payload = apply_lifeline(
        question,
        resolved,
        rng=rng,
        friend_call_accuracy=friend_call_accuracy,
    )
    game.used_lifelines.add(resolved)
    return payload
