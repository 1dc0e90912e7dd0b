from __future__ import annotations

import random
from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from quiz_ladder.db.models.ladder_games import LadderGame
from quiz_ladder.db.repo.ladder_games_repo import LadderGamesRepo
from quiz_ladder.db.repo.quiz_questions_repo import QuizQuestionsRepo, question_template_from_model
from quiz_ladder.db.repo.users_repo import UsersRepo
from quiz_ladder.economy.ledger.service import BalanceLedgerService
from quiz_ladder.economy.prizes.table import DEFAULT_PRIZE_TABLE, PrizeTable
from quiz_ladder.game.ladder.errors import (
    ActiveGameExistsError,
    GameNotFoundError,
    PlayerNotFoundError,
)
from quiz_ladder.game.ladder.factory import create_game
from quiz_ladder.game.ladder.rules import answer_current_question, take_money, use_lifeline
from quiz_ladder.game.ladder.snapshot import (
    game_from_snapshot,
    game_to_snapshot,
    questions_to_payload,
)
from quiz_ladder.game.ladder.types import AnswerOutcome, Game, Lifeline
from quiz_ladder.game.questions.bank import InMemoryQuestionRepository

logger = structlog.get_logger(__name__)

ACTIVE_GAME_CONSTRAINT = "uq_ladder_games_user_in_progress"


class LadderGameService:
    @staticmethod
    def _game_from_model(model: LadderGame) -> Game:
        return game_from_snapshot(
            {
                "game_id": model.id,
                "user_id": model.user_id,
                "created_at": model.created_at,
                "current_level": model.current_level,
                "status": model.status,
                "prize": model.prize,
                "used_lifelines": model.used_lifelines,
                "finished_at": model.finished_at,
                "questions": model.questions,
            }
        )

    @staticmethod
    def _apply_game_to_model(model: LadderGame, game: Game) -> None:
        snapshot = game_to_snapshot(game)
        model.status = snapshot["status"]
        model.current_level = snapshot["current_level"]
        model.prize = snapshot["prize"]
        model.used_lifelines = snapshot["used_lifelines"]
        model.questions = snapshot["questions"]
        model.finished_at = game.finished_at

    @staticmethod
    async def _load_for_update(
        session: AsyncSession,
        *,
        user_id: int,
        game_id: UUID,
    ) -> LadderGame:
        model = await LadderGamesRepo.get_by_id_for_update(session, game_id)
        if model is None or model.user_id != user_id:
            raise GameNotFoundError(f"game {game_id} not found")
        return model

    @staticmethod
    async def _settle(session: AsyncSession, *, game: Game, now_utc: datetime) -> None:
        if not game.is_finished:
            return
        logger.info(
            "ladder_game_finished",
            game_id=str(game.game_id),
            user_id=game.user_id,
            status=game.status.value,
            current_level=game.current_level,
            last_answered_level=game.previous_level,
            prize=game.prize,
        )
        if game.prize <= 0:
            return
        await BalanceLedgerService.credit_prize(
            session,
            user_id=game.user_id,
            game_id=game.game_id,
            amount=game.prize,
            now_utc=now_utc,
        )

    @staticmethod
    async def start_game(
        session: AsyncSession,
        *,
        user_id: int,
        now_utc: datetime,
        rng: random.Random | None = None,
        prize_table: PrizeTable = DEFAULT_PRIZE_TABLE,
    ) -> Game:
        if await UsersRepo.get_by_id(session, user_id) is None:
            raise PlayerNotFoundError(f"user {user_id} does not exist")

        existing = await LadderGamesRepo.get_in_progress_for_user(session, user_id=user_id)
        if existing is not None:
            raise ActiveGameExistsError(existing.id)

        effective_rng = rng or random.Random()
        pool = await QuizQuestionsRepo.list_active_for_levels(
            session,
            levels=list(range(prize_table.max_level)),
        )
        repository = InMemoryQuestionRepository(
            (question_template_from_model(question) for question in pool),
            rng=effective_rng,
        )
        game = create_game(
            user_id=user_id,
            repository=repository,
            rng=effective_rng,
            now_utc=now_utc,
            max_level=prize_table.max_level,
        )

        try:
            await LadderGamesRepo.create(
                session,
                game=LadderGame(
                    id=game.game_id,
                    user_id=user_id,
                    status=game.status.value,
                    current_level=game.current_level,
                    prize=game.prize,
                    used_lifelines=[],
                    questions=questions_to_payload(game.questions),
                    created_at=game.created_at,
                    finished_at=None,
                ),
            )
        except IntegrityError as exc:
            if ACTIVE_GAME_CONSTRAINT in str(exc.orig):
                raise ActiveGameExistsError from exc
            raise

        logger.info(
            "ladder_game_created",
            game_id=str(game.game_id),
            user_id=user_id,
            max_level=game.max_level,
        )
        return game

    @staticmethod
    async def get_game(session: AsyncSession, *, user_id: int, game_id: UUID) -> Game:
        model = await LadderGamesRepo.get_by_id(session, game_id)
        if model is None or model.user_id != user_id:
            raise GameNotFoundError(f"game {game_id} not found")
        return LadderGameService._game_from_model(model)

    @staticmethod
    async def get_active_game(session: AsyncSession, *, user_id: int) -> Game | None:
        model = await LadderGamesRepo.get_in_progress_for_user(session, user_id=user_id)
        if model is None:
            return None
        return LadderGameService._game_from_model(model)

    @staticmethod
    async def list_games(session: AsyncSession, *, user_id: int, limit: int = 20) -> list[Game]:
        models = await LadderGamesRepo.list_for_user(session, user_id=user_id, limit=limit)
        return [LadderGameService._game_from_model(model) for model in models]

    @staticmethod
    async def answer(
        session: AsyncSession,
        *,
        user_id: int,
        game_id: UUID,
        slot_label: str,
        now_utc: datetime,
        prize_table: PrizeTable = DEFAULT_PRIZE_TABLE,
    ) -> tuple[Game, AnswerOutcome]:
        model = await LadderGameService._load_for_update(session, user_id=user_id, game_id=game_id)
        game = LadderGameService._game_from_model(model)

        outcome = answer_current_question(
            game,
            slot_label,
            now_utc=now_utc,
            prize_table=prize_table,
        )
        LadderGameService._apply_game_to_model(model, game)
        await session.flush()
        await LadderGameService._settle(session, game=game, now_utc=now_utc)
        return game, outcome

    @staticmethod
    async def take_money(
        session: AsyncSession,
        *,
        user_id: int,
        game_id: UUID,
        now_utc: datetime,
        prize_table: PrizeTable = DEFAULT_PRIZE_TABLE,
    ) -> Game:
        model = await LadderGameService._load_for_update(session, user_id=user_id, game_id=game_id)
        game = LadderGameService._game_from_model(model)

        take_money(game, now_utc=now_utc, prize_table=prize_table)
        LadderGameService._apply_game_to_model(model, game)
        await session.flush()
        await LadderGameService._settle(session, game=game, now_utc=now_utc)
        return game

    @staticmethod
    async def use_lifeline(
        session: AsyncSession,
        *,
        user_id: int,
        game_id: UUID,
        lifeline: Lifeline | str,
        rng: random.Random | None = None,
    ) -> tuple[Game, object]:
        model = await LadderGameService._load_for_update(session, user_id=user_id, game_id=game_id)
        game = LadderGameService._game_from_model(model)

        payload = use_lifeline(game, lifeline, rng=rng or random.Random())
        LadderGameService._apply_game_to_model(model, game)
        await session.flush()
        logger.info(
            "ladder_lifeline_used",
            game_id=str(game.game_id),
            user_id=user_id,
            lifeline=Lifeline(lifeline).value,
            current_level=game.current_level,
        )
        return game, payload
