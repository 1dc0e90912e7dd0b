from __future__ import annotations

from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from quiz_ladder.db.models.ledger_entries import LedgerEntry
from quiz_ladder.db.repo.ledger_repo import LedgerRepo
from quiz_ladder.db.repo.users_repo import UsersRepo
from quiz_ladder.economy.ledger.errors import LedgerUserNotFoundError
from quiz_ladder.economy.ledger.types import PrizeCreditResult

logger = structlog.get_logger(__name__)

PRIZE_ENTRY_TYPE = "LADDER_PRIZE"


def prize_idempotency_key(game_id: UUID) -> str:
    return f"ladder_prize:{game_id}"


class BalanceLedgerService:
    @staticmethod
    async def credit_prize(
        session: AsyncSession,
        *,
        user_id: int,
        game_id: UUID,
        amount: int,
        now_utc: datetime,
    ) -> PrizeCreditResult:
        if amount <= 0:
            raise ValueError("prize credit amount must be positive")

        idempotency_key = prize_idempotency_key(game_id)
        existing = await LedgerRepo.get_by_idempotency_key(session, idempotency_key)
        if existing is not None:
            return PrizeCreditResult(
                user_id=existing.user_id,
                game_id=game_id,
                amount=existing.amount,
                balance_after=int(existing.balance_after or 0),
                idempotent_replay=True,
            )

        user = await UsersRepo.get_by_id_for_update(session, user_id)
        if user is None:
            raise LedgerUserNotFoundError(f"user {user_id} does not exist")

        user.balance += amount
        await LedgerRepo.create(
            session,
            entry=LedgerEntry(
                user_id=user_id,
                game_id=game_id,
                entry_type=PRIZE_ENTRY_TYPE,
                direction="CREDIT",
                amount=amount,
                balance_after=user.balance,
                idempotency_key=idempotency_key,
                metadata_={},
                created_at=now_utc,
            ),
        )
        logger.info(
            "ladder_prize_credited",
            user_id=user_id,
            game_id=str(game_id),
            amount=amount,
            balance_after=user.balance,
        )
        return PrizeCreditResult(
            user_id=user_id,
            game_id=game_id,
            amount=amount,
            balance_after=user.balance,
            idempotent_replay=False,
        )
