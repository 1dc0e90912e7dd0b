from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from quiz_ladder.db.models.ladder_games import LadderGame


class LadderGamesRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, game_id: UUID) -> LadderGame | None:
        return await session.get(LadderGame, game_id)

    @staticmethod
    async def get_by_id_for_update(session: AsyncSession, game_id: UUID) -> LadderGame | None:
        stmt = select(LadderGame).where(LadderGame.id == game_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_in_progress_for_user(session: AsyncSession, *, user_id: int) -> LadderGame | None:
        stmt = select(LadderGame).where(
            LadderGame.user_id == user_id,
            LadderGame.status == "in_progress",
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_for_user(
        session: AsyncSession,
        *,
        user_id: int,
        limit: int = 20,
    ) -> list[LadderGame]:
        stmt = (
            select(LadderGame)
            .where(LadderGame.user_id == user_id)
            .order_by(LadderGame.created_at.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def create(session: AsyncSession, *, game: LadderGame) -> LadderGame:
        session.add(game)
        await session.flush()
        return game
