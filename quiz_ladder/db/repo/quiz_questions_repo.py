from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from quiz_ladder.db.models.quiz_questions import QuizQuestion
from quiz_ladder.game.ladder.types import QuestionTemplate


UPSERT_CHUNK_SIZE = 1000


def _chunks(rows: list[dict[str, Any]], size: int) -> list[list[dict[str, Any]]]:
    return [rows[index : index + size] for index in range(0, len(rows), size)]


def question_template_from_model(question: QuizQuestion) -> QuestionTemplate:
    return QuestionTemplate(
        question_id=question.question_id,
        text=question.question_text,
        answers=(question.option_1, question.option_2, question.option_3, question.option_4),
        correct_index=question.correct_option_id,
        level=question.level,
    )


class QuizQuestionsRepo:
    @staticmethod
    async def list_active_for_levels(
        session: AsyncSession,
        *,
        levels: Sequence[int],
    ) -> list[QuizQuestion]:
        if not levels:
            return []
        stmt = (
            select(QuizQuestion)
            .where(
                QuizQuestion.level.in_(tuple(levels)),
                QuizQuestion.status == "ACTIVE",
            )
            .order_by(QuizQuestion.level.asc(), QuizQuestion.question_id.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def count_active_by_level(session: AsyncSession) -> dict[int, int]:
        stmt = (
            select(QuizQuestion.level, func.count(QuizQuestion.question_id))
            .where(QuizQuestion.status == "ACTIVE")
            .group_by(QuizQuestion.level)
        )
        result = await session.execute(stmt)
        return {int(level): int(total) for level, total in result.all()}

    @staticmethod
    async def upsert_templates(
        session: AsyncSession,
        *,
        templates: Iterable[QuestionTemplate],
        now_utc: datetime,
    ) -> int:
        rows = [
            {
                "question_id": template.question_id,
                "level": template.level,
                "question_text": template.text,
                "option_1": template.answers[0],
                "option_2": template.answers[1],
                "option_3": template.answers[2],
                "option_4": template.answers[3],
                "correct_option_id": template.correct_index,
                "status": "ACTIVE",
                "created_at": now_utc,
                "updated_at": now_utc,
            }
            for template in templates
        ]
        for chunk in _chunks(rows, UPSERT_CHUNK_SIZE):
            stmt = insert(QuizQuestion).values(chunk)
            stmt = stmt.on_conflict_do_update(
                index_elements=[QuizQuestion.question_id],
                set_={
                    "level": stmt.excluded.level,
                    "question_text": stmt.excluded.question_text,
                    "option_1": stmt.excluded.option_1,
                    "option_2": stmt.excluded.option_2,
                    "option_3": stmt.excluded.option_3,
                    "option_4": stmt.excluded.option_4,
                    "correct_option_id": stmt.excluded.correct_option_id,
                    "status": stmt.excluded.status,
                    "updated_at": stmt.excluded.updated_at,
                },
            )
            await session.execute(stmt)
        return len(rows)
