from __future__ import annotations

import argparse
import asyncio
import csv
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import delete

from quiz_ladder.db.models.quiz_questions import QuizQuestion
from quiz_ladder.db.repo.quiz_questions_repo import QuizQuestionsRepo
from quiz_ladder.db.session import SessionLocal
from quiz_ladder.economy.prizes.table import DEFAULT_PRIZE_TABLE
from quiz_ladder.game.ladder.types import QuestionTemplate
from quiz_ladder.game.questions.static_bank import STATIC_LADDER_BANK

REQUIRED_COLUMNS = {
    "question_id",
    "level",
    "question",
    "option_1",
    "option_2",
    "option_3",
    "option_4",
    "correct_option_id",
}


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import ladder questions into quiz_questions.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--csv", type=Path, help="CSV file with one question per row.")
    source.add_argument(
        "--builtin",
        action="store_true",
        help="Import the built-in sample bank (one question per level).",
    )
    parser.add_argument(
        "--replace-all",
        action="store_true",
        help="Delete existing rows from quiz_questions before import.",
    )
    parser.add_argument("--dry-run", action="store_true")
    return parser.parse_args()


def _templates_from_rows(
    rows: list[dict[str, str]],
    *,
    source_name: str,
    max_level: int,
) -> list[QuestionTemplate]:
    templates: list[QuestionTemplate] = []
    seen_question_ids: set[str] = set()
    for row_index, row in enumerate(rows, start=2):
        question_id = (row.get("question_id") or "").strip()
        if not question_id:
            raise ValueError(f"{source_name}:{row_index}: empty question_id")
        if len(question_id) > 64:
            raise ValueError(f"{source_name}:{row_index}: question_id exceeds 64 characters")
        if question_id in seen_question_ids:
            raise ValueError(f"{source_name}:{row_index}: duplicate question_id {question_id}")
        seen_question_ids.add(question_id)

        raw_level = (row.get("level") or "").strip()
        if not raw_level.isdigit() or int(raw_level) >= max_level:
            raise ValueError(f"{source_name}:{row_index}: level must be 0..{max_level - 1}")

        answers = tuple((row.get(f"option_{index}") or "").strip() for index in range(1, 5))
        if not all(answers):
            raise ValueError(f"{source_name}:{row_index}: all options must be non-empty")

        raw_correct_option = (row.get("correct_option_id") or "").strip()
        if raw_correct_option not in {"0", "1", "2", "3"}:
            raise ValueError(
                f"{source_name}:{row_index}: invalid correct_option_id={raw_correct_option!r}"
            )

        text = (row.get("question") or "").strip()
        if not text:
            raise ValueError(f"{source_name}:{row_index}: empty question")

        templates.append(
            QuestionTemplate(
                question_id=question_id,
                text=text,
                answers=(answers[0], answers[1], answers[2], answers[3]),
                correct_index=int(raw_correct_option),
                level=int(raw_level),
            )
        )
    return templates


def _missing_levels(templates: list[QuestionTemplate], *, max_level: int) -> list[int]:
    covered = {template.level for template in templates}
    return [level for level in range(max_level) if level not in covered]


def _read_csv(path: Path) -> list[dict[str, str]]:
    with path.open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle)
        missing_columns = REQUIRED_COLUMNS - set(reader.fieldnames or ())
        if missing_columns:
            raise ValueError(f"{path.name}: missing columns {sorted(missing_columns)}")
        return list(reader)


async def _persist(templates: list[QuestionTemplate], *, replace_all: bool) -> dict[int, int]:
    async with SessionLocal.begin() as session:
        if replace_all:
            await session.execute(delete(QuizQuestion))
        await QuizQuestionsRepo.upsert_templates(
            session,
            templates=templates,
            now_utc=datetime.now(timezone.utc),
        )
        return await QuizQuestionsRepo.count_active_by_level(session)


async def _run() -> int:
    args = _parse_args()
    max_level = DEFAULT_PRIZE_TABLE.max_level
    if args.builtin:
        templates = list(STATIC_LADDER_BANK)
    else:
        templates = _templates_from_rows(
            _read_csv(args.csv),
            source_name=args.csv.name,
            max_level=max_level,
        )

    missing_levels = _missing_levels(templates, max_level=max_level)
    if missing_levels:
        raise ValueError(f"import leaves ladder levels without questions: {missing_levels}")

    if args.dry_run:
        by_level = dict(Counter(template.level for template in templates))
    else:
        by_level = await _persist(templates, replace_all=args.replace_all)

    level_stats = ", ".join(f"{level}={count}" for level, count in sorted(by_level.items()))
    print(  # noqa: T201
        "ladder_bank_import "
        f"rows_imported={len(templates)} "
        f"replace_all={args.replace_all} "
        f"dry_run={args.dry_run}"
    )
    print(f"ladder_bank_import_by_level {level_stats}")  # noqa: T201
    return 0


def main() -> int:
    return asyncio.run(_run())


if __name__ == "__main__":
    raise SystemExit(main())
