from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from quiz_ladder.game.ladder.types import Game, GameStatus, Lifeline, QuestionInstance, QuestionTemplate


def _question_to_payload(question: QuestionInstance) -> dict[str, Any]:
    template = question.template
    return {
        "question_id": template.question_id,
        "text": template.text,
        "answers": list(template.answers),
        "correct_index": template.correct_index,
        "level": template.level,
        "slots": dict(question.slot_to_original),
        "help": dict(question.help_payloads),
    }


def _question_from_payload(payload: dict[str, Any]) -> QuestionInstance:
    answers = tuple(str(answer) for answer in payload["answers"])
    if len(answers) != 4:
        raise ValueError(f"question {payload.get('question_id')} must have exactly 4 answers")
    return QuestionInstance(
        template=QuestionTemplate(
            question_id=str(payload["question_id"]),
            text=str(payload["text"]),
            answers=(answers[0], answers[1], answers[2], answers[3]),
            correct_index=int(payload["correct_index"]),
            level=int(payload["level"]),
        ),
        slot_to_original={str(label): int(index) for label, index in payload["slots"].items()},
        help_payloads=dict(payload.get("help") or {}),
    )


def questions_to_payload(questions: list[QuestionInstance]) -> list[dict[str, Any]]:
    return [_question_to_payload(question) for question in questions]


def questions_from_payload(payload: list[dict[str, Any]]) -> list[QuestionInstance]:
    return [_question_from_payload(item) for item in payload]


def game_to_snapshot(game: Game) -> dict[str, Any]:
    return {
        "game_id": str(game.game_id),
        "user_id": game.user_id,
        "created_at": game.created_at.isoformat(),
        "current_level": game.current_level,
        "status": game.status.value,
        "prize": game.prize,
        "used_lifelines": sorted(lifeline.value for lifeline in game.used_lifelines),
        "finished_at": game.finished_at.isoformat() if game.finished_at is not None else None,
        "questions": questions_to_payload(game.questions),
    }


def _as_datetime(value: datetime | str) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def game_from_snapshot(snapshot: dict[str, Any]) -> Game:
    """Rebuilds a game from `game_to_snapshot` output or from the stored row values.

    Timestamps may be ISO strings or already parsed datetimes.
    """
    finished_at = snapshot.get("finished_at")
    return Game(
        game_id=UUID(str(snapshot["game_id"])),
        user_id=int(snapshot["user_id"]),
        created_at=_as_datetime(snapshot["created_at"]),
        questions=questions_from_payload(snapshot["questions"]),
        current_level=int(snapshot["current_level"]),
        status=GameStatus(snapshot["status"]),
        prize=int(snapshot["prize"]),
        used_lifelines={Lifeline(value) for value in snapshot.get("used_lifelines", [])},
        finished_at=_as_datetime(finished_at) if finished_at else None,
    )
