from __future__ import annotations

from quiz_ladder.game.ladder.types import GameStatus

STATUS_LABELS: dict[GameStatus, str] = {
    GameStatus.FAIL: "loss",
    GameStatus.MONEY: "cash-out",
    GameStatus.IN_PROGRESS: "in progress",
    GameStatus.WON: "won",
    GameStatus.TIMEOUT: "timed out",
}


def display_status_label(status: GameStatus | str) -> str:
    try:
        resolved = GameStatus(status)
    except ValueError:
        return str(status).replace("_", " ")
    return STATUS_LABELS[resolved]
