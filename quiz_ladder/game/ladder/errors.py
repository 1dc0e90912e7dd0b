from __future__ import annotations

from uuid import UUID


class LadderGameError(Exception):
    pass


class GameAlreadyFinishedError(LadderGameError):
    pass


class InvalidSlotLabelError(LadderGameError):
    pass


class LifelineAlreadyUsedError(LadderGameError):
    pass


class UnknownLifelineError(LadderGameError):
    pass


class InsufficientQuestionPoolError(LadderGameError):
    def __init__(self, missing_levels: list[int]) -> None:
        super().__init__(f"no question available for levels {missing_levels}")
        self.missing_levels = missing_levels


class GameNotFoundError(LadderGameError):
    pass


class ActiveGameExistsError(LadderGameError):
    def __init__(self, game_id: UUID | None = None) -> None:
        message = "user already has an in-progress game"
        if game_id is not None:
            message = f"{message} {game_id}"
        super().__init__(message)
        self.game_id = game_id


class PlayerNotFoundError(LadderGameError):
    pass
