from quiz_ladder.game.ladder.factory import create_game
from quiz_ladder.game.ladder.rules import (
    answer_current_question,
    is_expired,
    take_money,
    use_lifeline,
)
from quiz_ladder.game.ladder.types import (
    AnswerOutcome,
    Game,
    GameStatus,
    Lifeline,
    QuestionInstance,
    QuestionTemplate,
)

__all__ = [
    "AnswerOutcome",
    "Game",
    "GameStatus",
    "Lifeline",
    "QuestionInstance",
    "QuestionTemplate",
    "answer_current_question",
    "create_game",
    "is_expired",
    "take_money",
    "use_lifeline",
]
