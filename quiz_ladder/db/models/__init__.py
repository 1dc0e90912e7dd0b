from quiz_ladder.db.models.ladder_games import LadderGame
from quiz_ladder.db.models.ledger_entries import LedgerEntry
from quiz_ladder.db.models.quiz_questions import QuizQuestion
from quiz_ladder.db.models.users import User

__all__ = [
    "LadderGame",
    "LedgerEntry",
    "QuizQuestion",
    "User",
]
