from quiz_ladder.db.repo.ladder_games_repo import LadderGamesRepo
from quiz_ladder.db.repo.ledger_repo import LedgerRepo
from quiz_ladder.db.repo.quiz_questions_repo import QuizQuestionsRepo
from quiz_ladder.db.repo.users_repo import UsersRepo

__all__ = [
    "LadderGamesRepo",
    "LedgerRepo",
    "QuizQuestionsRepo",
    "UsersRepo",
]
