from quiz_ladder.economy.prizes.table import DEFAULT_PRIZE_TABLE, PrizeTable

__all__ = [
    "DEFAULT_PRIZE_TABLE",
    "PrizeTable",
]
