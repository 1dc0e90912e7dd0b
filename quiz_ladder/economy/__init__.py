from quiz_ladder.economy.prizes import DEFAULT_PRIZE_TABLE, PrizeTable

__all__ = [
    "DEFAULT_PRIZE_TABLE",
    "PrizeTable",
]
