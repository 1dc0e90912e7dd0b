from __future__ import annotations

from dataclasses import dataclass

from quiz_ladder.economy.prizes.constants import (
    FIREPROOF_LEVELS,
    OUTCOME_FAIL,
    OUTCOME_MONEY,
    OUTCOME_TIMEOUT,
    OUTCOME_WON,
    PRIZE_VALUES,
)
from quiz_ladder.economy.prizes.errors import InvalidPrizeTableError, UnknownPayoutOutcomeError


@dataclass(frozen=True, slots=True)
class PrizeTable:
    """Prize ladder: one value per level plus the fireproof checkpoint levels.

    A fireproof level is a floor once it is reached, even if the question at
    that level is then answered wrong.
    """

    values: tuple[int, ...]
    fireproof_levels: frozenset[int]

    def __post_init__(self) -> None:
        if not self.values:
            raise InvalidPrizeTableError("prize table must contain at least one level")
        if any(value <= 0 for value in self.values):
            raise InvalidPrizeTableError("prize values must be positive")
        if any(lower >= upper for lower, upper in zip(self.values, self.values[1:])):
            raise InvalidPrizeTableError("prize values must be strictly increasing")
        out_of_range = sorted(
            level for level in self.fireproof_levels if level < 0 or level >= len(self.values)
        )
        if out_of_range:
            raise InvalidPrizeTableError(f"fireproof levels outside the ladder: {out_of_range}")

    @property
    def max_level(self) -> int:
        return len(self.values)

    @property
    def top_prize(self) -> int:
        return self.values[-1]

    def value_at(self, level: int) -> int:
        if level < 0:
            return 0
        return self.values[min(level, self.max_level - 1)]

    def is_fireproof(self, level: int) -> bool:
        return level in self.fireproof_levels

    def fireproof_prize(self, level: int) -> int:
        reached = [checkpoint for checkpoint in self.fireproof_levels if checkpoint <= level]
        if not reached:
            return 0
        return self.values[max(reached)]

    def payout_for(self, level: int, outcome: str) -> int:
        if outcome == OUTCOME_WON:
            return self.top_prize
        if outcome == OUTCOME_MONEY:
            return self.value_at(level - 1)
        if outcome in (OUTCOME_FAIL, OUTCOME_TIMEOUT):
            return self.fireproof_prize(level)
        raise UnknownPayoutOutcomeError(outcome)


DEFAULT_PRIZE_TABLE = PrizeTable(values=PRIZE_VALUES, fireproof_levels=FIREPROOF_LEVELS)
