from __future__ import annotations

PRIZE_VALUES: tuple[int, ...] = (
    100,
    200,
    300,
    500,
    1_000,
    2_000,
    4_000,
    8_000,
    16_000,
    32_000,
    64_000,
    125_000,
    250_000,
    500_000,
    1_000_000,
)
FIREPROOF_LEVELS: frozenset[int] = frozenset({4, 9, 14})

OUTCOME_WON = "won"
OUTCOME_FAIL = "fail"
OUTCOME_TIMEOUT = "timeout"
OUTCOME_MONEY = "money"
