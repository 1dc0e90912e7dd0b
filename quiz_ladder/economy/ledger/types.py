from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class PrizeCreditResult:
    user_id: int
    game_id: UUID
    amount: int
    balance_after: int
    idempotent_replay: bool
