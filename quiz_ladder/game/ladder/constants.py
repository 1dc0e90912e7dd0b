from __future__ import annotations

from datetime import timedelta

from quiz_ladder.core.config import get_settings

SLOT_LABELS: tuple[str, str, str, str] = ("a", "b", "c", "d")
ANSWER_COUNT = len(SLOT_LABELS)

GAME_TIME_LIMIT = timedelta(minutes=get_settings().ladder_time_limit_minutes)
FRIEND_CALL_ACCURACY = get_settings().ladder_friend_call_accuracy

AUDIENCE_CORRECT_WEIGHT_RANGE: tuple[int, int] = (45, 90)
AUDIENCE_OTHER_WEIGHT_RANGE: tuple[int, int] = (0, 60)

FRIEND_NAMES: tuple[str, ...] = (
    "Your classmate Vasily",
    "Your aunt Olga",
    "Your neighbour Pete",
    "Your old coach",
    "Your best friend Kate",
)
FRIEND_CONFIDENCE_QUALIFIERS: tuple[str, ...] = (
    "is absolutely sure",
    "is fairly confident",
    "thinks",
    "has a hunch",
)
