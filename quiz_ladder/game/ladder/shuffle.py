from __future__ import annotations

import random

from quiz_ladder.game.ladder.constants import ANSWER_COUNT, SLOT_LABELS


def shuffle_answer_slots(
    correct_index: int,
    *,
    rng: random.Random,
    answer_count: int = ANSWER_COUNT,
) -> tuple[dict[str, int], str]:
    """Scrambles answer positions onto slot labels.

    Returns the label -> original answer index mapping and the label that
    now holds the correct answer.
    """
    if answer_count != len(SLOT_LABELS):
        raise ValueError(f"expected {len(SLOT_LABELS)} answers, got {answer_count}")
    if not 0 <= correct_index < answer_count:
        raise ValueError(f"correct answer index {correct_index} is out of range")

    positions = list(range(answer_count))
    rng.shuffle(positions)
    slot_to_original = dict(zip(SLOT_LABELS, positions))
    slot_of_correct = SLOT_LABELS[positions.index(correct_index)]
    return slot_to_original, slot_of_correct
