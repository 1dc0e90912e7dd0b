from __future__ import annotations

import random
from collections.abc import Sequence

from quiz_ladder.game.ladder.constants import (
    AUDIENCE_CORRECT_WEIGHT_RANGE,
    AUDIENCE_OTHER_WEIGHT_RANGE,
    FRIEND_CALL_ACCURACY,
    FRIEND_CONFIDENCE_QUALIFIERS,
    FRIEND_NAMES,
    SLOT_LABELS,
)
from quiz_ladder.game.ladder.errors import UnknownLifelineError
from quiz_ladder.game.ladder.types import Lifeline, QuestionInstance


def _other_labels(correct_slot: str, labels: Sequence[str]) -> list[str]:
    if correct_slot not in labels:
        raise ValueError(f"correct slot {correct_slot!r} is not one of {list(labels)}")
    return [label for label in labels if label != correct_slot]


def fifty_fifty(
    *,
    correct_slot: str,
    rng: random.Random,
    labels: Sequence[str] = SLOT_LABELS,
) -> list[str]:
    kept_wrong = rng.choice(_other_labels(correct_slot, labels))
    return sorted((correct_slot, kept_wrong))


def _normalize_to_percentages(weights: dict[str, int], labels: Sequence[str]) -> dict[str, int]:
    total = sum(weights.values())
    percentages = {label: weights[label] * 100 // total for label in labels}
    missing = 100 - sum(percentages.values())
    # Largest remainder first; label order breaks ties.
    by_remainder = sorted(
        labels,
        key=lambda label: (-(weights[label] * 100 % total), labels.index(label)),
    )
    for label in by_remainder[:missing]:
        percentages[label] += 1
    return percentages


def audience_poll(
    *,
    correct_slot: str,
    rng: random.Random,
    labels: Sequence[str] = SLOT_LABELS,
) -> dict[str, int]:
    others = set(_other_labels(correct_slot, labels))
    weights = {
        label: (
            rng.randint(*AUDIENCE_OTHER_WEIGHT_RANGE)
            if label in others
            else rng.randint(*AUDIENCE_CORRECT_WEIGHT_RANGE)
        )
        for label in labels
    }
    return _normalize_to_percentages(weights, list(labels))


def friend_call(
    *,
    correct_slot: str,
    rng: random.Random,
    accuracy: float = FRIEND_CALL_ACCURACY,
    labels: Sequence[str] = SLOT_LABELS,
) -> str:
    others = _other_labels(correct_slot, labels)
    guess = correct_slot if rng.random() < accuracy else rng.choice(others)
    friend = rng.choice(FRIEND_NAMES)
    qualifier = rng.choice(FRIEND_CONFIDENCE_QUALIFIERS)
    return f"{friend} {qualifier} that the answer is option {guess.upper()}"


def apply_lifeline(
    question: QuestionInstance,
    lifeline: Lifeline | str,
    *,
    rng: random.Random,
    friend_call_accuracy: float = FRIEND_CALL_ACCURACY,
) -> object:
    """Computes the hint for `question` and caches it in its help payloads.

    Re-applying the same lifeline to the same question returns the cached
    payload unchanged.
    """
    try:
        resolved = Lifeline(lifeline)
    except ValueError as exc:
        raise UnknownLifelineError(str(lifeline)) from exc

    cached = question.help_payloads.get(resolved.value)
    if cached is not None:
        return cached

    correct_slot = question.correct_slot
    payload: object
    if resolved is Lifeline.FIFTY_FIFTY:
        payload = fifty_fifty(correct_slot=correct_slot, rng=rng)
    elif resolved is Lifeline.AUDIENCE_HELP:
        payload = audience_poll(correct_slot=correct_slot, rng=rng)
    else:
        payload = friend_call(correct_slot=correct_slot, rng=rng, accuracy=friend_call_accuracy)

    question.help_payloads[resolved.value] = payload
    return payload
