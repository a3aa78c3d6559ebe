"""
SM-2 review scheduler.

Pure functions over ScheduleState; no I/O. Callers own persistence:
  schedule_review(state, grade, now) - next state after a graded recall
  is_due(state, now)                 - due-card predicate
"""
from __future__ import annotations

import math
import time

from vocaboost.models.flashcard import MIN_EASE_FACTOR, Grade, ScheduleState

DAY_MS = 86_400_000
PASSING_QUALITY = 3

# SM-2 quality scores (0-5). Every exposed grade is passing.
_GRADE_QUALITY = {
    Grade.HARD: 3,
    Grade.GOOD: 4,
    Grade.EASY: 5,
}


def now_ms() -> int:
    return int(time.time() * 1000)


def grade_to_quality(grade: Grade) -> int:
    return _GRADE_QUALITY[Grade(grade)]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def schedule_review(
    state: ScheduleState,
    grade: Grade,
    now: int | None = None,
) -> ScheduleState:
    """
    Compute the schedule that follows a graded review.

    The interval is derived from the ease factor held *before* this review,
    then the ease factor is adjusted from the quality score and floored at 1.3.
    Returns a new ScheduleState; ``state`` is left as is.
    """
    if now is None:
        now = now_ms()
    q = grade_to_quality(grade)

    interval = state.interval
    repetitions = state.repetition_count
    if q >= PASSING_QUALITY:
        if repetitions == 0:
            interval = 1
        elif repetitions == 1:
            interval = 6
        else:
            interval = _round_half_up(interval * state.ease_factor)
        repetitions += 1
    else:
        # Lapse. Unreachable until a failing grade (e.g. "again") is exposed.
        repetitions = 0
        interval = 1

    ease_factor = state.ease_factor + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
    ease_factor = max(MIN_EASE_FACTOR, ease_factor)

    return ScheduleState(
        interval=interval,
        ease_factor=ease_factor,
        repetition_count=repetitions,
        next_review_at=now + interval * DAY_MS,
        last_reviewed_at=now,
    )


def is_due(state: ScheduleState, now: int | None = None) -> bool:
    if state.next_review_at is None:
        return True
    if now is None:
        now = now_ms()
    return state.next_review_at <= now
