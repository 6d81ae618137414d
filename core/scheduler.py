"""SM-2 spaced repetition scheduling."""

from datetime import datetime, timedelta

from .config import (
    GRADE_FORGOT, GRADE_HARD, GRADE_GOOD, GRADE_EASY, VALID_GRADES,
    MIN_EASE_FACTOR, FORGOT_EASE_PENALTY, HARD_EASE_PENALTY, EASY_EASE_BONUS,
    FIRST_SUCCESS_INTERVAL, SECOND_SUCCESS_INTERVAL,
    LEVEL_THRESHOLDS, LEVEL_NEW
)
from .models import LearningState
from .utils import round_half_up


def calculate_level(interval: int) -> int:
    """Map an interval in days to a level 0-5, highest threshold first."""
    for min_interval, level in LEVEL_THRESHOLDS:
        if interval >= min_interval:
            return level
    return LEVEL_NEW


def calculate_next_review(state: LearningState, grade: int, now: datetime) -> LearningState:
    """Compute the learning state that follows grading a word at time `now`.

    Forgot resets the interval and lowers the ease factor. Any other grade is a
    successful recall: the interval goes 0 -> 1 -> 6 and then grows by the ease
    factor, which Hard lowers and Easy raises. The input state is left untouched.
    """
    if grade not in VALID_GRADES:
        raise ValueError(f"Invalid grade: {grade}. Must be one of {VALID_GRADES}")

    ease_factor = state.ease_factor
    interval = state.interval
    review_count = state.review_count + 1
    correct_count = state.correct_count

    if grade == GRADE_FORGOT:
        interval = 0
        ease_factor = max(MIN_EASE_FACTOR, ease_factor - FORGOT_EASE_PENALTY)
    else:
        correct_count += 1

        if interval == 0:
            interval = FIRST_SUCCESS_INTERVAL
        elif interval == 1:
            interval = SECOND_SUCCESS_INTERVAL
        else:
            interval = round_half_up(interval * ease_factor)

        if grade == GRADE_HARD:
            ease_factor = max(MIN_EASE_FACTOR, ease_factor - HARD_EASE_PENALTY)
        elif grade == GRADE_EASY:
            ease_factor = ease_factor + EASY_EASE_BONUS

    return LearningState(
        level=calculate_level(interval),
        ease_factor=ease_factor,
        interval=interval,
        last_reviewed_at=now,
        next_review_at=now + timedelta(days=interval),
        review_count=review_count,
        correct_count=correct_count
    )


def format_interval(days: int) -> str:
    """Format an interval in days for display."""
    if days == 0:
        return 'today'
    if days == 1:
        return '1 day'
    if days < 7:
        return f'{days} days'
    if days < 14:
        return '1 week'
    if days < 21:
        return '2 weeks'
    if days < 30:
        return '3 weeks'
    if days < 60:
        return '1 month'
    return f'{round_half_up(days / 30)} months'


def get_grade_feedback(grade: int, interval: int) -> str:
    """Short message shown after a grade."""
    if grade == GRADE_FORGOT:
        return "No problem! We'll review this again soon."
    when = format_interval(interval)
    messages = {
        GRADE_HARD: f'Got it. Next review in {when}.',
        GRADE_GOOD: f'Nice! Next review in {when}.',
        GRADE_EASY: f'Excellent! Next review in {when}.'
    }
    return messages.get(grade, '')
