"""SM-2 Spaced Repetition Algorithm.

Based on the SuperMemo SM-2 algorithm by Piotr Wozniak.
https://www.supermemo.com/en/blog/application-of-a-computer-to-improve-the-results-obtained-in-working-with-the-supermemo-method

Pure arithmetic: the caller supplies the current state and the clock, and
persists whatever comes back.
"""

import logging
from datetime import datetime, timedelta

from wordwise.constants import (
    DEFAULT_INTERVAL_DAYS,
    LEARNED_REPETITIONS,
    MAX_INTERVAL_DAYS,
    MAX_QUALITY,
    MIN_EASINESS_FACTOR,
    MIN_QUALITY,
    PASSING_QUALITY,
    SECOND_INTERVAL_DAYS,
)
from wordwise.models import SM2Result

logger = logging.getLogger(__name__)


def update_sm2(
    quality: int,
    easiness_factor: float,
    interval: int,
    repetition: int,
) -> SM2Result:
    """
    Calculate the next review parameters using the SM-2 algorithm.

    Args:
        quality: Response quality (0-5):
            5 - Perfect response, no hesitation
            4 - Correct response after hesitation
            3 - Correct response with difficulty
            2 - Incorrect, but seemed easy to recall
            1 - Incorrect, but remembered when shown answer
            0 - Complete blackout

        easiness_factor: Current easiness factor
        interval: Current interval in days
        repetition: Number of consecutive successful reviews

    Returns:
        SM2Result with updated values. The next review date is left to
        next_review_date() so this function never reads the clock.
    """
    # Persisted values can be out of range; clamp rather than refuse them
    quality = max(MIN_QUALITY, min(MAX_QUALITY, int(quality)))
    if easiness_factor < MIN_EASINESS_FACTOR:
        logger.debug(f"Clamping easiness factor {easiness_factor} to {MIN_EASINESS_FACTOR}")
        easiness_factor = MIN_EASINESS_FACTOR
    interval = max(DEFAULT_INTERVAL_DAYS, interval)
    repetition = max(0, repetition)

    # Update easiness factor
    new_ef = easiness_factor + (0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02))
    new_ef = max(MIN_EASINESS_FACTOR, new_ef)

    if quality >= PASSING_QUALITY:
        new_repetition = repetition + 1
        if new_repetition == 1:
            new_interval = DEFAULT_INTERVAL_DAYS
        elif new_repetition == 2:
            new_interval = SECOND_INTERVAL_DAYS
        else:
            new_interval = max(DEFAULT_INTERVAL_DAYS, round(interval * new_ef))
    else:
        # Lapse - back to the front of the queue, keep the lowered EF
        new_interval = DEFAULT_INTERVAL_DAYS
        new_repetition = 0

    return SM2Result(
        easiness_factor=new_ef,
        interval=new_interval,
        repetition=new_repetition,
        is_learned=new_repetition >= LEARNED_REPETITIONS and quality >= PASSING_QUALITY,
    )


def next_review_date(
    now: datetime,
    interval: int,
    max_interval_days: int = MAX_INTERVAL_DAYS,
) -> datetime:
    """Return when a word becomes due again, never more than max_interval_days out."""
    days = max(DEFAULT_INTERVAL_DAYS, min(interval, max_interval_days))
    return now + timedelta(days=days)
