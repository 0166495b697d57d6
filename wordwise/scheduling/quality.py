"""Map raw answer telemetry onto the SM-2 quality scale."""

import logging

from wordwise.constants import FAST_RESPONSE_MS, PASSING_QUALITY, SLOW_RESPONSE_MS
from wordwise.models import QualityGrade

logger = logging.getLogger(__name__)


def map_quality(
    is_correct: bool,
    response_time_ms: int | float | None = None,
    attempts_this_session: int = 1,
    fast_threshold_ms: int = FAST_RESPONSE_MS,
    slow_threshold_ms: int = SLOW_RESPONSE_MS,
) -> QualityGrade:
    """
    Convert correctness, latency and attempt count to an SM-2 quality grade.

    Args:
        is_correct: Whether the answer was correct
        response_time_ms: Time to answer in milliseconds. Missing or negative
            values are treated as an instant answer.
        attempts_this_session: How many times this word has been attempted in
            the current session, including this answer (clamped to >= 1)
        fast_threshold_ms: Correct answers faster than this are perfect (5)
        slow_threshold_ms: Correct answers faster than this show hesitation (4);
            anything slower was recalled with difficulty (3)

    Returns:
        QualityGrade 0-5. Incorrect answers never score above 2.
    """
    if response_time_ms is None or response_time_ms < 0:
        if response_time_ms is not None:
            logger.debug(f"Clamping negative response time {response_time_ms}ms to 0")
        response_time_ms = 0
    if attempts_this_session < 1:
        logger.debug(f"Clamping attempts {attempts_this_session} to 1")
        attempts_this_session = 1

    if not is_correct:
        # First miss still shows some recognition; repeated misses are a blackout
        return QualityGrade(max(0, 2 - attempts_this_session))

    if response_time_ms < fast_threshold_ms:
        grade = QualityGrade.PERFECT
    elif response_time_ms < slow_threshold_ms:
        grade = QualityGrade.HESITANT
    else:
        grade = QualityGrade.DIFFICULT

    if attempts_this_session > 1:
        # Correct only after an earlier miss this session: never top marks
        grade = QualityGrade(max(PASSING_QUALITY, grade - 1))

    return grade
