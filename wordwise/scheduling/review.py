"""Apply a learner's answer to a word's memory state.

Combines quality mapping, the SM-2 update and answer counters into the next
MemoryState record. Nothing here touches storage: the caller persists the
returned state, serialising writes per (learner, word).
"""

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime
from typing import Hashable

from wordwise.config import Config
from wordwise.constants import PASSING_QUALITY
from wordwise.models import Answer, MemoryState, ReviewOutcome
from wordwise.scheduling.quality import map_quality
from wordwise.scheduling.sm2 import next_review_date, update_sm2

logger = logging.getLogger(__name__)


def record_review(
    state: MemoryState | None,
    answer: Answer,
    now: datetime,
    learner_id: Hashable | None = None,
    word_id: Hashable | None = None,
    config: Config | None = None,
) -> ReviewOutcome:
    """Compute the memory state that results from answering a word.

    Args:
        state: Current stored state, or None if the learner never answered
            this word (a default state is created from learner_id/word_id)
        answer: Correctness, latency and attempt count for this answer
        now: Time of the answer
        learner_id: Key for a newly created state
        word_id: Key for a newly created state
        config: Thresholds and caps; defaults when omitted

    Returns:
        ReviewOutcome holding a new MemoryState. The input state is not
        modified.
    """
    config = config or Config()
    if state is None:
        state = MemoryState.new(now, learner_id=learner_id, word_id=word_id)

    quality = map_quality(
        answer.is_correct,
        answer.response_time_ms,
        answer.attempts_this_session,
        fast_threshold_ms=config.fast_response_ms,
        slow_threshold_ms=config.slow_response_ms,
    )
    result = update_sm2(quality, state.easiness_factor, state.interval, state.repetition)

    # incorrect_count counts misses since the last correct answer
    if answer.is_correct:
        counters = {
            "correct_count": state.correct_count + 1,
            "incorrect_count": 0,
            "consecutive_correct": state.consecutive_correct + 1,
        }
    else:
        counters = {
            "correct_count": state.correct_count,
            "incorrect_count": state.incorrect_count + 1,
            "consecutive_correct": 0,
        }

    updated = replace(
        state,
        easiness_factor=result.easiness_factor,
        interval=result.interval,
        repetition=result.repetition,
        next_review_date=next_review_date(now, result.interval, config.max_interval_days),
        is_manually_learned=result.is_learned,
        quality=int(quality),
        times_seen=state.times_seen + 1,
        last_seen=now,
        **counters,
    )

    lapsed = quality < PASSING_QUALITY
    newly_learned = result.is_learned and not state.is_manually_learned
    if lapsed and state.is_manually_learned:
        logger.info(f"Word {updated.word_id} lapsed for learner {updated.learner_id}")
    elif newly_learned:
        logger.info(f"Word {updated.word_id} learned by learner {updated.learner_id}")

    return ReviewOutcome(
        state=updated,
        quality=quality,
        newly_learned=newly_learned,
        lapsed=lapsed,
    )


def replay_reviews(
    state: MemoryState | None,
    answers: Iterable[tuple[datetime, Answer]],
    learner_id: Hashable | None = None,
    word_id: Hashable | None = None,
    config: Config | None = None,
) -> MemoryState | None:
    """Fold a history of timestamped answers into a final state.

    Returns the starting state unchanged (possibly None) when there are no
    answers.
    """
    for answered_at, answer in answers:
        state = record_review(
            state,
            answer,
            answered_at,
            learner_id=learner_id,
            word_id=word_id,
            config=config,
        ).state
    return state
