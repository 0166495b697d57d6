"""Progress reporting over a learner's memory states.

Due checks, review prioritisation, section completion and study streaks.
A section counts as complete only when every one of its words is learned,
which is what dashboard-style completion counts are built on.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Hashable

from wordwise.constants import (
    DEFAULT_DAILY_TARGET,
    DEFAULT_EASINESS_FACTOR,
    DEFAULT_REVIEW_RANK_LIMIT,
)
from wordwise.models import MemoryState, SectionSummary

SECONDS_PER_DAY = 24 * 60 * 60


def is_due(state: MemoryState, now: datetime) -> bool:
    """Whether a word should be shown again at `now`."""
    return state.next_review_date is None or state.next_review_date <= now


def review_priority(state: MemoryState, now: datetime) -> float:
    """Urgency score for a due word; higher is more urgent.

    Overdue words come first, then harder words (low easiness factor), then
    words with few successful repetitions.
    """
    if state.next_review_date is None:
        days_past_due = 0.0
    else:
        days_past_due = max(0.0, (now - state.next_review_date).total_seconds() / SECONDS_PER_DAY)

    return (
        days_past_due * 10
        + (DEFAULT_EASINESS_FACTOR - state.easiness_factor) * 5
        + (5 - min(5, state.repetition)) * 2
    )


def rank_due_words(
    states: Iterable[MemoryState],
    now: datetime,
    max_words: int = DEFAULT_REVIEW_RANK_LIMIT,
) -> list[MemoryState]:
    """Return up to max_words due states, most urgent first."""
    if max_words <= 0:
        return []
    due = [state for state in states if is_due(state, now)]
    due.sort(key=lambda state: review_priority(state, now), reverse=True)
    return due[:max_words]


def is_section_complete(
    word_ids: Iterable[Hashable],
    memory_states: Mapping[Hashable, MemoryState],
) -> bool:
    """True iff the section has words and every one of them is learned."""
    word_ids = list(word_ids)
    if not word_ids:
        return False
    for word_id in word_ids:
        state = memory_states.get(word_id)
        if state is None or not state.is_learned:
            return False
    return True


def count_completed_sections(
    sections: Mapping[Hashable, Iterable[Hashable]],
    memory_states: Mapping[Hashable, MemoryState],
) -> int:
    """Count sections (section id -> word ids) that are fully learned."""
    return sum(
        1 for word_ids in sections.values() if is_section_complete(word_ids, memory_states)
    )


def summarize_section(
    word_ids: Iterable[Hashable],
    memory_states: Mapping[Hashable, MemoryState],
    now: datetime,
) -> SectionSummary:
    """Tally learned, due and never-seen words in a section."""
    summary = SectionSummary()
    for word_id in dict.fromkeys(word_ids):
        summary.total_words += 1
        state = memory_states.get(word_id)
        if state is None:
            summary.new_words += 1
            continue
        if state.is_learned:
            summary.learned_words += 1
        if is_due(state, now):
            summary.due_words += 1
    return summary


def session_accuracy(words_studied: int, correct_answers: int) -> int:
    """Percentage of correct answers in a session, rounded; 0 if nothing was studied."""
    if words_studied <= 0:
        return 0
    correct_answers = max(0, min(correct_answers, words_studied))
    return round(correct_answers / words_studied * 100)


def update_streak(
    current_streak: int,
    longest_streak: int,
    last_session_date: datetime | None,
    now: datetime,
) -> tuple[int, int]:
    """Return (current, longest) study streak after a session at `now`.

    Streaks count calendar days. A session on the day after the last one
    extends the streak, a second session on the same day leaves it alone,
    and anything after a gap (or a first ever session) starts over at 1.
    """
    current_streak = max(0, current_streak)
    longest_streak = max(0, longest_streak)

    if last_session_date is None:
        new_streak = 1
    else:
        days_since = (now.date() - last_session_date.date()).days
        if days_since == 0:
            new_streak = max(1, current_streak)
        elif days_since == 1:
            new_streak = current_streak + 1
        else:
            new_streak = 1

    return new_streak, max(longest_streak, new_streak)


def daily_progress(words_studied_today: int, daily_target: int = DEFAULT_DAILY_TARGET) -> float:
    """Percentage of today's target studied so far, capped at 100."""
    words_studied_today = max(0, words_studied_today)
    daily_target = max(1, daily_target)
    return min(words_studied_today / daily_target * 100, 100.0)
