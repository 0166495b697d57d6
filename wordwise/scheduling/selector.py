"""Session word selection.

A session is filled from three tiers, each taking whatever capacity the
previous one left:

1. Due: words the learner has seen whose review date has passed
2. New: words the learner has never answered
3. Fallback: seen but not yet due, least-practised first

Selection is read-only. States for new words are presentation defaults and
are only persisted once the learner answers.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Hashable

from wordwise.constants import TIER_DUE, TIER_FALLBACK, TIER_NEW
from wordwise.models import MemoryState, SessionWord, Word
from wordwise.scheduling.progress import is_due

logger = logging.getLogger(__name__)


def _unique_words(words: Iterable[Word]) -> list[Word]:
    """Drop repeated word ids, keeping the first occurrence."""
    seen: set[Hashable] = set()
    unique = []
    for word in words:
        if word.id in seen:
            continue
        seen.add(word.id)
        unique.append(word)
    return unique


def _learner_state(
    memory_states: Mapping[Hashable, MemoryState],
    word_id: Hashable,
    learner_id: Hashable | None,
) -> MemoryState | None:
    """Look up a word's state, ignoring states recorded for another learner."""
    state = memory_states.get(word_id)
    if state is None:
        return None
    if learner_id is not None and state.learner_id is not None and state.learner_id != learner_id:
        return None
    return state


def select_due_words(
    words: list[Word],
    memory_states: Mapping[Hashable, MemoryState],
    now: datetime,
    limit: int,
    learner_id: Hashable | None = None,
) -> list[SessionWord]:
    """Words with stored state whose review date has passed, in pool order."""
    selected = []
    for word in words:
        if len(selected) >= limit:
            break
        state = _learner_state(memory_states, word.id, learner_id)
        if state is not None and is_due(state, now):
            selected.append(SessionWord(word=word, state=state, tier=TIER_DUE))
    return selected


def select_new_words(
    words: list[Word],
    memory_states: Mapping[Hashable, MemoryState],
    now: datetime,
    limit: int,
    learner_id: Hashable | None = None,
) -> list[SessionWord]:
    """Words with no stored state, each given a fresh default state."""
    selected = []
    for word in words:
        if len(selected) >= limit:
            break
        if _learner_state(memory_states, word.id, learner_id) is None:
            state = MemoryState.new(now, learner_id=learner_id, word_id=word.id)
            selected.append(SessionWord(word=word, state=state, tier=TIER_NEW))
    return selected


def select_fallback_words(
    words: list[Word],
    memory_states: Mapping[Hashable, MemoryState],
    limit: int,
    exclude: set[Hashable],
    learner_id: Hashable | None = None,
) -> list[SessionWord]:
    """Seen words not already chosen, fewest reviews first.

    Ties keep pool order (sorted() is stable).
    """
    candidates = []
    for word in words:
        if word.id in exclude:
            continue
        state = _learner_state(memory_states, word.id, learner_id)
        if state is not None:
            candidates.append(SessionWord(word=word, state=state, tier=TIER_FALLBACK))

    candidates.sort(key=lambda sw: sw.state.times_seen)
    return candidates[:limit]


def select_session(
    words: Iterable[Word],
    memory_states: Mapping[Hashable, MemoryState],
    limit: int,
    now: datetime,
    learner_id: Hashable | None = None,
) -> list[SessionWord]:
    """Select up to `limit` words for a study session.

    Args:
        words: The section's word pool
        memory_states: The learner's stored states keyed by word id. Words
            missing from the mapping have never been answered.
        limit: Maximum session size
        now: Current time, injected so selection is deterministic
        learner_id: Optional; states belonging to other learners are ignored

    Returns:
        Due words, then new words, then not-yet-due fallback words. Never
        longer than limit and never repeats a word id.
    """
    if limit <= 0:
        return []

    pool = _unique_words(words)
    if not pool:
        return []

    # 1. Due for review
    session = select_due_words(pool, memory_states, now, limit, learner_id)

    # 2. Never seen
    remaining = limit - len(session)
    new_count = 0
    if remaining > 0:
        new_words = select_new_words(pool, memory_states, now, remaining, learner_id)
        new_count = len(new_words)
        session.extend(new_words)

    # 3. Seen but not yet due
    remaining = limit - len(session)
    fallback_count = 0
    if remaining > 0:
        chosen = {sw.word_id for sw in session}
        fallback_words = select_fallback_words(
            pool, memory_states, remaining, chosen, learner_id
        )
        fallback_count = len(fallback_words)
        session.extend(fallback_words)

    logger.debug(
        f"Session for learner {learner_id}: {len(session) - new_count - fallback_count} due, "
        f"{new_count} new, {fallback_count} fallback (limit {limit}, pool {len(pool)})"
    )
    return session
