"""Tests for session word selection."""

import copy

import pytest

from wordwise.models import MemoryState, SessionWord, Word
from wordwise.scheduling.selector import (
    select_due_words,
    select_fallback_words,
    select_new_words,
    select_session,
)


class TestSelectSessionEdgeCases:
    """Degenerate inputs give empty sessions, not errors."""

    @pytest.mark.parametrize("limit", [1, 10, 100])
    def test_empty_pool(self, now, limit):
        """An empty section returns an empty session."""
        assert select_session([], {}, limit, now) == []

    @pytest.mark.parametrize("limit", [0, -1, -50])
    def test_non_positive_limit(self, now, make_words, limit):
        """A limit of zero or less returns an empty session."""
        assert select_session(make_words(5), {}, limit, now) == []

    def test_duplicate_pool_entries_selected_once(self, now, sample_word):
        """Repeated word ids in the pool are presented once."""
        session = select_session([sample_word, sample_word, sample_word], {}, 10, now)
        assert [sw.word_id for sw in session] == [sample_word.id]


class TestSelectSessionTiers:
    """Tests for tier ordering and capacity threading."""

    def test_due_then_new_fills_limit(self, now, make_words, due_state):
        """3 due + 20 new with limit 10 gives 3 due followed by 7 new."""
        due_words = make_words(3, start=1)
        new_words = make_words(20, start=100)
        states = {word.id: due_state(word.id) for word in due_words}

        # Shuffle the pool order so tier ordering is what puts due first
        pool = new_words[:5] + due_words + new_words[5:]
        session = select_session(pool, states, 10, now, learner_id=1)

        assert len(session) == 10
        assert [sw.tier for sw in session] == ["due"] * 3 + ["new"] * 7
        assert {sw.word_id for sw in session[:3]} == {1, 2, 3}

    def test_due_tier_respects_limit(self, now, make_words, due_state):
        """More due words than capacity: only due words, in pool order."""
        words = make_words(8)
        states = {word.id: due_state(word.id) for word in words}
        session = select_session(words + make_words(5, start=50), states, 4, now)
        assert [sw.word_id for sw in session] == [1, 2, 3, 4]
        assert all(sw.tier == "due" for sw in session)

    def test_due_includes_exact_review_time(self, now, make_words, due_state):
        """A word whose review date is exactly now is due."""
        word = make_words(1)[0]
        states = {word.id: due_state(word.id, next_review_date=now)}
        session = select_session([word], states, 5, now)
        assert session[0].tier == "due"

    def test_fallback_fills_remaining(self, now, make_words, due_state, future_state):
        """Not-yet-due words fill whatever due and new words leave."""
        words = make_words(6)
        states = {
            1: due_state(1),
            2: future_state(2, times_seen=5),
            3: future_state(3, times_seen=1),
            4: future_state(4, times_seen=3),
        }
        session = select_session(words, states, 10, now)

        assert [(sw.word_id, sw.tier) for sw in session] == [
            (1, "due"),
            (5, "new"),
            (6, "new"),
            (3, "fallback"),
            (4, "fallback"),
            (2, "fallback"),
        ]

    def test_fallback_ties_keep_pool_order(self, now, make_words, future_state):
        """Equal review counts keep their pool order."""
        words = make_words(4)
        states = {word.id: future_state(word.id, times_seen=2) for word in words}
        session = select_session(words, states, 3, now)
        assert [sw.word_id for sw in session] == [1, 2, 3]

    def test_fallback_not_used_when_full(self, now, make_words, future_state):
        """Fallback words are skipped once new words fill the session."""
        words = make_words(2) + make_words(5, start=10)
        states = {1: future_state(1), 2: future_state(2)}
        session = select_session(words, states, 5, now)
        assert all(sw.tier == "new" for sw in session)


class TestSelectSessionInvariants:
    """Properties that hold for any input."""

    @pytest.mark.parametrize("limit", [1, 3, 7, 12, 40])
    def test_never_exceeds_limit_or_repeats(self, now, make_words, due_state, future_state, limit):
        words = make_words(30)
        states = {}
        for word in words[:10]:
            states[word.id] = due_state(word.id)
        for word in words[10:20]:
            states[word.id] = future_state(word.id, times_seen=word.id % 4)

        session = select_session(words + words[:5], states, limit, now)
        ids = [sw.word_id for sw in session]

        assert len(session) <= limit
        assert len(ids) == len(set(ids))
        assert len(session) == min(limit, 30)

    def test_does_not_mutate_states(self, now, make_words, due_state, future_state):
        """Selection is read-only."""
        words = make_words(6)
        states = {1: due_state(1), 2: future_state(2)}
        snapshot = copy.deepcopy(states)

        select_session(words, states, 10, now)

        assert states == snapshot
        assert set(states) == {1, 2}

    def test_idempotent(self, now, make_words, due_state, future_state):
        """Same snapshot, same session."""
        words = make_words(12)
        states = {1: due_state(1), 2: future_state(2), 7: due_state(7)}
        first = select_session(words, states, 6, now)
        second = select_session(words, states, 6, now)
        assert first == second


class TestNewWordDefaults:
    """Never-seen words get presentation-only default state."""

    def test_default_state(self, now, sample_word):
        session = select_session([sample_word], {}, 5, now, learner_id=42)
        state = session[0].state

        assert session[0].is_new is True
        assert state.interval == 1
        assert state.easiness_factor == 2.5
        assert state.repetition == 0
        assert state.next_review_date == now
        assert state.learner_id == 42
        assert state.word_id == sample_word.id

    def test_new_states_not_added_to_mapping(self, now, make_words):
        """Defaults are not written back into the caller's states."""
        states: dict = {}
        select_session(make_words(3), states, 5, now)
        assert states == {}

    def test_stored_words_are_not_new(self, now, make_words, due_state):
        word = make_words(1)[0]
        stored = due_state(word.id)
        session = select_session([word], {word.id: stored}, 5, now)
        assert session[0].is_new is False
        assert session[0].state is stored


class TestLearnerScoping:
    """States recorded for another learner are ignored."""

    def test_other_learner_state_treated_as_new(self, now, make_words, due_state):
        word = make_words(1)[0]
        states = {word.id: due_state(word.id, learner_id=2)}
        session = select_session([word], states, 5, now, learner_id=1)
        assert session[0].tier == "new"

    def test_unkeyed_state_is_used(self, now, make_words, due_state):
        """States without a learner id are trusted as the caller's."""
        word = make_words(1)[0]
        states = {word.id: due_state(word.id, learner_id=None)}
        session = select_session([word], states, 5, now, learner_id=1)
        assert session[0].tier == "due"


class TestTierHelpers:
    """Tests for the individual tier selectors."""

    def test_select_due_words(self, now, make_words, due_state, future_state):
        words = make_words(4)
        states = {1: due_state(1), 2: future_state(2), 3: due_state(3)}
        due = select_due_words(words, states, now, limit=10)
        assert [sw.word_id for sw in due] == [1, 3]

    def test_select_new_words(self, now, make_words, due_state):
        words = make_words(4)
        new = select_new_words(words, {1: due_state(1)}, now, limit=2)
        assert [sw.word_id for sw in new] == [2, 3]
        assert all(isinstance(sw, SessionWord) for sw in new)

    def test_select_fallback_words_excludes(self, make_words, future_state):
        words = make_words(3)
        states = {word.id: future_state(word.id, times_seen=word.id) for word in words}
        fallback = select_fallback_words(words, states, limit=5, exclude={1})
        assert [sw.word_id for sw in fallback] == [2, 3]

    def test_state_without_review_date_is_due(self, now):
        """A stored state that was never scheduled is treated as due."""
        word = Word(id="abc", text="gato", translation="cat")
        states = {"abc": MemoryState(word_id="abc", times_seen=1)}
        session = select_session([word], states, 1, now)
        assert session[0].tier == "due"
