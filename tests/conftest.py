"""Shared pytest fixtures for the Wordwise test suite."""

import pytest
from datetime import datetime, timedelta

from wordwise.config import Config
from wordwise.models import MemoryState, Word


@pytest.fixture
def now():
    """Fixed clock so scheduling is deterministic."""
    return datetime(2024, 3, 1, 12, 0, 0)


@pytest.fixture
def sample_word():
    """Sample word for testing."""
    return Word(
        id=1,
        text="שלום",
        translation="hello",
        pronunciation="shalom",
        section_id=10,
    )


@pytest.fixture
def make_words():
    """Factory for a pool of words with ids starting at `start`."""

    def _make(count: int, start: int = 1) -> list[Word]:
        return [
            Word(id=i, text=f"word-{i}", translation=f"translation-{i}", section_id=10)
            for i in range(start, start + count)
        ]

    return _make


@pytest.fixture
def due_state(now):
    """Factory for a stored state that became due an hour ago."""

    def _make(word_id, learner_id=1, **overrides) -> MemoryState:
        fields = dict(
            learner_id=learner_id,
            word_id=word_id,
            interval=1,
            repetition=1,
            times_seen=1,
            next_review_date=now - timedelta(hours=1),
        )
        fields.update(overrides)
        return MemoryState(**fields)

    return _make


@pytest.fixture
def future_state(now):
    """Factory for a stored state that is not due for another few days."""

    def _make(word_id, learner_id=1, **overrides) -> MemoryState:
        fields = dict(
            learner_id=learner_id,
            word_id=word_id,
            interval=6,
            repetition=2,
            times_seen=2,
            next_review_date=now + timedelta(days=3),
        )
        fields.update(overrides)
        return MemoryState(**fields)

    return _make


@pytest.fixture
def config():
    """Test configuration with default thresholds."""
    return Config(
        session_limit=10,
        fast_response_ms=3000,
        slow_response_ms=8000,
        max_interval_days=365,
        log_level="DEBUG",
    )
