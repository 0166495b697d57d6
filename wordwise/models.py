"""Plain records exchanged between the scheduling core and its collaborators."""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Hashable

from wordwise.constants import (
    DEFAULT_EASINESS_FACTOR,
    DEFAULT_INTERVAL_DAYS,
    TIER_NEW,
)


class QualityGrade(IntEnum):
    """SM-2 recall quality on the 0-5 scale.

    Grades below DIFFICULT are lapses and reset the review schedule.
    """

    BLACKOUT = 0  # Complete blackout, repeated misses
    INCORRECT = 1  # Incorrect, correct answer recognised once shown
    INCORRECT_EASY = 2  # Incorrect, but the answer seemed easy to recall
    DIFFICULT = 3  # Correct, recalled with serious difficulty
    HESITANT = 4  # Correct after a hesitation
    PERFECT = 5  # Perfect, no hesitation


@dataclass
class Word:
    """A word in a section. Everything except id is display payload."""

    id: Hashable
    text: str = ""
    translation: str = ""
    pronunciation: str | None = None
    section_id: Hashable | None = None


@dataclass
class MemoryState:
    """SM-2 spaced repetition state for one learner and one word."""

    learner_id: Hashable | None = None
    word_id: Hashable | None = None

    # SM-2 parameters
    easiness_factor: float = DEFAULT_EASINESS_FACTOR
    interval: int = DEFAULT_INTERVAL_DAYS
    repetition: int = 0
    next_review_date: datetime | None = None

    # Set by the scheduler once the word is judged mastered
    is_manually_learned: bool = False
    # Set by the learner from outside the scheduler; never overwritten here
    user_marked_learned: bool = False

    quality: int | None = None  # Last grade, kept for diagnostics

    # Answer history
    times_seen: int = 0
    correct_count: int = 0
    incorrect_count: int = 0
    consecutive_correct: int = 0
    last_seen: datetime | None = None

    @classmethod
    def new(
        cls,
        now: datetime,
        learner_id: Hashable | None = None,
        word_id: Hashable | None = None,
    ) -> "MemoryState":
        """Default state for a word the learner has never answered."""
        return cls(learner_id=learner_id, word_id=word_id, next_review_date=now)

    @property
    def is_learned(self) -> bool:
        """Whether the scheduler considers this word mastered."""
        return self.is_manually_learned


@dataclass
class SessionWord:
    """A word selected for a study session, with the state to present."""

    word: Word
    state: MemoryState
    tier: str  # due, new, fallback

    @property
    def word_id(self) -> Hashable:
        """Id of the selected word."""
        return self.word.id

    @property
    def is_new(self) -> bool:
        """True when state is a presentation-only default that was never persisted."""
        return self.tier == TIER_NEW


@dataclass
class SM2Result:
    """Result of an SM-2 calculation."""

    easiness_factor: float
    interval: int
    repetition: int
    is_learned: bool


@dataclass
class Answer:
    """Telemetry for a single answer to a word."""

    is_correct: bool
    response_time_ms: int | None = None
    attempts_this_session: int = 1


@dataclass
class ReviewOutcome:
    """Next memory state after an answer, ready for the persistence layer."""

    state: MemoryState
    quality: QualityGrade
    newly_learned: bool = False  # Crossed into the learned state on this answer
    lapsed: bool = False


@dataclass
class SectionSummary:
    """Per-section progress counts for one learner."""

    total_words: int = 0
    learned_words: int = 0
    due_words: int = 0
    new_words: int = 0

    @property
    def is_complete(self) -> bool:
        return self.total_words > 0 and self.learned_words == self.total_words
