"""Shared constants for the Wordwise scheduling core."""

# SM-2 easiness factor bounds
DEFAULT_EASINESS_FACTOR = 2.5
MIN_EASINESS_FACTOR = 1.3

# Interval schedule (days) for the first two successful repetitions
DEFAULT_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6
MAX_INTERVAL_DAYS = 365  # Review dates are never scheduled more than a year out

# Quality grades at or above this are a successful recall, below are a lapse
PASSING_QUALITY = 3
MIN_QUALITY = 0
MAX_QUALITY = 5

# Consecutive non-lapsing reviews before a word counts as learned
LEARNED_REPETITIONS = 2

# Response latency thresholds for correct answers (milliseconds)
FAST_RESPONSE_MS = 3000  # Under this: perfect recall
SLOW_RESPONSE_MS = 8000  # Under this: hesitation; otherwise difficulty

# Session defaults
DEFAULT_SESSION_LIMIT = 10
DEFAULT_REVIEW_RANK_LIMIT = 20

# Selection tiers, in the order they are filled
TIER_DUE = "due"
TIER_NEW = "new"
TIER_FALLBACK = "fallback"

# Words per day that count as a full day's study
DEFAULT_DAILY_TARGET = 10
