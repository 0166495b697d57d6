"""Configuration management for Wordwise."""

# Scheduling knobs a deployment may want to tune without code changes.
# The scheduling functions take these as keyword arguments; Config is how
# collaborators load them from the environment.

from dataclasses import dataclass
import logging
import os

from dotenv import load_dotenv

from wordwise.constants import (
    DEFAULT_DAILY_TARGET,
    DEFAULT_REVIEW_RANK_LIMIT,
    DEFAULT_SESSION_LIMIT,
    FAST_RESPONSE_MS,
    MAX_INTERVAL_DAYS,
    SLOW_RESPONSE_MS,
)


@dataclass
class Config:
    """Scheduler configuration loaded from environment variables."""

    # Session selection
    session_limit: int = DEFAULT_SESSION_LIMIT
    review_rank_limit: int = DEFAULT_REVIEW_RANK_LIMIT

    # Progress reporting
    daily_target: int = DEFAULT_DAILY_TARGET

    # Quality mapping
    fast_response_ms: int = FAST_RESPONSE_MS
    slow_response_ms: int = SLOW_RESPONSE_MS

    # Review dates
    max_interval_days: int = MAX_INTERVAL_DAYS

    # Logging
    log_level: str = "INFO"

    @staticmethod
    def _safe_int(value: str, default: int = 0) -> int:
        """Safely parse an integer, returning default if invalid."""
        try:
            return int(value)
        except (ValueError, TypeError):
            return default

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "Config":
        """Load configuration from environment variables."""
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        return cls(
            session_limit=cls._safe_int(
                os.environ.get("WORDWISE_SESSION_LIMIT"), DEFAULT_SESSION_LIMIT
            ),
            review_rank_limit=cls._safe_int(
                os.environ.get("WORDWISE_REVIEW_RANK_LIMIT"), DEFAULT_REVIEW_RANK_LIMIT
            ),
            fast_response_ms=cls._safe_int(
                os.environ.get("WORDWISE_FAST_RESPONSE_MS"), FAST_RESPONSE_MS
            ),
            slow_response_ms=cls._safe_int(
                os.environ.get("WORDWISE_SLOW_RESPONSE_MS"), SLOW_RESPONSE_MS
            ),
            max_interval_days=cls._safe_int(
                os.environ.get("WORDWISE_MAX_INTERVAL_DAYS"), MAX_INTERVAL_DAYS
            ),
            daily_target=cls._safe_int(
                os.environ.get("WORDWISE_DAILY_TARGET"), DEFAULT_DAILY_TARGET
            ),
            log_level=os.environ.get("WORDWISE_LOG_LEVEL", "INFO").upper(),
        )

    def configure_logging(self) -> None:
        """Apply log_level to the root logger."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
