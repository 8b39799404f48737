"""Retry configuration model."""

from pydantic import BaseModel, Field


class RetryConfig(BaseModel):
    """Configuration for retry logic.

    Attributes:
        max_attempts: Maximum number of attempts (first try included)
        initial_delay: Delay after the first failed attempt, in seconds
        backoff_multiplier: Exponential backoff multiplier
        jitter: Upper bound of the random delay added to each wait, in seconds
    """

    max_attempts: int = Field(5, gt=0, le=10)
    initial_delay: float = Field(1.0, ge=0.0)  # Allow 0 for tests
    backoff_multiplier: float = Field(2.0, ge=1.0, le=10.0)
    jitter: float = Field(1.0, ge=0.0)
