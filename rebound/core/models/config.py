from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BackoffConfig:
    """
    Static configuration of a backoff strategy.

    The configuration is immutable once built; the mutable part of a backoff
    (its attempt counter) lives in the strategy itself.
    """
    minimum: float
    """
    Smallest delay (in seconds), returned for the first attempt. Must be >= 0.
    """

    maximum: float
    """
    Largest delay (in seconds) ever returned. Caps exponential growth.
    """

    factor: float = 2.0
    """
    Multiplicative growth rate applied per attempt, typically > 1.
    """

    max_attempts: int = 0
    """
    Number of attempts allowed before `MaxAttemptsExceeded` is raised.
    Zero means unlimited.
    """
