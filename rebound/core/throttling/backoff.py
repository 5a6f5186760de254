import random
import time
from dataclasses import dataclass, field

from rebound.core.errors import MaxAttemptsExceeded
from rebound.core.models.config import BackoffConfig
from rebound.core.throttling.duration import compute_delay


@dataclass
class SimpleBackoff:
    """
    A deterministic exponential backoff with an optional attempt cap.

    This utility is typically used to delay reconnection attempts to a
    faulty or slow resource, so that quick retries do not make things
    worse for a system that is already struggling. The delay grows as:

        next_delay = min(minimum * factor ** attempts, maximum)

    The instance is meant to be owned by a single retry loop: call
    `next_attempt()` after each failure and `reset()` after a success.
    It is not synchronized for concurrent use.
    """

    minimum: float = 0.1
    """Delay (in seconds) returned for the first attempt."""

    maximum: float = 60.0
    """Maximum allowed delay (in seconds)."""

    factor: float = 2.0
    """Multiplicative factor applied to the delay after each attempt."""

    max_attempts: int = 0
    """Attempts allowed before giving up. Zero means unlimited."""

    attempts: int = field(default=0, init=False)
    """Number of successful `next_attempt()` calls since the last reset."""

    @classmethod
    def from_config(cls, config: BackoffConfig) -> "SimpleBackoff":
        return cls(
            minimum=config.minimum,
            maximum=config.maximum,
            factor=config.factor,
            max_attempts=config.max_attempts,
        )

    @property
    def exhausted(self) -> bool:
        """Whether the next call to `next_attempt()` would fail."""
        return 0 < self.max_attempts <= self.attempts

    def next_attempt(self) -> float:
        """
        Compute and return the next backoff delay.

        Raises `MaxAttemptsExceeded` once `max_attempts` is reached. In that
        case the attempt counter is left untouched.
        """
        if self.exhausted:
            raise MaxAttemptsExceeded(self.max_attempts, self.attempts)

        delay = compute_delay(
            self.minimum, self.maximum, self.factor, self.attempts
        )
        self.attempts += 1
        return delay

    def reset(self) -> None:
        """
        Reset the attempt counter.

        This is typically called after a successful operation, so that
        the next retry (if needed) starts from the minimum delay again.
        """
        self.attempts = 0


class JitterBackoff:
    """
    An exponential backoff that randomises each delay around its
    deterministic value.

    Jitter spreads retries of contending clients over time and prevents
    them from hammering a recovering service in lockstep. Each delay is
    drawn uniformly from:

        [delay - minimum, delay + minimum)

    where `delay` is what a `SimpleBackoff` with the same configuration
    would return. Note that the first attempt therefore lands in
    `[0, 2 * minimum)`: unlike `SimpleBackoff`, the floor is zero and not
    `minimum`.

    Each instance owns its random generator, seeded from the current time
    unless one is injected.
    """

    def __init__(
        self,
        minimum: float = 0.1,
        maximum: float = 60.0,
        factor: float = 2.0,
        max_attempts: int = 0,
        rng: random.Random | None = None,
    ) -> None:
        self._backoff = SimpleBackoff(
            minimum=minimum,
            maximum=maximum,
            factor=factor,
            max_attempts=max_attempts,
        )
        self._rng = rng if rng is not None else random.Random(time.time_ns())

    @classmethod
    def from_config(
        cls,
        config: BackoffConfig,
        rng: random.Random | None = None,
    ) -> "JitterBackoff":
        return cls(
            minimum=config.minimum,
            maximum=config.maximum,
            factor=config.factor,
            max_attempts=config.max_attempts,
            rng=rng,
        )

    @property
    def minimum(self) -> float:
        return self._backoff.minimum

    @property
    def maximum(self) -> float:
        return self._backoff.maximum

    @property
    def factor(self) -> float:
        return self._backoff.factor

    @property
    def max_attempts(self) -> int:
        return self._backoff.max_attempts

    @property
    def attempts(self) -> int:
        return self._backoff.attempts

    @property
    def exhausted(self) -> bool:
        return self._backoff.exhausted

    def next_attempt(self) -> float:
        """
        Compute and return the next jittered delay.

        `MaxAttemptsExceeded` raised by the underlying backoff propagates
        unchanged; no random sample is drawn in that case.
        """
        delay = self._backoff.next_attempt()
        minimum = self._backoff.minimum
        return delay - minimum + self._rng.random() * 2 * minimum

    def reset(self) -> None:
        self._backoff.reset()

    def __repr__(self) -> str:
        return f"JitterBackoff({self._backoff!r})"
