from typing import Protocol


class Backoff(Protocol):
    """
    Interface that any backoff strategy must implement.

    Delivery helpers only rely on these two operations, so a retry loop can
    be written against "a backoff" without knowing which variant it uses.
    """

    def next_attempt(self) -> float:
        """
        Return the delay (in seconds) to wait before the next retry.

        Raises `MaxAttemptsExceeded` when the attempt cap has been reached.
        """

    def reset(self) -> None:
        """Forget previous attempts so the next delay is the minimum again."""
