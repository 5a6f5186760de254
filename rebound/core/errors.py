class MaxAttemptsExceeded(Exception):
    """
    Raised when a backoff with a positive attempt cap has reached it.

    This is a terminal signal for the caller's retry loop (give up, alert,
    escalate). It is not permanent for the backoff itself: calling
    `reset()` makes the instance usable again.
    """

    def __init__(self, max_attempts: int, attempts: int) -> None:
        super().__init__(
            f"maximum of attempts exceeded ({attempts}/{max_attempts})"
        )
        self.max_attempts = max_attempts
        self.attempts = attempts
