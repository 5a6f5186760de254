def compute_delay(minimum: float, maximum: float, factor: float, attempts: int) -> float:
    """
    Return the backoff delay (in seconds) for a given attempt count.

    The delay grows exponentially and saturates at `maximum`:

        delay = min(minimum * factor ** attempts, maximum)

    The first attempt (attempts == 0) always yields `minimum`. Very large
    attempt counts saturate to `maximum` instead of overflowing.
    """
    try:
        delay = minimum * float(factor) ** attempts
    except OverflowError:
        # factor ** attempts no longer fits in a float
        return maximum if minimum > 0 else minimum

    return min(delay, maximum)
