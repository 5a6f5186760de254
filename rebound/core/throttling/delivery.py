import asyncio
import concurrent.futures
import logging
import threading
import time

from rebound.core.errors import MaxAttemptsExceeded
from rebound.core.ports.backoff import Backoff

logger = logging.getLogger("core.throttling.delivery")


def _next_attempt(backoff: Backoff) -> float:
    try:
        delay = backoff.next_attempt()
    except MaxAttemptsExceeded as ex:
        logger.warning(f"Backoff exhausted: {ex}")
        raise

    logger.debug(f"Backing off for {delay:.3f}s")
    return delay


def wait(backoff: Backoff) -> None:
    """
    Block the calling thread for the next backoff delay.

    If the backoff is exhausted, `MaxAttemptsExceeded` is raised right away
    and nothing is slept. Only the calling thread is suspended; the sleep
    cannot be interrupted once started.
    """
    delay = _next_attempt(backoff)
    # jittered delays can drop below zero when the baseline is under minimum
    time.sleep(max(delay, 0.0))


async def sleep(backoff: Backoff) -> None:
    """
    Suspend the calling task for the next backoff delay.

    This is the cooperative counterpart of `wait()`: other tasks of the
    event loop keep running while the caller backs off.
    """
    delay = _next_attempt(backoff)
    await asyncio.sleep(delay)


def after(
    backoff: Backoff,
    loop: asyncio.AbstractEventLoop | None = None,
) -> asyncio.Future[None]:
    """
    Return a future resolved once the next backoff delay has elapsed.

    The caller does not block: the returned future can be awaited alongside
    other events, for instance with `asyncio.wait(..., return_when=FIRST_COMPLETED)`.

    - on success, a timer resolves the future with `None` after the delay
    - if the backoff is exhausted, the future is returned already failed
      with `MaxAttemptsExceeded` and no timer is scheduled

    The future resolves at most once. Cancelling it also cancels the
    pending timer.
    """
    loop = loop or asyncio.get_running_loop()
    future: asyncio.Future[None] = loop.create_future()

    try:
        delay = _next_attempt(backoff)
    except MaxAttemptsExceeded as ex:
        future.set_exception(ex)
        return future

    def resolve() -> None:
        if not future.done():
            future.set_result(None)

    handle = loop.call_later(delay, resolve)
    future.add_done_callback(lambda _: handle.cancel())
    return future


def schedule(backoff: Backoff) -> concurrent.futures.Future[None]:
    """
    Thread-based variant of `after()` for code that does not run an
    asyncio event loop.

    A daemon timer thread resolves the returned future once the delay has
    elapsed, so it can be combined with other futures through
    `concurrent.futures.wait()`. Cancelling the future stops the timer.
    """
    future: concurrent.futures.Future[None] = concurrent.futures.Future()

    try:
        delay = _next_attempt(backoff)
    except MaxAttemptsExceeded as ex:
        future.set_exception(ex)
        return future

    def resolve() -> None:
        # set_running_or_notify_cancel() is False when the caller cancelled
        if future.set_running_or_notify_cancel():
            future.set_result(None)

    timer = threading.Timer(delay, resolve)
    timer.daemon = True
    future.add_done_callback(lambda _: timer.cancel())
    timer.start()
    return future
