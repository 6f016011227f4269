import time
from typing import Callable


def wait_until(
    ready: Callable[[], bool] | None,
    *,
    timeout_s: float,
    interval_s: float,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> bool:
    """
    Poll ``ready`` every ``interval_s`` until it returns True or ``timeout_s``
    elapses. Returns whether readiness was observed.

    Without a readiness query (``ready`` is None) or without a poll interval,
    this degrades to one fixed wait of ``timeout_s`` and returns True.
    """
    if ready is None or interval_s <= 0:
        if timeout_s > 0:
            sleep(timeout_s)
        return True if ready is None else ready()

    deadline = clock() + timeout_s
    while True:
        if ready():
            return True
        remaining = deadline - clock()
        if remaining <= 0:
            return False
        sleep(min(interval_s, remaining))
