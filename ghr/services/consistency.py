"""Read-after-write polling.

GitHub does not always reflect a release or ref mutation on the very next
read. Instead of sleeping a fixed amount, the reconciler polls a check until
it observes the mutation, backing off linearly between attempts.
"""

from __future__ import annotations

from collections.abc import Callable
from time import sleep as _sleep

from ghr.services.timeouts import CONSISTENCY_POLL_ATTEMPTS, CONSISTENCY_POLL_DELAY_SECONDS

__all__ = ["Sleeper", "wait_until"]

Sleeper = Callable[[float], None]


def wait_until(
    check: Callable[[], bool],
    *,
    attempts: int = CONSISTENCY_POLL_ATTEMPTS,
    delay: float = CONSISTENCY_POLL_DELAY_SECONDS,
    sleep: Sleeper = _sleep,
) -> bool:
    """Call ``check`` until it returns True.

    The first check runs immediately; attempt ``n`` is preceded by a pause of
    ``delay * n`` seconds.

    Returns:
        True once the check succeeded, False when attempts ran out.
    """
    total = max(1, attempts)
    for attempt in range(total):
        if attempt:
            sleep(delay * attempt)
        if check():
            return True
    return False
