"""
Waiting utilities for test synchronization.
"""

import logging
import math
import threading
import time
from collections.abc import Callable
from typing import Any, TypeVar

from monero_harness.errors import Cancelled, WaitTimeout

logger = logging.getLogger(__name__)


def wait_until(
    fn: Callable[[], Any],
    error_with: str = "Timed out",
    timeout: int = 30,
    step: float = 0.5,
):
    """
    Wait until a function call returns truth value, given time step, and timeout.
    Exceptions raised by `fn` are logged and treated as "not yet", which suits
    services that are still starting up.
    """
    for _ in range(math.ceil(timeout / step)):
        try:
            if fn():
                return
        except Exception as e:
            ety = type(e)
            logger.warning(f"caught exception {ety}, will still wait for timeout: {e}")
        time.sleep(step)
    raise AssertionError(error_with)


T = TypeVar("T")


def poll_until(
    fn: Callable[[], T],
    predicate: Callable[[T], bool],
    *,
    step: float,
    timeout: float | None = None,
    cancel: threading.Event | None = None,
    error_with: str = "Timed out",
    timeout_error: type[WaitTimeout] = WaitTimeout,
) -> T:
    """
    Call `fn` every `step` seconds until `predicate` holds for its value.

    Unlike `wait_until`, errors raised by `fn` propagate. `timeout=None`
    polls forever. Setting `cancel` wakes any pending sleep and makes the
    next check raise `Cancelled`.

    Raises:
        WaitTimeout: (or `timeout_error`) once `timeout` seconds have passed
        Cancelled: If `cancel` gets set
    """
    deadline = None if timeout is None else time.monotonic() + timeout

    while True:
        if cancel is not None and cancel.is_set():
            raise Cancelled(f"Cancelled while waiting: {error_with}")

        value = fn()
        if predicate(value):
            return value

        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise timeout_error(f"{error_with} (last value: {value!r})")
            delay = min(step, remaining)
        else:
            delay = step

        if cancel is not None:
            cancel.wait(delay)
        else:
            time.sleep(delay)
