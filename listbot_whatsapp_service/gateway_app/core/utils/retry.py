"""
Fixed-delay retry for the process entry point.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPolicy:
    """
    Retry `fn` after `delay_seconds` whenever it raises.

    max_attempts=None retries forever. Exceptions listed in `fatal`
    are re-raised immediately.
    """

    def __init__(
        self,
        delay_seconds: float = 5.0,
        max_attempts: Optional[int] = None,
        fatal: Tuple[Type[BaseException], ...] = (),
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be >= 1 or None")
        self.delay_seconds = delay_seconds
        self.max_attempts = max_attempts
        self.fatal = fatal
        self._sleep = sleep

    def run(self, fn: Callable[[], T]) -> T:
        attempt = 0
        while True:
            attempt += 1
            try:
                return fn()
            except self.fatal:
                raise
            except Exception:
                if self.max_attempts is not None and attempt >= self.max_attempts:
                    logger.exception("Giving up after %s attempts", attempt)
                    raise
                logger.exception(
                    "Attempt %s failed, retrying in %s seconds...", attempt, self.delay_seconds
                )
                self._sleep(self.delay_seconds)
