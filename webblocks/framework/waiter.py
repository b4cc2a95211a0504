# ================================================================================
# Waiter Module
# ================================================================================
#
# Bounded polling used by every browser-facing operation of a page object.
#
# Key Features:
#   - Fixed polling interval with a hard deadline
#   - Transient failures (assertions, missing elements, driver errors) retried
#   - The last observed failure is surfaced unchanged on timeout
#   - Defaults read from configuration (loader.timeout, loader.polling_interval)
#
# Usage:
#   loader = SlowLoader(WaitConfig(timeout=5.0))
#   text = loader.load(lambda: element.text_content(), description="title text")
#
# ================================================================================

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from typing import Callable, Optional, Tuple, Type, TypeVar

from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from webblocks.common import get_config
from webblocks.framework.exceptions import ElementNotFoundError


T = TypeVar("T")

DEFAULT_TIMEOUT = 5.0
DEFAULT_POLLING_INTERVAL = 0.25

# Failures meaning "not ready yet"
RETRYABLE_EXCEPTIONS: Tuple[Type[BaseException], ...] = (
    AssertionError,
    ElementNotFoundError,
    PlaywrightError,
)


@dataclass(frozen=True)
class WaitConfig:
    """
    Configuration for wait operations.

    Attributes:
        timeout: Total time in seconds before the last failure is raised
        polling_interval: Pause in seconds between two attempts
        ignored_exceptions: Exception types treated as "retry later"
    """
    timeout: float = DEFAULT_TIMEOUT
    polling_interval: float = DEFAULT_POLLING_INTERVAL
    ignored_exceptions: Tuple[Type[BaseException], ...] = RETRYABLE_EXCEPTIONS

    def __post_init__(self) -> None:
        if self.timeout < 0:
            raise ValueError(f"timeout must be >= 0, got {self.timeout}")
        if self.polling_interval <= 0:
            raise ValueError(
                f"polling_interval must be > 0, got {self.polling_interval}"
            )

    @classmethod
    def from_config(cls) -> "WaitConfig":
        """Build the global default from ``loader.*`` configuration keys."""
        return cls(
            timeout=float(get_config("loader.timeout", DEFAULT_TIMEOUT)),
            polling_interval=float(
                get_config("loader.polling_interval", DEFAULT_POLLING_INTERVAL)
            ),
        )

    def with_timeout(self, timeout: Optional[float]) -> "WaitConfig":
        if timeout is None:
            return self
        return replace(self, timeout=float(timeout))


class SlowLoader:
    """
    Retries an attempt until it succeeds or the deadline elapses.

    Only exceptions listed in ``WaitConfig.ignored_exceptions`` are retried;
    anything else propagates from the first attempt. When the deadline passes
    the last retried exception is raised as-is, so callers see the real cause
    (a failed assertion, a missing element) rather than a timeout wrapper.

    Example:
        >>> loader = SlowLoader(WaitConfig(timeout=2.0, polling_interval=0.1))
        >>> loader.load(lambda: page.query_selector("#ready") or fail())
    """

    def __init__(
        self,
        config: Optional[WaitConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config or WaitConfig.from_config()
        self._clock = clock
        self._sleep = sleep

    def load(self, attempt: Callable[[], T], description: str = "") -> T:
        deadline = self._clock() + self.config.timeout
        attempts = 0

        while True:
            attempts += 1
            try:
                return attempt()
            except self.config.ignored_exceptions as e:
                last_error = e

            remaining = deadline - self._clock()
            if remaining <= 0:
                logger.debug(
                    f"Gave up after {attempts} attempts ({self.config.timeout}s): "
                    f"{description}"
                )
                raise last_error

            logger.debug(
                f"Attempt {attempts} not ready: {description} "
                f"({type(last_error).__name__}: {last_error}). "
                f"Retrying in {self.config.polling_interval}s..."
            )
            self._sleep(min(self.config.polling_interval, remaining))


__all__ = [
    "WaitConfig",
    "SlowLoader",
    "RETRYABLE_EXCEPTIONS",
    "DEFAULT_TIMEOUT",
    "DEFAULT_POLLING_INTERVAL",
]
