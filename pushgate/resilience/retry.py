"""
Bounded retry for transport operations.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..config import DEFAULT_RETRIES
from ..errors import ConfigurationError, FatalCertificateError
from .classifier import ErrorClass, classify_error

logger = logging.getLogger(__name__)


@dataclass
class RetryConfig:
    """Retry configuration. max_attempts counts the first try."""
    max_attempts: int = DEFAULT_RETRIES

    def __post_init__(self):
        if isinstance(self.max_attempts, bool) or not isinstance(self.max_attempts, int) \
                or self.max_attempts < 1:
            raise ConfigurationError("max_attempts must be a positive integer",
                                     config_key="max_attempts", config_value=self.max_attempts)


class Retry:
    """
    Retry handler driven by the error classifier.

    Transient failures invoke ``on_transient(error, attempt, budget)``
    (used to tear down the session) and are retried immediately until the attempt budget is
    spent, after which the last error is re-raised unchanged. Fatal
    failures become FatalCertificateError on first sight. Anything
    unclassified propagates untouched.
    """

    def __init__(self, config: RetryConfig,
                 on_transient: Optional[Callable[[Exception, int, int], None]] = None):
        self.config = config
        self.on_transient = on_transient
        self._attempt_count = 0
        self._last_error_class: Optional[ErrorClass] = None

    @property
    def attempts(self) -> int:
        """Attempts made by the most recent execution."""
        return self._attempt_count

    @property
    def last_error_class(self) -> Optional[ErrorClass]:
        """Classification of the failure that ended the most recent execution."""
        return self._last_error_class

    def execute_sync(self, func: Callable, *args, **kwargs) -> Any:
        """Execute function with retry logic (synchronous)."""
        self._attempt_count = 0
        self._last_error_class = None

        for attempt in range(1, self.config.max_attempts + 1):
            self._attempt_count = attempt
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                error_class = classify_error(e)
                self._last_error_class = error_class

                if error_class is ErrorClass.FATAL:
                    logger.error(f"Client certificate rejected as expired: {e}")
                    raise FatalCertificateError(f"Client certificate expired: {e}", cause=e) from e

                if error_class is ErrorClass.UNCLASSIFIED:
                    logger.debug(f"Non-retryable exception: {e!r}")
                    raise

                if self.on_transient:
                    self.on_transient(e, attempt, self.config.max_attempts)

                if attempt == self.config.max_attempts:
                    logger.error(f"Operation failed after {attempt} attempt(s): {e!r}")
                    raise

                logger.warning(f"Attempt {attempt} failed: {e!r}. Retrying")
                continue

            self._last_error_class = None
            if attempt > 1:
                logger.info(f"Operation succeeded on attempt {attempt}")
            return result
