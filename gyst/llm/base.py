"""Base class and retry policy shared by both backends.

Every backend exposes one capability, ``send(prompt, count)``, returning the
raw texts in backend order. Subclasses only implement a single attempt in
``_request``; retry accounting lives in ``send`` and is local to each call.
"""

import logging
import random
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Callable, Optional

from gyst.llm.exceptions import LLMError
from gyst.llm.prompts import Prompt

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff with jitter.

    Attributes:
        max_attempts: Total attempts, including the first one.
        base_delay: Delay before the second attempt, in seconds.
        max_delay: Upper bound for the computed backoff.
        jitter: Random extra delay as a fraction of the backoff.
        max_retry_after: Upper bound for a server-provided retry-after hint.
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 8.0
    jitter: float = 0.25
    max_retry_after: float = 30.0

    def delay_for(self, attempt: int, retry_after: Optional[float] = None,
                  rng: Optional[random.Random] = None) -> float:
        """Seconds to wait after the given (1-based) failed attempt."""
        if retry_after is not None and retry_after >= 0:
            return min(retry_after, self.max_retry_after)
        backoff = min(self.base_delay * (2 ** (attempt - 1)), self.max_delay)
        return backoff + (rng or random).uniform(0, backoff * self.jitter)


DEFAULT_RETRY_POLICY = RetryPolicy()


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Parse a Retry-After header given in seconds or as an HTTP date."""
    if not value:
        return None
    value = value.strip()
    try:
        return max(float(value), 0.0)
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max((when - datetime.now(timezone.utc)).total_seconds(), 0.0)


class BaseProvider(ABC):
    """Abstract base class for generation backends."""

    name = "base"

    def __init__(
        self,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.retry_policy = retry_policy or DEFAULT_RETRY_POLICY
        self._sleep = sleep

    def send(self, prompt: Prompt, count: int = 1) -> list[str]:
        """Send a prompt and return the raw generated texts.

        Retryable failures (network, 5xx, 429) are retried with backoff up
        to the policy's attempt ceiling; anything else surfaces at once.

        Args:
            prompt: The prompt to send.
            count: Number of texts wanted.

        Returns:
            Raw texts in the order the backend produced them.

        Raises:
            LLMError: The last error once retries are exhausted, or the first
                non-retryable error.
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                return self._request(prompt, count)
            except LLMError as e:
                if not e.retryable or attempt >= self.retry_policy.max_attempts:
                    if e.retryable:
                        LOG.warning("%s: giving up after %d attempts: %s", self.name, attempt, e)
                    raise
                delay = self.retry_policy.delay_for(attempt, getattr(e, "retry_after", None))
                LOG.info(
                    "%s: attempt %d/%d failed (%s), retrying in %.1fs",
                    self.name, attempt, self.retry_policy.max_attempts, e, delay,
                )
                self._sleep(delay)

    @abstractmethod
    def _request(self, prompt: Prompt, count: int) -> list[str]:
        """Perform a single attempt.

        Raises:
            LLMError: Classified failure; ``retryable`` decides what send does.
        """
        pass
