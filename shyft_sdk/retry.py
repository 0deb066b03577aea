"""
Retry policy for Shyft API requests.

The policy wraps a zero-argument coroutine factory that performs one attempt.
It does not know about URLs or payloads, so tests can hand it a scripted
executor instead of a real HTTP client.
"""
import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional

import httpx

from . import constants
from ._rate_limited_log import rate_limited_log
from .exceptions import TransportError

logger = logging.getLogger(__name__)

Executor = Callable[[], Awaitable[httpx.Response]]


def is_retryable_status(status_code: int) -> bool:
    """Request timeout, rate limiting and any 5xx are worth another attempt."""
    return status_code in constants.RETRYABLE_CLIENT_STATUS_CODES or 500 <= status_code <= 599


class RetryPolicy:
    """
    Exponential backoff with jitter, bounded by a minimum and maximum interval.

    ``max_retries`` counts re-issues after the first attempt, so a request that
    keeps failing is sent ``max_retries + 1`` times in total.
    """

    def __init__(
        self,
        min_interval: float = constants.MIN_RETRY_INTERVAL,
        max_interval: float = constants.MAX_RETRY_INTERVAL,
        max_retries: int = constants.MAX_RETRIES,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if min_interval < 0 or max_interval < min_interval:
            raise ValueError(
                f"Invalid retry bounds: min_interval={min_interval}, max_interval={max_interval}"
            )
        if max_retries < 0:
            raise ValueError(f"max_retries must be non-negative (got: {max_retries})")
        self.min_interval = min_interval
        self.max_interval = max_interval
        self.max_retries = max_retries
        self._sleep = sleep
        self._rng = rng or random.Random()
        self.logger = logger or logging.getLogger(__name__)

    def backoff(self, attempt: int) -> float:
        """
        Delay before re-issuing after failed attempt number ``attempt`` (0-based).

        The ceiling doubles from min_interval with each attempt and is capped at
        max_interval; the actual delay is drawn uniformly between min_interval
        and that ceiling.
        """
        # 2 ** 63 already exceeds any sane max_interval; a larger exponent overflows float
        ceiling = min(self.max_interval, self.min_interval * (2 ** min(attempt, 63)))
        if ceiling <= self.min_interval:
            return ceiling
        return self._rng.uniform(self.min_interval, ceiling)

    async def execute(self, send: Executor, description: str = "request") -> httpx.Response:
        """
        Run ``send`` until it succeeds, fails permanently or the budget is spent.

        Args:
            send: Coroutine factory performing exactly one attempt
            description: Short label used in log messages (e.g. "GET transaction/parsed")

        Returns:
            The last response received. It may carry a non-2xx status if the
            failure was not retryable or retries ran out; turning it into an
            error is the caller's job.

        Raises:
            TransportError: If the final attempt produced no response
        """
        attempt = 0
        while True:
            try:
                response = await send()
            except TransportError as exc:
                if attempt >= self.max_retries:
                    self.logger.error(f"{description} failed after {attempt + 1} attempt(s): {exc}")
                    raise
                reason = type(exc.__cause__ or exc).__name__
            else:
                if not is_retryable_status(response.status_code):
                    return response
                if attempt >= self.max_retries:
                    self.logger.error(
                        f"{description} still returning {response.status_code} after {attempt + 1} attempt(s)"
                    )
                    return response
                reason = f"status {response.status_code}"

            delay = self.backoff(attempt)
            attempt += 1
            self.logger.debug(
                f"Retrying {description} in {delay:.3f}s ({reason}, retry {attempt}/{self.max_retries})"
            )
            rate_limited_log(
                f"{description}:{reason}",
                f"Retrying {description} due to {reason}",
                logger_instance=self.logger,
            )
            await self._sleep(delay)
