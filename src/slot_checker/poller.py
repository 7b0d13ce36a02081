"""
Availability poller — the check / wait / recover loop.

    1. Stamp and log the check
    2. Ask the strategy whether a slot is available
    3. Found → return; otherwise sleep a jittered delay, recover, repeat

Errors raised by detection or recovery are never retried here; they reach
the caller as the same exception object.
"""

from __future__ import annotations

import logging
import random
import threading
from typing import TYPE_CHECKING, Optional

from .errors import ConfigError, PollCancelled
from .state import PollState

if TYPE_CHECKING:
    from .adapter import PageAdapter
    from .strategies import SiteStrategy

log = logging.getLogger("slot-checker")


# ---------------------------------------------------------------------------
# Backoff
# ---------------------------------------------------------------------------
class BackoffPolicy:
    """
    Uniform random delay in [min_seconds, max_seconds].

    Each call draws an independent sample; the attempt count does not grow
    the delay. Pass a seeded random.Random for reproducible delays.
    """

    def __init__(
        self,
        min_seconds: float,
        max_seconds: float,
        rng: Optional[random.Random] = None,
    ):
        if min_seconds < 0:
            raise ConfigError(f"Backoff minimum must be >= 0, got {min_seconds}")
        if min_seconds > max_seconds:
            raise ConfigError(
                f"Backoff minimum {min_seconds} is greater than maximum {max_seconds}"
            )
        self.min_seconds = min_seconds
        self.max_seconds = max_seconds
        self._rng = rng or random.Random()

    def next_delay(self, attempt_count: int) -> float:
        delay = self._rng.uniform(self.min_seconds, self.max_seconds)
        # uniform() may round past either bound
        return min(self.max_seconds, max(self.min_seconds, delay))

    def __repr__(self) -> str:
        return f"BackoffPolicy({self.min_seconds:g}-{self.max_seconds:g}s)"


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------
class CancelToken:
    """Thread-safe stop flag checked before every suspension point."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        """Sleep up to seconds; return early (True) once cancelled."""
        return self._event.wait(seconds)

    def raise_if_cancelled(self):
        if self._event.is_set():
            raise PollCancelled("Polling cancelled")


# ---------------------------------------------------------------------------
# Poll loop
# ---------------------------------------------------------------------------
def poll(
    adapter: PageAdapter,
    strategy: SiteStrategy,
    policy: BackoffPolicy,
    cancel: Optional[CancelToken] = None,
) -> PollState:
    """
    Check until the strategy reports availability.

    Returns the final PollState (found is always True). Raises whatever
    detection or recovery raised, or PollCancelled if cancel was set.
    """
    cancel = cancel or CancelToken()
    state = PollState()

    while True:
        cancel.raise_if_cancelled()

        checked_at = state.record_check()
        log.info("Checking for %s on %s", strategy.name, checked_at.astimezone().isoformat())

        if strategy.detect_availability(adapter):
            state.record_found()
            log.info("%s slot available after %d retries", strategy.name, state.attempt_count)
            return state

        delay = policy.next_delay(state.attempt_count)
        log.info("Sigh... Trying again in %.0f seconds", delay)

        cancel.raise_if_cancelled()
        adapter.sleep(delay)

        cancel.raise_if_cancelled()
        strategy.recover(adapter)
        state.record_miss()
