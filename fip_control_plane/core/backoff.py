# fip_control_plane/core/backoff.py
"""
Backoff policy and convergence wait

The wait is an explicit state machine:

    POLLING -> CONVERGED   condition returned True
    POLLING -> FAILED      condition raised
    POLLING -> EXHAUSTED   `steps` attempts without convergence

Between two attempts the wait sleeps on a threading.Event, so a caller
holding the event can abandon the loop at any inter-poll boundary.
"""

import logging
import random
import threading
from enum import Enum
from typing import Callable, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConvergenceCancelled, ConvergenceTimeout

logger = logging.getLogger(__name__)


class BackoffPolicy(BaseModel):
    """
    Poll schedule for convergence waits

    With the defaults (factor 1.0) this is a fixed 30s interval with up
    to 10% extra jitter, for at most 10 attempts.
    """
    steps: int = Field(10, ge=1)
    duration: float = Field(30.0, ge=0.0)  # seconds
    factor: float = Field(1.0, ge=1.0)
    jitter: float = Field(0.1, ge=0.0)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, settings) -> "BackoffPolicy":
        return cls(
            steps=settings.FIP_BACKOFF_STEPS,
            duration=settings.FIP_BACKOFF_DURATION_SECONDS,
            factor=settings.FIP_BACKOFF_FACTOR,
            jitter=settings.FIP_BACKOFF_JITTER,
        )

    def delays(self, rng: Optional[random.Random] = None) -> Iterator[float]:
        """
        Yield the sleep before each retry, i.e. steps - 1 values

        Jitter is additive: each delay lies in [d, d * (1 + jitter)).
        """
        rng = rng or random
        duration = self.duration
        for _ in range(self.steps - 1):
            delay = duration
            if self.jitter > 0:
                delay += rng.random() * self.jitter * duration
            yield delay
            duration *= self.factor

    @property
    def max_wait(self) -> float:
        """Upper bound of the cumulative sleep time"""
        total = 0.0
        duration = self.duration
        for _ in range(self.steps - 1):
            total += duration * (1 + self.jitter)
            duration *= self.factor
        return total


DEFAULT_BACKOFF = BackoffPolicy()


class ConvergenceState(str, Enum):
    """Convergence wait states"""
    POLLING = "POLLING"
    CONVERGED = "CONVERGED"
    FAILED = "FAILED"
    EXHAUSTED = "EXHAUSTED"


class ConvergenceWait:
    """
    One convergence wait for a single resource

    Not reusable: create one per wait. The policy it reads is shared.
    """

    def __init__(
        self,
        policy: BackoffPolicy,
        resource_id: str,
        cancel_event: Optional[threading.Event] = None,
        rng: Optional[random.Random] = None,
    ):
        self.policy = policy
        self.resource_id = resource_id
        self.cancel_event = cancel_event or threading.Event()
        self.rng = rng
        self.state = ConvergenceState.POLLING
        self.attempts = 0

    def run(self, condition: Callable[[], bool]) -> None:
        """
        Poll `condition` until it returns True

        Raises:
            Whatever `condition` raises (state FAILED)
            ConvergenceTimeout: budget spent (state EXHAUSTED)
            ConvergenceCancelled: cancel_event was set while waiting
        """
        delays = self.policy.delays(self.rng)

        while self.state == ConvergenceState.POLLING:
            self.attempts += 1
            try:
                done = condition()
            except Exception:
                self.state = ConvergenceState.FAILED
                raise

            if done:
                self.state = ConvergenceState.CONVERGED
                logger.debug(f"Converged id={self.resource_id} attempts={self.attempts}")
                return

            delay = next(delays, None)
            if delay is None:
                self.state = ConvergenceState.EXHAUSTED
                break

            logger.debug(
                f"Not converged id={self.resource_id} attempt={self.attempts}/{self.policy.steps} "
                f"next_poll_in={delay:.1f}s"
            )
            if self.cancel_event.wait(delay):
                raise ConvergenceCancelled(self.resource_id, self.attempts)

        raise ConvergenceTimeout(self.resource_id, self.attempts)
