"""Run completion polling.

This module provides the RunPoller class which polls the status of a run
until it reaches a terminal state, waiting between fetches according to a
PollPolicy. The sleep function is injectable so tests can poll without
waiting in real time.
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Awaitable, Callable

from assistant_relay.assistants import AssistantsClient, RunInfo
from assistant_relay.config import RelaySettings
from assistant_relay.errors import RunTimeoutError

logger = logging.getLogger(__name__)


class PollState(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class PollPolicy:
    """How long to wait between status fetches and when to give up.

    Attributes:
        interval: Seconds to wait before the first re-fetch
        max_attempts: Maximum number of waits, None to poll forever
        backoff: Factor applied to the interval after every wait (1.0: constant)
        max_interval: Upper bound on a single wait, None for no bound
    """

    interval: float = 1.0
    max_attempts: int | None = None
    backoff: float = 1.0
    max_interval: float | None = None

    def delay(self, attempt: int) -> float:
        """Seconds to wait before re-fetch number ``attempt`` (0-based)."""
        delay = self.interval * (self.backoff**attempt)
        if self.max_interval is not None:
            delay = min(delay, self.max_interval)
        return delay

    @classmethod
    def immediate(cls, max_attempts: int | None = None) -> "PollPolicy":
        """A policy that never waits."""
        return cls(interval=0.0, max_attempts=max_attempts)

    @classmethod
    def from_settings(cls, settings: RelaySettings) -> "PollPolicy":
        return cls(
            interval=settings.poll_interval,
            max_attempts=settings.poll_max_attempts,
            backoff=settings.poll_backoff,
            max_interval=settings.poll_max_interval,
        )


@dataclass(frozen=True)
class PollResult:
    """Terminal outcome of polling one run.

    Attributes:
        state: COMPLETED or FAILED
        run: The last fetched run state
        waits: Number of intervals waited before the terminal status was seen
    """

    state: PollState
    run: RunInfo
    waits: int

    @property
    def completed(self) -> bool:
        return self.state is PollState.COMPLETED


class RunPoller:
    """Polls a run until it completes or reaches another terminal status."""

    def __init__(
        self,
        client: AssistantsClient,
        policy: PollPolicy | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ):
        self.client = client
        self.policy = policy or PollPolicy()
        self._sleep = sleep

    def bounded(self, max_attempts: int) -> "RunPoller":
        """Same client, sleep and delays, giving up after max_attempts waits."""
        return RunPoller(
            self.client, replace(self.policy, max_attempts=max_attempts), sleep=self._sleep
        )

    @staticmethod
    def classify(run: RunInfo) -> PollState:
        if run.is_completed:
            return PollState.COMPLETED
        if run.is_failed:
            return PollState.FAILED
        return PollState.PENDING

    async def wait(self, thread_id: str, run_id: str) -> PollResult:
        """Poll a run until it reaches a terminal status.

        The first fetch happens immediately; every later fetch follows one
        policy delay.

        Args:
            thread_id: Thread the run belongs to
            run_id: The run to watch

        Returns:
            PollResult: The terminal state and the last fetched run

        Raises:
            RunTimeoutError: If the policy's max_attempts waits elapse first
        """
        run = await self.client.retrieve_run(thread_id, run_id)
        waits = 0

        state = self.classify(run)
        while state is PollState.PENDING:
            if self.policy.max_attempts is not None and waits >= self.policy.max_attempts:
                logger.warning(f"Giving up on run {run_id} after {waits} waits")
                raise RunTimeoutError(run, waits)

            await self._sleep(self.policy.delay(waits))
            waits += 1
            run = await self.client.retrieve_run(thread_id, run_id)
            state = self.classify(run)

        logger.info(f"Run {run_id} finished with status {run.status} after {waits} waits")
        return PollResult(state=state, run=run, waits=waits)
