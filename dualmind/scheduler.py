"""
Periodic driver for the decision engine.

One loop, two independent timers:
1. Fast timer: runs DecisionEngine.react() synchronously inside the tick
2. Slow timer: starts DecisionEngine.request_deliberation() as a task and
   moves on; the reasoning round trip routinely spans several fast ticks

Both timers start "due", so the first tick runs both paths. The slow timer is
reset on every attempt, including attempts skipped because a call is still in
flight.
"""

import asyncio
import time
from typing import Callable, Optional

from .cognition.cadence import DecisionCadence, Interval
from .engine import DecisionEngine, DeliberationResult
from .logging_utils import log_error, log_info


DEFAULT_POLL_INTERVAL = 0.05


class DecisionScheduler:
    """Drive a DecisionEngine on fast/slow cadences.

    Args:
        engine: Engine to drive
        cadence: Fast/slow intervals (defaults to 0.5s / 2.0s)
        clock: Monotonic time source in seconds (injectable for tests)
        poll_interval: Seconds to sleep between scheduler ticks
    """

    def __init__(
        self,
        engine: DecisionEngine,
        cadence: Optional[DecisionCadence] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        self.engine = engine
        self.cadence = cadence or DecisionCadence()
        self.clock = clock
        self.poll_interval = poll_interval

        self._last_fast: Optional[float] = None
        self._last_slow: Optional[float] = None
        self._slow_task: Optional["asyncio.Task[DeliberationResult]"] = None
        self._stopped = False

        self.fast_ticks = 0
        self.slow_ticks = 0
        self.deliberations_started = 0

    @property
    def pending_deliberation(self) -> Optional["asyncio.Task[DeliberationResult]"]:
        if self._slow_task is None or self._slow_task.done():
            return None
        return self._slow_task

    def tick(self, now: Optional[float] = None) -> None:
        """Run whichever paths are due at ``now``. Must be called on a running loop."""
        if now is None:
            now = self.clock()

        if self.cadence.fast.is_due(now=now, last_run=self._last_fast):
            self._last_fast = now
            self.fast_ticks += 1
            try:
                self.engine.react()
            except Exception as exc:  # executor and supplier errors must not stop the loop
                log_error(f"[{self.engine.name}] Reflexive cycle failed: {type(exc).__name__}: {exc}")

        if self.cadence.slow.is_due(now=now, last_run=self._last_slow):
            self._last_slow = now
            self.slow_ticks += 1
            task = self.engine.request_deliberation()
            if task is not None:
                self.deliberations_started += 1
                task.add_done_callback(self._on_deliberation_done)
                self._slow_task = task

    def _on_deliberation_done(self, task: "asyncio.Task[DeliberationResult]") -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log_error(f"[{self.engine.name}] Deliberation crashed: {type(exc).__name__}: {exc}")

    def stop(self) -> None:
        """Ask a running ``run()`` loop to exit after the current tick."""
        self._stopped = True

    async def run(
        self,
        *,
        duration: Optional[float] = None,
        max_ticks: Optional[int] = None,
    ) -> None:
        """Tick until ``duration`` seconds pass, ``max_ticks`` ticks run, or stop() is called.

        Waits for an in-flight deliberation before returning.
        """
        self._stopped = False
        start = self.clock()
        ticks = 0
        log_info(
            f"[{self.engine.name}] Scheduler started "
            f"(fast every {self.cadence.fast.every}s, slow every {self.cadence.slow.every}s)"
        )
        try:
            while not self._stopped:
                if max_ticks is not None and ticks >= max_ticks:
                    break
                if duration is not None and self.clock() - start >= duration:
                    break
                self.tick()
                ticks += 1
                await asyncio.sleep(self.poll_interval)
        finally:
            await self.drain()
            log_info(
                f"[{self.engine.name}] Scheduler stopped after {ticks} ticks "
                f"({self.deliberations_started} deliberations)"
            )

    async def drain(self) -> None:
        """Wait for the in-flight deliberation, if any. Its errors are already logged."""
        task = self.pending_deliberation
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)


def build_cadence(fast: float, slow: float) -> DecisionCadence:
    """Shorthand for ``DecisionCadence(fast=Interval(fast), slow=Interval(slow))``."""
    return DecisionCadence(fast=Interval(fast), slow=Interval(slow))
