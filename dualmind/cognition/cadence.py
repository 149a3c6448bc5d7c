"""Utilities for configuring decision cadences.

The scheduler ticks the reflexive (fast) path and the deliberative (slow) path
on independent wall-clock intervals. These helpers keep the bookkeeping for
"has enough time passed since the last run" in one place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from dualmind.config import Config


DEFAULT_FAST_INTERVAL = 0.5
"""Seconds between reflexive cache checks."""

DEFAULT_SLOW_INTERVAL = 2.0
"""Seconds between deliberative reasoning calls."""


@dataclass(frozen=True)
class Interval:
    """Represents an ``every N seconds`` cadence."""

    every: float

    def is_due(self, *, now: float, last_run: Optional[float]) -> bool:
        """Return ``True`` when the cadence fires at ``now``.

        A cadence that has never run is always due, so both paths fire on the
        first scheduler tick.
        """

        if self.every <= 0 or last_run is None:
            return True

        return now - last_run >= self.every


@dataclass(frozen=True)
class DecisionCadence:
    """Bundle for fast/slow path interval configuration."""

    fast: Interval = field(default_factory=lambda: Interval(DEFAULT_FAST_INTERVAL))
    slow: Interval = field(default_factory=lambda: Interval(DEFAULT_SLOW_INTERVAL))

    def __post_init__(self) -> None:
        if self.slow.every < self.fast.every:
            raise ValueError("slow interval must not be shorter than the fast interval")

    @classmethod
    def from_config(cls) -> "DecisionCadence":
        return cls(
            fast=Interval(Config.FAST_INTERVAL_SECONDS),
            slow=Interval(Config.SLOW_INTERVAL_SECONDS),
        )
