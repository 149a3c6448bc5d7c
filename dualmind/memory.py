"""
Layered memory model for DualMind agents.

This module holds the three memory structures the decision engine reads and
writes. The host application owns all three and passes them into the
DecisionEngine constructor; the engine borrows them and never replaces them.

- AgentWorkingMemory: mutable per-tick snapshot, mirroring the components of
  human working memory (visuo-spatial sketchpad, verbal loop, episodic buffer,
  central executive). Feeds prompt construction on both decision paths.
- LongTermMemory: append-only log of committed moments and reflections,
  written only when a deliberative (slow-path) decision succeeds.
- BehaviourCache: append-only log of (prompt, action) pairs produced by the
  reasoning backend. The reflexive (fast) path reads it, never writes it.

Design principle: only the episodic buffer evicts. Everything the slow path
commits is kept for the lifetime of the process unless the host opts into a
cache capacity.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterable, Iterator, List, Optional, Tuple

from dualmind.config import Config
from dualmind.schemas import (
    ActionOutcomeRecord,
    AgentAction,
    BehaviourCacheEntry,
    MomentRecord,
)


DEFAULT_EPISODIC_CAPACITY = 5
DEFAULT_VISUAL_CAPACITY = 10
DEFAULT_EXCHANGE_CAPACITY = 10


# ============================================================================
# Working memory
# ============================================================================


@dataclass
class AgentWorkingMemory:
    """Mutable situational snapshot shared by the fast and slow decision paths.

    Notes
    -----
    * ``recent_actions_and_outcomes`` is a bounded deque; appending beyond the
      capacity drops the oldest record (strict FIFO). Use :meth:`record_action`
      rather than mutating it directly.
    * ``recent_visual_observations`` is replaced wholesale from perception each
      tick and truncated to ``visual_capacity``.
    * ``recent_exchanges`` keeps the newest ``exchange_capacity`` lines.
    * ``plans`` and ``reflections`` are unbounded executive-level notes.
    """

    core_self_concept: List[str] = field(default_factory=list)
    current_spatial_context: str = ""
    recent_visual_observations: List[str] = field(default_factory=list)
    recent_exchanges: List[str] = field(default_factory=list)
    plans: List[str] = field(default_factory=list)
    reflections: List[str] = field(default_factory=list)
    episodic_capacity: int = DEFAULT_EPISODIC_CAPACITY
    visual_capacity: int = DEFAULT_VISUAL_CAPACITY
    exchange_capacity: int = DEFAULT_EXCHANGE_CAPACITY
    recent_actions_and_outcomes: Deque[ActionOutcomeRecord] = field(default_factory=deque, init=False)
    _pending_reflection: Optional[str] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.episodic_capacity < 1:
            raise ValueError("episodic_capacity must be >= 1")
        self.recent_actions_and_outcomes = deque(maxlen=self.episodic_capacity)

    @classmethod
    def from_config(cls, **fields) -> "AgentWorkingMemory":
        """Build working memory with the configured episodic capacity."""
        fields.setdefault("episodic_capacity", Config.EPISODIC_CAPACITY)
        return cls(**fields)

    # Visuo-spatial sketchpad -------------------------------------------------

    def set_spatial_context(self, description: str) -> None:
        self.current_spatial_context = description

    def set_visual_observations(self, observations: Iterable[str]) -> None:
        """Replace the visual observations with the newest perception sample."""
        self.recent_visual_observations = list(observations)[: self.visual_capacity]

    # Verbal loop -------------------------------------------------------------

    def add_exchange(self, line: str) -> None:
        self.recent_exchanges.append(line)
        overflow = len(self.recent_exchanges) - self.exchange_capacity
        if overflow > 0:
            del self.recent_exchanges[:overflow]

    # Episodic buffer ---------------------------------------------------------

    def record_action(self, action: AgentAction) -> ActionOutcomeRecord:
        """Append an outcome record for ``action``, evicting the oldest if full."""
        record = ActionOutcomeRecord.for_action(action)
        self.recent_actions_and_outcomes.append(record)
        return record

    def latest_outcome(self) -> Optional[ActionOutcomeRecord]:
        if not self.recent_actions_and_outcomes:
            return None
        return self.recent_actions_and_outcomes[-1]

    # Central executive -------------------------------------------------------

    def add_plan(self, plan: str) -> None:
        self.plans.append(plan)

    def add_reflection(self, reflection: str) -> None:
        """Record a reflection and mark it pending for the next slow-path commit."""
        self.reflections.append(reflection)
        if reflection.strip():
            self._pending_reflection = reflection

    @property
    def pending_reflection(self) -> Optional[str]:
        return self._pending_reflection

    def take_pending_reflection(self) -> Optional[str]:
        """Return the pending reflection (if any) and clear the marker."""
        reflection, self._pending_reflection = self._pending_reflection, None
        return reflection


# ============================================================================
# Long-term memory
# ============================================================================


class LongTermMemory:
    """Two independent append-only logs: structured moments and free-text reflections.

    Both logs are exposed as tuples so callers cannot rewrite history in place.
    """

    def __init__(self) -> None:
        self._moments: List[MomentRecord] = []
        self._reflections: List[str] = []

    @property
    def moments(self) -> Tuple[MomentRecord, ...]:
        return tuple(self._moments)

    @property
    def reflections(self) -> Tuple[str, ...]:
        return tuple(self._reflections)

    def add_moment(self, moment: MomentRecord) -> None:
        self._moments.append(moment)

    def add_reflection(self, reflection: str) -> None:
        self._reflections.append(reflection)


# ============================================================================
# Behaviour cache
# ============================================================================


class BehaviourCache:
    """Append-only store of (prompt, action) pairs learned from the reasoning backend.

    Args:
        capacity: Optional upper bound on stored entries. ``None`` (default)
            keeps every entry for the lifetime of the process. When set, the
            oldest entry is evicted once the cache is full.
    """

    def __init__(self, capacity: Optional[int] = None) -> None:
        if capacity is not None and capacity < 1:
            raise ValueError("capacity must be >= 1 when set")
        self.capacity = capacity
        self._entries: Deque[BehaviourCacheEntry] = deque(maxlen=capacity)

    @classmethod
    def from_config(cls) -> "BehaviourCache":
        return cls(capacity=Config.BEHAVIOUR_CACHE_CAPACITY)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[BehaviourCacheEntry]:
        return iter(tuple(self._entries))

    @property
    def entries(self) -> Tuple[BehaviourCacheEntry, ...]:
        return tuple(self._entries)

    def add(self, prompt: str, action: AgentAction) -> BehaviourCacheEntry:
        entry = BehaviourCacheEntry(context_prompt=prompt, action=action)
        self._entries.append(entry)
        return entry


__all__ = [
    "AgentWorkingMemory",
    "LongTermMemory",
    "BehaviourCache",
    "DEFAULT_EPISODIC_CAPACITY",
]
