"""
Pydantic schemas for the DualMind decision system.

All value types exchanged between the memory model, the decision engine and
the reasoning backend are defined here.

Design Philosophy:
- Decisions and memory records are immutable once produced (frozen models)
- The action kind stays a free string on the wire; ``AgentAction.kind`` maps it
  onto the closed set the executor understands
- Field names of AgentAction match the JSON contract of the reasoning backend
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Actions
# ============================================================================


class ActionKind(str, Enum):
    """Closed set of action kinds the executor can dispatch."""

    MOVE = "move"
    JUMP = "jump"
    WAIT = "wait"
    SPEAK = "speak"
    LOOK = "look"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def recognized(cls) -> Tuple["ActionKind", ...]:
        return tuple(kind for kind in cls if kind is not cls.UNRECOGNIZED)


class AgentAction(BaseModel):
    """A single decision produced by the reasoning backend or reused from the cache.

    The JSON contract with the reasoning backend is::

        {"action": "move", "target_x": 3.0, "target_y": 0.0, "target_z": 5.0,
         "camera_direction_x": 0.0, "camera_direction_y": 0.0,
         "text": "Heading for the marker", "confidence": 0.9}

    Any ``action`` string is accepted structurally. Kinds outside
    :class:`ActionKind` resolve to ``UNRECOGNIZED`` and are logged but never
    dispatched.
    """

    model_config = ConfigDict(frozen=True)

    action: str = Field(..., description="High-level decision (move, jump, wait, speak, look)")
    # Numeric fields default to zero like the original JSON decoder did for absent keys
    target_x: float = Field(0.0, description="Movement target X (for 'move')")
    target_y: float = Field(0.0, description="Movement target Y (for 'move')")
    target_z: float = Field(0.0, description="Movement target Z (for 'move')")
    camera_direction_x: float = Field(0.0, description="Look direction X (for 'look')")
    camera_direction_y: float = Field(0.0, description="Look direction Y (for 'look')")
    text: str = Field("", description="Reasoning/monologue; spoken aloud for 'speak'")
    confidence: float = Field(0.0, ge=0.0, le=1.0, description="Confidence in [0, 1]")

    @property
    def kind(self) -> ActionKind:
        """Resolve the raw action string to an ActionKind (case-insensitive)."""
        try:
            return ActionKind(self.action.strip().lower())
        except ValueError:
            return ActionKind.UNRECOGNIZED

    @property
    def is_recognized(self) -> bool:
        return self.kind is not ActionKind.UNRECOGNIZED

    def outcome_summary(self) -> str:
        """Human-readable summary stored alongside the action in episodic memory.

        Reports the ground-plane target (x, z) only.
        """
        return (
            f"Action: {self.action} to "
            f"({self.target_x:.1f}, {self.target_z:.1f}) "
            f"| Monologue: {self.text}"
        )


# ============================================================================
# Memory records
# ============================================================================


class BehaviourCacheEntry(BaseModel):
    """A prompt that was sent to the reasoning backend and the action it returned."""

    model_config = ConfigDict(frozen=True)

    context_prompt: str = Field(..., description="Exact prompt text sent to the backend")
    action: AgentAction


class ActionOutcomeRecord(BaseModel):
    """An executed action paired with its outcome summary (episodic buffer item)."""

    model_config = ConfigDict(frozen=True)

    action: AgentAction
    outcome_summary: str

    @classmethod
    def for_action(cls, action: AgentAction) -> "ActionOutcomeRecord":
        return cls(action=action, outcome_summary=action.outcome_summary())


class MomentRecord(BaseModel):
    """A committed long-term memory event, written only by the slow path."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    spatial_context: str = Field(..., description="Where the decision was made")
    # Tuple so the snapshot cannot be mutated after the moment is committed
    visual_observations_snapshot: Tuple[str, ...] = Field(default_factory=tuple)
    moment_action_outcome: str = Field(..., description="Outcome summary or action kind label")


# ============================================================================
# Perception samples
# ============================================================================


class PoseSample(BaseModel):
    """Position and heading supplied by the host engine on demand."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float
    yaw: float = Field(0.0, description="Heading in degrees")

    @property
    def position(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


__all__: List[str] = [
    "ActionKind",
    "AgentAction",
    "BehaviourCacheEntry",
    "ActionOutcomeRecord",
    "MomentRecord",
    "PoseSample",
]
