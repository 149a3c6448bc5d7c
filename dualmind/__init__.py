"""
DualMind - dual-rate decision engine for autonomous agents.

A fast, synchronous lookup against a learned behaviour cache runs alongside a
slow, asynchronous call to an LLM reasoning backend. The slow path teaches the
cache; the fast path reuses what it learned.

No engine integration, no persistence, no global state in the core.
All collaborators and memory structures are injected by the host.
"""

__version__ = "0.1.0"

# Main components
from .engine import DecisionEngine, DeliberationResult, DeliberationStatus
from .scheduler import DecisionScheduler

# Memory model
from .memory import AgentWorkingMemory, LongTermMemory, BehaviourCache

# Core schemas
from .schemas import (
    ActionKind,
    AgentAction,
    BehaviourCacheEntry,
    ActionOutcomeRecord,
    MomentRecord,
    PoseSample,
)

# Collaborator contracts
from .reasoning import ReasoningClient, LLMReasoningClient, parse_action_response
from .perception import (
    PoseSupplier,
    ObservationSupplier,
    StaticPoseSupplier,
    StaticObservations,
    describe_pose,
)
from .cognition import (
    ActionExecutor,
    LoggingActionExecutor,
    DecisionCadence,
    Interval,
    PromptTemplate,
    PromptLibrary,
    DEFAULT_PROMPTS,
    build_prompt,
    find_best_cached_action,
    similarity_score,
)
from .errors import DualMindError, ReasoningTransportError, MalformedResponseError

__all__ = [
    # Main classes
    "DecisionEngine",
    "DeliberationResult",
    "DeliberationStatus",
    "DecisionScheduler",
    # Memory
    "AgentWorkingMemory",
    "LongTermMemory",
    "BehaviourCache",
    # Schemas
    "ActionKind",
    "AgentAction",
    "BehaviourCacheEntry",
    "ActionOutcomeRecord",
    "MomentRecord",
    "PoseSample",
    # Collaborators
    "ReasoningClient",
    "LLMReasoningClient",
    "parse_action_response",
    "PoseSupplier",
    "ObservationSupplier",
    "StaticPoseSupplier",
    "StaticObservations",
    "describe_pose",
    "ActionExecutor",
    "LoggingActionExecutor",
    # Cognition helpers
    "DecisionCadence",
    "Interval",
    "PromptTemplate",
    "PromptLibrary",
    "DEFAULT_PROMPTS",
    "build_prompt",
    "find_best_cached_action",
    "similarity_score",
    # Errors
    "DualMindError",
    "ReasoningTransportError",
    "MalformedResponseError",
]
