"""
Dual-rate decision engine.

Coordinates the two decision paths of an agent:
1. Reflexive (fast) path: refresh working memory, build the prompt, reuse a
   cached action when a past prompt is similar enough. Synchronous, never
   awaits, never learns.
2. Deliberative (slow) path: refresh working memory, build the prompt, ask the
   reasoning backend, then commit the answer to the behaviour cache and
   long-term memory and execute it. At most one reasoning call is in flight.

Conflict resolution is last-writer-wins: a committed deliberative action is
executed unconditionally, overriding whatever the reflexive path last did.

All memory structures and collaborators are injected; the engine borrows them.
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .cognition.executor import ActionExecutor
from .cognition.matcher import SIMILARITY_THRESHOLD, find_best_match
from .cognition.prompts import PromptTemplate
from .cognition.renderers import build_prompt
from .errors import MalformedResponseError, ReasoningTransportError
from .logging_utils import log_error, log_llm, log_reflex, log_success, log_warning
from .memory import AgentWorkingMemory, BehaviourCache, LongTermMemory
from .perception import ObservationSupplier, PoseSupplier, describe_pose
from .reasoning import ReasoningClient, parse_action_response
from .schemas import ActionKind, AgentAction, MomentRecord


DEFAULT_REASONING_TIMEOUT = 30.0


class DeliberationStatus(str, Enum):
    """How a slow-path invocation ended."""

    SKIPPED = "skipped"                        # another call was already in flight
    TRANSPORT_FAILED = "transport_failed"      # call failed, timed out or came back empty
    MALFORMED_RESPONSE = "malformed_response"  # response did not parse into an AgentAction
    COMMITTED = "committed"                    # cache + long-term memory written, action executed


@dataclass(frozen=True)
class DeliberationResult:
    """Outcome of one slow-path invocation."""

    status: DeliberationStatus
    action: Optional[AgentAction] = None
    prompt: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def committed(self) -> bool:
        return self.status is DeliberationStatus.COMMITTED


class DecisionEngine:
    """
    Decision engine for a single agent.

    Args:
        reasoning_client: Slow-path backend (prompt in, raw text out)
        executor: Engine-owned sink for move/look/jump/speak commands
        pose_supplier: Source of position/heading samples
        working_memory: Shared per-tick snapshot (owned by the host)
        long_term_memory: Committed moments and reflections (owned by the host)
        behaviour_cache: Learned (prompt, action) pairs (owned by the host)
        observation_supplier: Optional callable returning visible objects;
            when omitted the visual observations are left as the host set them
        similarity_threshold: Minimum cache score for reflexive reuse
        reasoning_timeout: Seconds before an in-flight reasoning call is
            abandoned and treated as a transport failure
        prompt_template: Optional override of the default decision template
        name: Label used in log lines
    """

    def __init__(
        self,
        *,
        reasoning_client: ReasoningClient,
        executor: ActionExecutor,
        pose_supplier: PoseSupplier,
        working_memory: AgentWorkingMemory,
        long_term_memory: LongTermMemory,
        behaviour_cache: BehaviourCache,
        observation_supplier: Optional[ObservationSupplier] = None,
        similarity_threshold: float = SIMILARITY_THRESHOLD,
        reasoning_timeout: Optional[float] = DEFAULT_REASONING_TIMEOUT,
        prompt_template: Optional[PromptTemplate] = None,
        name: str = "agent",
    ) -> None:
        if not 0.0 <= similarity_threshold <= 1.0:
            raise ValueError("similarity_threshold must be between 0 and 1")

        self.reasoning_client = reasoning_client
        self.executor = executor
        self.pose_supplier = pose_supplier
        self.working_memory = working_memory
        self.long_term_memory = long_term_memory
        self.behaviour_cache = behaviour_cache
        self.observation_supplier = observation_supplier
        self.similarity_threshold = similarity_threshold
        self.reasoning_timeout = reasoning_timeout
        self.prompt_template = prompt_template
        self.name = name

        # Single-flight guard. The lock makes test-and-set atomic even when
        # invocations arrive from a thread other than the event loop's.
        self._flight_lock = threading.Lock()
        self._in_flight = False

        # Held for a whole slow-path commit and for every action execution, so
        # a fast-path execution never interleaves with steps of a commit.
        self._commit_lock = threading.RLock()

    # =============================
    # Shared helpers
    # =============================

    @property
    def is_deliberating(self) -> bool:
        with self._flight_lock:
            return self._in_flight

    def update_working_memory(self) -> None:
        """Refresh the visuo-spatial fields from the perception suppliers."""
        pose = self.pose_supplier.sample()
        self.working_memory.set_spatial_context(describe_pose(pose))
        if self.observation_supplier is not None:
            self.working_memory.set_visual_observations(self.observation_supplier())

    def build_prompt(self) -> str:
        return build_prompt(self.working_memory, self.prompt_template)

    def execute_action(self, action: AgentAction, *, source: str) -> None:
        """Record ``action`` in episodic memory, then dispatch it to the executor.

        Unrecognized kinds are recorded and reported but not dispatched.
        """
        with self._commit_lock:
            self.working_memory.record_action(action)

            log = log_reflex if source == "cache" else log_llm
            log(f"[{self.name}] Monologue: {action.text} (Source: {source})")

            kind = action.kind
            if kind is ActionKind.MOVE:
                self.executor.move(action.target_x, action.target_y, action.target_z)
            elif kind is ActionKind.LOOK:
                self.executor.look(action.camera_direction_x, action.camera_direction_y)
            elif kind is ActionKind.JUMP:
                self.executor.jump()
            elif kind is ActionKind.SPEAK:
                self.executor.speak(action.text)
            elif kind is ActionKind.WAIT:
                log(f"[{self.name}] Waiting")
            else:
                log_warning(f"[{self.name}] Unknown action: {action.action!r}; not dispatched")

    # =============================
    # Fast path
    # =============================

    def react(self) -> Optional[AgentAction]:
        """Run one reflexive cycle. Returns the reused action, or None on a miss."""
        self.update_working_memory()
        prompt = self.build_prompt()

        match = find_best_match(prompt, self.behaviour_cache)
        if match is None or match.score < self.similarity_threshold:
            return None

        log_reflex(
            f"[{self.name}] Using CACHED action '{match.action.action}' "
            f"(similarity {match.score:.2f} >= {self.similarity_threshold})"
        )
        self.execute_action(match.action, source="cache")
        return match.action

    # =============================
    # Slow path
    # =============================

    def _try_begin_flight(self) -> bool:
        with self._flight_lock:
            if self._in_flight:
                return False
            self._in_flight = True
            return True

    def _end_flight(self) -> None:
        with self._flight_lock:
            self._in_flight = False

    async def deliberate(self) -> DeliberationResult:
        """Run one deliberative cycle, or return SKIPPED if one is already in flight."""
        if not self._try_begin_flight():
            return DeliberationResult(status=DeliberationStatus.SKIPPED)
        return await self._deliberate_in_flight()

    def request_deliberation(self) -> Optional["asyncio.Task[DeliberationResult]"]:
        """Start a deliberative cycle as a task on the running loop.

        The single-flight flag is taken synchronously, before the task is
        created, so two back-to-back requests can never both start a call.
        Returns None when a call is already in flight.
        """
        if not self._try_begin_flight():
            return None
        try:
            loop = asyncio.get_running_loop()
            return loop.create_task(self._deliberate_in_flight())
        except BaseException:
            self._end_flight()
            raise

    async def _deliberate_in_flight(self) -> DeliberationResult:
        """Body of the slow path. The caller must already hold the flight flag."""
        prompt: Optional[str] = None
        try:
            self.update_working_memory()
            prompt = self.build_prompt()
            log_llm(f"[{self.name}] Calling reasoning backend...")
            call = self.reasoning_client.complete(prompt)
            if self.reasoning_timeout is not None:
                raw = await asyncio.wait_for(call, timeout=self.reasoning_timeout)
            else:
                raw = await call
        except asyncio.TimeoutError:
            error = ReasoningTransportError(
                f"reasoning call timed out after {self.reasoning_timeout:g}s"
            )
            log_error(f"[{self.name}] {error}")
            return DeliberationResult(
                status=DeliberationStatus.TRANSPORT_FAILED, prompt=prompt, error=error
            )
        except ReasoningTransportError as exc:
            log_error(f"[{self.name}] Reasoning call failed: {exc}")
            return DeliberationResult(
                status=DeliberationStatus.TRANSPORT_FAILED, prompt=prompt, error=exc
            )
        finally:
            # Released exactly once, as soon as the round trip is over.
            self._end_flight()

        if not raw or not raw.strip():
            error = ReasoningTransportError("reasoning backend returned an empty response")
            log_error(f"[{self.name}] {error}")
            return DeliberationResult(
                status=DeliberationStatus.TRANSPORT_FAILED, prompt=prompt, error=error
            )

        try:
            action = parse_action_response(raw)
        except MalformedResponseError as exc:
            log_error(f"[{self.name}] Failed to parse reasoning response: {exc}")
            return DeliberationResult(
                status=DeliberationStatus.MALFORMED_RESPONSE, prompt=prompt, error=exc
            )

        self._commit(prompt, action)
        return DeliberationResult(
            status=DeliberationStatus.COMMITTED, action=action, prompt=prompt
        )

    def _commit(self, prompt: str, action: AgentAction) -> None:
        """Write cache and long-term memory, then execute ``action``, atomically."""
        memory = self.working_memory
        with self._commit_lock:
            # The cache only ever memoizes reasoning outputs for the prompt that was sent.
            self.behaviour_cache.add(prompt, action)

            latest = memory.latest_outcome()
            outcome = latest.outcome_summary if latest is not None else action.action
            self.long_term_memory.add_moment(
                MomentRecord(
                    spatial_context=memory.current_spatial_context,
                    visual_observations_snapshot=tuple(memory.recent_visual_observations),
                    moment_action_outcome=outcome,
                )
            )

            reflection = memory.take_pending_reflection()
            if reflection:
                self.long_term_memory.add_reflection(reflection)

            # Last writer wins: overrides whatever the reflexive path last executed.
            self.execute_action(action, source="reasoning")

        log_success(
            f"[{self.name}] Committed '{action.action}' "
            f"(cache: {len(self.behaviour_cache)}, moments: {len(self.long_term_memory.moments)})"
        )
