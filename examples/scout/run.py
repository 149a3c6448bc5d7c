"""
Scout - a single agent walking toward a destination marker
==========================================================

WHAT THIS SHOWS:
- Wiring a DecisionEngine with host-owned memory structures
- The scheduler ticking the reflexive path every 0.5s and the deliberative path every 2s
- The behaviour cache filling up from reasoning calls and being reused reflexively

RUN:
    uv run python -m examples.scout.run                # uses LLM_PROVIDER / LLM_MODEL
    uv run python -m examples.scout.run --offline      # scripted backend, no network
"""

import argparse
import asyncio
import json

from dualmind import (
    AgentWorkingMemory,
    BehaviourCache,
    DecisionEngine,
    DecisionScheduler,
    LLMReasoningClient,
    LoggingActionExecutor,
    LongTermMemory,
    PoseSample,
    StaticObservations,
    StaticPoseSupplier,
)
from dualmind.cognition.cadence import DecisionCadence
from dualmind.config import Config


class ScriptedReasoningClient:
    """Offline stand-in that walks the scout toward the marker in fixed steps."""

    def __init__(self, pose: StaticPoseSupplier, latency: float = 0.8) -> None:
        self.pose = pose
        self.latency = latency

    async def complete(self, prompt: str) -> str:
        await asyncio.sleep(self.latency)
        current = self.pose.sample()
        return json.dumps(
            {
                "action": "move",
                "target_x": current.x + 1.0,
                "target_y": 0.0,
                "target_z": current.z + 2.0,
                "text": "The marker is east; keep walking and watch the tree line.",
                "confidence": 0.8,
            }
        )


async def main(offline: bool, seconds: float) -> None:
    # The host owns every memory structure; the engine only borrows them.
    working_memory = AgentWorkingMemory.from_config(
        core_self_concept=[
            "Goal: Reach the destination marker.",
            "Personality: Cautious and methodical.",
            "Purpose: Scout the environment for anomalies.",
        ],
        plans=["Walk towards the target, checking for dangers."],
    )
    long_term_memory = LongTermMemory()
    cache = BehaviourCache.from_config()

    pose = StaticPoseSupplier(PoseSample(x=0.0, y=0.0, z=0.0, yaw=90.0))
    observations = StaticObservations(
        [
            "A large oak tree is 10 meters ahead.",
            "The destination marker is visible to the East.",
        ]
    )

    if offline:
        client = ScriptedReasoningClient(pose)
    else:
        Config.validate()
        print(Config.display())
        client = LLMReasoningClient.from_config()

    engine = DecisionEngine(
        reasoning_client=client,
        executor=LoggingActionExecutor(),
        pose_supplier=pose,
        observation_supplier=observations,
        working_memory=working_memory,
        long_term_memory=long_term_memory,
        behaviour_cache=cache,
        similarity_threshold=Config.SIMILARITY_THRESHOLD,
        reasoning_timeout=Config.REASONING_TIMEOUT_SECONDS,
        name="scout",
    )
    scheduler = DecisionScheduler(engine, DecisionCadence.from_config())

    await scheduler.run(duration=seconds)

    print("\nBehaviour cache entries:", len(cache))
    print("Moments committed:", len(long_term_memory.moments))
    for moment in long_term_memory.moments:
        print(f"  - {moment.timestamp:%H:%M:%S} {moment.spatial_context} -> {moment.moment_action_outcome}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run the scout agent")
    parser.add_argument("--offline", action="store_true", help="Use a scripted reasoning backend")
    parser.add_argument("--seconds", type=float, default=10.0, help="How long to run")
    args = parser.parse_args()
    asyncio.run(main(args.offline, args.seconds))
