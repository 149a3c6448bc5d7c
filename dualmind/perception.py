"""
Perception contracts between the decision engine and the host engine.

The host (a game engine, simulator or robot runtime) supplies pose samples and,
optionally, a list of currently visible objects. The decision engine turns
them into the working memory's visuo-spatial fields once per decision tick.

Spatial rounding rationale:
- Positions and heading are rendered with one decimal place
- Near-identical poses collapse into the same text, so the fuzzy cache match
  sees them as the same situation
- ``-0.0`` is normalized to ``0.0`` so tiny jitter around the origin does not
  change the prompt

Usage:
    supplier = StaticPoseSupplier(PoseSample(x=3.04, y=0.0, z=4.96, yaw=90.0))
    describe_pose(supplier.sample())
    # 'Position X:3.0, Y:0.0, Z:5.0. Facing direction: 90.0 degrees.'
"""

from typing import Callable, List, Optional, Protocol, Sequence

from dualmind.schemas import PoseSample


ObservationSupplier = Callable[[], Sequence[str]]
"""Callable returning the objects/features currently visible to the agent."""


class PoseSupplier(Protocol):
    """Yields the agent's current position and heading on demand."""

    def sample(self) -> PoseSample:
        ...


class StaticPoseSupplier:
    """Pose supplier backed by a mutable sample; useful for demos and tests."""

    def __init__(self, pose: PoseSample) -> None:
        self.pose = pose

    def sample(self) -> PoseSample:
        return self.pose

    def move_to(self, x: float, y: float, z: float, yaw: Optional[float] = None) -> None:
        self.pose = PoseSample(x=x, y=y, z=z, yaw=self.pose.yaw if yaw is None else yaw)


def _one_decimal(value: float) -> str:
    rounded = round(value, 1) + 0.0  # adding 0.0 folds -0.0 into 0.0
    return f"{rounded:.1f}"


def describe_pose(pose: PoseSample) -> str:
    """Render a pose as the working memory's spatial context string."""

    return (
        f"Position X:{_one_decimal(pose.x)}, Y:{_one_decimal(pose.y)}, "
        f"Z:{_one_decimal(pose.z)}. Facing direction: {_one_decimal(pose.yaw)} degrees."
    )


class StaticObservations:
    """Observation supplier that always reports the same objects."""

    def __init__(self, observations: Sequence[str]) -> None:
        self.observations: List[str] = list(observations)

    def __call__(self) -> List[str]:
        return list(self.observations)
