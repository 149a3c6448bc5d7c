"""Unit tests for the core schema building blocks."""

import pytest
from pydantic import ValidationError

from dualmind.schemas import (
    ActionKind,
    ActionOutcomeRecord,
    AgentAction,
    BehaviourCacheEntry,
    MomentRecord,
    PoseSample,
)


def test_action_kind_is_case_insensitive():
    assert AgentAction(action="MOVE").kind is ActionKind.MOVE
    assert AgentAction(action=" Look ").kind is ActionKind.LOOK
    assert AgentAction(action="dance").kind is ActionKind.UNRECOGNIZED


def test_recognized_kinds_exclude_unrecognized():
    kinds = ActionKind.recognized()
    assert ActionKind.UNRECOGNIZED not in kinds
    assert {kind.value for kind in kinds} == {"move", "jump", "wait", "speak", "look"}


def test_action_defaults():
    action = AgentAction(action="wait")
    assert action.text == ""
    assert action.confidence == 0.0
    assert (action.target_x, action.target_y, action.target_z) == (0.0, 0.0, 0.0)


def test_confidence_bounds():
    with pytest.raises(ValidationError):
        AgentAction(action="move", confidence=-0.1)


def test_outcome_summary_format():
    action = AgentAction(action="move", target_x=3.0, target_y=0.0, target_z=5.04, text="Heading out")
    assert action.outcome_summary() == "Action: move to (3.0, 5.0) | Monologue: Heading out"

    record = ActionOutcomeRecord.for_action(action)
    assert record.outcome_summary == action.outcome_summary()


def test_records_are_frozen():
    entry = BehaviourCacheEntry(context_prompt="prompt", action=AgentAction(action="jump"))
    with pytest.raises(ValidationError):
        entry.context_prompt = "other"

    moment = MomentRecord(
        spatial_context="Position X:0.0, Y:0.0, Z:0.0. Facing direction: 0.0 degrees.",
        visual_observations_snapshot=["crate"],
        moment_action_outcome="jump",
    )
    assert moment.visual_observations_snapshot == ("crate",)
    assert moment.timestamp.tzinfo is not None


def test_pose_position():
    assert PoseSample(x=1.0, y=2.0, z=3.0).position == (1.0, 2.0, 3.0)
