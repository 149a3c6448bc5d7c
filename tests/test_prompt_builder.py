"""Tests for prompt construction from working memory."""

from dualmind.cognition.prompts import OUTPUT_FIELDS, PromptTemplate
from dualmind.cognition.renderers import build_prompt, render_prompt
from dualmind.memory import AgentWorkingMemory
from dualmind.perception import describe_pose
from dualmind.schemas import AgentAction, PoseSample


def _memory() -> AgentWorkingMemory:
    memory = AgentWorkingMemory(
        core_self_concept=["Goal: reach the destination marker", "Personality: cautious"],
        plans=["walk toward it while checking for danger"],
    )
    memory.set_spatial_context(describe_pose(PoseSample(x=3.04, y=0.0, z=4.98, yaw=90.0)))
    memory.set_visual_observations(["oak tree ten meters ahead"])
    memory.add_exchange("Bob: the bridge is out")
    memory.add_reflection("Bob has been right before")
    memory.record_action(AgentAction(action="look", camera_direction_x=0.5, text="scanning"))
    return memory


def test_prompt_contains_all_sections_and_output_schema():
    prompt = build_prompt(_memory())

    for label in (
        "1. CORE SELF-CONCEPT",
        "2. SPATIAL CONTEXT",
        "3. VERBAL LOOP",
        "4. EPISODIC HISTORY",
        "5. CENTRAL EXECUTIVE",
    ):
        assert label in prompt
    for field_name in OUTPUT_FIELDS:
        assert field_name in prompt
    assert "Kinds: move, jump, wait, speak, look." in prompt

    assert "Goal: reach the destination marker; Personality: cautious" in prompt
    assert "Position X:3.0, Y:0.0, Z:5.0. Facing direction: 90.0 degrees." in prompt
    assert "Bob: the bridge is out" in prompt
    assert "Action: look to (0.0, 0.0) | Monologue: scanning" in prompt
    assert "Bob has been right before" in prompt


def test_prompt_is_deterministic():
    assert build_prompt(_memory()) == build_prompt(_memory())


def test_near_duplicate_positions_render_identically():
    near = describe_pose(PoseSample(x=2.96, y=0.02, z=5.01, yaw=90.04))
    far = describe_pose(PoseSample(x=3.04, y=-0.01, z=4.98, yaw=89.96))
    assert near == far == "Position X:3.0, Y:0.0, Z:5.0. Facing direction: 90.0 degrees."


def test_negative_zero_is_normalized():
    assert "X:0.0" in describe_pose(PoseSample(x=-0.04, y=0.0, z=0.0))


def test_render_does_not_mutate_memory():
    memory = _memory()
    before = (list(memory.recent_exchanges), list(memory.recent_actions_and_outcomes))
    build_prompt(memory)
    assert (list(memory.recent_exchanges), list(memory.recent_actions_and_outcomes)) == before


def test_custom_template():
    template = PromptTemplate(name="terse", body="At {{spatial_context}} seeing {{visual_observations}}")
    rendered = render_prompt(template, _memory())
    assert rendered == (
        "At Position X:3.0, Y:0.0, Z:5.0. Facing direction: 90.0 degrees. "
        "seeing oak tree ten meters ahead"
    )
