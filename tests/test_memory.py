"""Tests for the working memory, long-term memory and behaviour cache."""

import pytest
from pydantic import ValidationError

from dualmind.config import Config
from dualmind.memory import AgentWorkingMemory, BehaviourCache, LongTermMemory
from dualmind.schemas import AgentAction, MomentRecord


def _action(index: int) -> AgentAction:
    return AgentAction(action="move", target_x=float(index), text=f"step {index}")


def test_episodic_buffer_never_exceeds_capacity_and_evicts_oldest():
    memory = AgentWorkingMemory()

    for index in range(12):
        memory.record_action(_action(index))
        assert len(memory.recent_actions_and_outcomes) <= 5

    kept = [record.action.target_x for record in memory.recent_actions_and_outcomes]
    assert kept == [7.0, 8.0, 9.0, 10.0, 11.0]
    assert memory.latest_outcome().action.target_x == 11.0


def test_record_action_builds_outcome_summary():
    memory = AgentWorkingMemory()
    record = memory.record_action(
        AgentAction(action="move", target_x=3.04, target_y=0.0, target_z=5.0, text="Heading out")
    )
    assert record.outcome_summary == "Action: move to (3.0, 5.0) | Monologue: Heading out"


def test_custom_episodic_capacity():
    memory = AgentWorkingMemory(episodic_capacity=2)
    for index in range(4):
        memory.record_action(_action(index))
    assert [r.action.target_x for r in memory.recent_actions_and_outcomes] == [2.0, 3.0]

    with pytest.raises(ValueError):
        AgentWorkingMemory(episodic_capacity=0)


def test_exchanges_and_visuals_are_bounded():
    memory = AgentWorkingMemory(exchange_capacity=3, visual_capacity=2)
    for index in range(5):
        memory.add_exchange(f"line {index}")
    assert memory.recent_exchanges == ["line 2", "line 3", "line 4"]

    memory.set_visual_observations(["tree", "rock", "river"])
    assert memory.recent_visual_observations == ["tree", "rock"]


def test_pending_reflection_is_consumed_once():
    memory = AgentWorkingMemory()
    assert memory.take_pending_reflection() is None

    memory.add_reflection("The tree hides the path.")
    assert memory.pending_reflection == "The tree hides the path."
    assert memory.take_pending_reflection() == "The tree hides the path."
    assert memory.take_pending_reflection() is None
    # The executive-level list keeps the reflection for prompting.
    assert memory.reflections == ["The tree hides the path."]


def test_long_term_memory_is_append_only():
    ltm = LongTermMemory()
    ltm.add_moment(MomentRecord(spatial_context="origin", moment_action_outcome="move"))
    ltm.add_reflection("Keep away from the river.")

    assert len(ltm.moments) == 1
    assert ltm.reflections == ("Keep away from the river.",)
    assert isinstance(ltm.moments, tuple)
    with pytest.raises(ValidationError):
        ltm.moments[0].spatial_context = "elsewhere"


def test_behaviour_cache_is_unbounded_by_default():
    cache = BehaviourCache()
    for index in range(50):
        cache.add(f"prompt {index}", _action(index))
    assert len(cache) == 50
    assert cache.entries[0].context_prompt == "prompt 0"


def test_behaviour_cache_capacity_evicts_oldest():
    cache = BehaviourCache(capacity=2)
    for index in range(3):
        cache.add(f"prompt {index}", _action(index))
    assert [entry.context_prompt for entry in cache] == ["prompt 1", "prompt 2"]

    with pytest.raises(ValueError):
        BehaviourCache(capacity=0)


def test_agent_action_is_immutable():
    action = _action(1)
    with pytest.raises(ValidationError):
        action.text = "changed"


def test_from_config_applies_configured_capacities(monkeypatch):
    monkeypatch.setattr(Config, "EPISODIC_CAPACITY", 2)
    monkeypatch.setattr(Config, "BEHAVIOUR_CACHE_CAPACITY", 1)

    memory = AgentWorkingMemory.from_config(core_self_concept=["Goal: explore"])
    for x in range(4):
        memory.record_action(AgentAction(action="move", target_x=float(x)))
    assert [r.action.target_x for r in memory.recent_actions_and_outcomes] == [2.0, 3.0]
    assert memory.core_self_concept == ["Goal: explore"]

    cache = BehaviourCache.from_config()
    cache.add("first", AgentAction(action="jump"))
    cache.add("second", AgentAction(action="wait"))
    assert [entry.context_prompt for entry in cache] == ["second"]


def test_from_config_keeps_explicit_capacity(monkeypatch):
    monkeypatch.setattr(Config, "EPISODIC_CAPACITY", 2)
    assert AgentWorkingMemory.from_config(episodic_capacity=4).episodic_capacity == 4
