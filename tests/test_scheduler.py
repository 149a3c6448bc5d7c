"""Tests for the fast/slow decision scheduler."""

import asyncio
import json

import pytest

from dualmind.cognition.cadence import DecisionCadence, Interval
from dualmind.engine import DecisionEngine
from dualmind.memory import AgentWorkingMemory, BehaviourCache, LongTermMemory
from dualmind.perception import StaticPoseSupplier
from dualmind.scheduler import DecisionScheduler, build_cadence
from dualmind.schemas import AgentAction, PoseSample


WAIT_RESPONSE = json.dumps({"action": "wait", "text": "Observing", "confidence": 0.5})


class GatedClient:
    def __init__(self, gate: asyncio.Event | None = None, error: Exception | None = None):
        self.gate = gate
        self.error = error
        self.calls = 0

    async def complete(self, prompt: str) -> str:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return WAIT_RESPONSE


class CountingEngine(DecisionEngine):
    """Engine that counts reflexive cycles."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.reactions = 0

    def react(self):
        self.reactions += 1
        return super().react()


class NullExecutor:
    def move(self, x, y, z):
        pass

    def look(self, direction_x, direction_y):
        pass

    def jump(self):
        pass

    def speak(self, text):
        pass


def _engine(client) -> CountingEngine:
    return CountingEngine(
        reasoning_client=client,
        executor=NullExecutor(),
        pose_supplier=StaticPoseSupplier(PoseSample(x=0.0, y=0.0, z=0.0)),
        working_memory=AgentWorkingMemory(core_self_concept=["Goal: stay put"]),
        long_term_memory=LongTermMemory(),
        behaviour_cache=BehaviourCache(),
        name="sentry",
    )


def test_interval_is_due():
    interval = Interval(2.0)
    assert interval.is_due(now=100.0, last_run=None)
    assert not interval.is_due(now=101.9, last_run=100.0)
    assert interval.is_due(now=102.0, last_run=100.0)


def test_cadence_rejects_slow_shorter_than_fast():
    with pytest.raises(ValueError):
        build_cadence(fast=2.0, slow=0.5)


@pytest.mark.asyncio
async def test_first_tick_runs_both_paths_then_intervals_are_independent():
    gate = asyncio.Event()
    client = GatedClient(gate)
    engine = _engine(client)
    scheduler = DecisionScheduler(engine, DecisionCadence(fast=Interval(0.5), slow=Interval(2.0)))

    scheduler.tick(now=0.0)
    assert engine.reactions == 1
    assert scheduler.deliberations_started == 1

    scheduler.tick(now=0.25)
    scheduler.tick(now=0.5)
    scheduler.tick(now=1.0)
    assert engine.reactions == 3
    assert scheduler.slow_ticks == 1

    # The reasoning call is still in flight: the slow tick fires but starts nothing
    scheduler.tick(now=2.0)
    assert scheduler.slow_ticks == 2
    assert scheduler.deliberations_started == 1
    await asyncio.sleep(0)
    assert client.calls == 1

    gate.set()
    await scheduler.drain()
    assert len(engine.behaviour_cache) == 1

    scheduler.tick(now=4.0)
    assert scheduler.deliberations_started == 2
    await scheduler.drain()
    assert client.calls == 2


@pytest.mark.asyncio
async def test_run_stops_after_max_ticks_and_drains():
    client = GatedClient()
    engine = _engine(client)
    scheduler = DecisionScheduler(engine, build_cadence(0.0, 0.0), poll_interval=0)

    await scheduler.run(max_ticks=3)

    assert scheduler.fast_ticks == 3
    assert scheduler.pending_deliberation is None
    assert len(engine.long_term_memory.moments) >= 1
    assert not engine.is_deliberating


@pytest.mark.asyncio
async def test_crashed_deliberation_is_reported(capsys):
    client = GatedClient(error=RuntimeError("backend exploded"))
    engine = _engine(client)
    scheduler = DecisionScheduler(engine, poll_interval=0)

    scheduler.tick(now=0.0)
    await scheduler.drain()
    await asyncio.sleep(0)

    assert "Deliberation crashed: RuntimeError: backend exploded" in capsys.readouterr().out
    assert not engine.is_deliberating


@pytest.mark.asyncio
async def test_stop_exits_run_loop():
    engine = _engine(GatedClient())
    scheduler = DecisionScheduler(engine, poll_interval=0)

    async def stop_soon():
        await asyncio.sleep(0)
        scheduler.stop()

    await asyncio.gather(scheduler.run(), stop_soon())
    assert scheduler.fast_ticks >= 1


class ExplodingExecutor(NullExecutor):
    def jump(self):
        raise RuntimeError("actuator jammed")


@pytest.mark.asyncio
async def test_fast_path_error_is_logged_and_loop_continues(capsys):
    engine = CountingEngine(
        reasoning_client=GatedClient(),
        executor=ExplodingExecutor(),
        pose_supplier=StaticPoseSupplier(PoseSample(x=0.0, y=0.0, z=0.0)),
        working_memory=AgentWorkingMemory(core_self_concept=["Goal: stay put"]),
        long_term_memory=LongTermMemory(),
        behaviour_cache=BehaviourCache(),
        name="sentry",
    )
    engine.update_working_memory()
    engine.behaviour_cache.add(engine.build_prompt(), AgentAction(action="jump"))
    scheduler = DecisionScheduler(engine, build_cadence(0.0, 100.0), poll_interval=0)

    await scheduler.run(max_ticks=3)

    assert scheduler.fast_ticks == 3
    assert engine.reactions == 3
    assert "Reflexive cycle failed: RuntimeError: actuator jammed" in capsys.readouterr().out
