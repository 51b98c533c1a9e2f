"""Tests for the simulation session: commit, reset, log and listeners."""

import pytest

from hizawye.engine import CycleEngine
from hizawye.errors import UnknownConcept
from hizawye.layout import LayoutOracle
from hizawye.random_source import ScriptedRandomSource
from hizawye.scenario import canonical_snapshot
from hizawye.schemas import ConceptNode, Goal, GoalQueue, Severity
from hizawye.simulation import NOT_STARTED_MESSAGE, RESET_MESSAGE, Simulation
from hizawye.store import StateStore


def make_simulation(draws, **kwargs) -> Simulation:
    kwargs.setdefault("engine", CycleEngine())
    return Simulation(rng=ScriptedRandomSource(draws, cycle=True), verbose=False, **kwargs)


def test_new_session_starts_from_canonical_snapshot():
    simulation = make_simulation([0.9])

    assert simulation.state == canonical_snapshot()
    assert [entry.message for entry in simulation.log] == [NOT_STARTED_MESSAGE]
    assert simulation.cycle == 0


def test_run_cycle_commits_state_and_appends_events():
    simulation = make_simulation([0.9])

    events = simulation.run_cycle()

    assert simulation.cycle == 1
    assert simulation.state.memory.nodes["belief system"].understood is True
    assert simulation.log.entries[1:] == events
    assert events[-1].severity == Severity.SUCCESS


def test_log_is_bounded_across_many_cycles():
    simulation = make_simulation([0.0])

    simulation.run(40)

    assert len(simulation.log) == 21
    assert NOT_STARTED_MESSAGE not in [entry.message for entry in simulation.log]


def test_reset_restores_snapshot_after_divergence():
    simulation = make_simulation([0.0])
    simulation.run(12)
    assert simulation.state != canonical_snapshot()

    state = simulation.reset()

    assert state == canonical_snapshot()
    assert simulation.state == canonical_snapshot()
    assert [entry.message for entry in simulation.log] == [RESET_MESSAGE]
    assert simulation.cycle == 0


def test_reset_is_not_affected_by_mutating_the_snapshot_or_live_state():
    snapshot = canonical_snapshot()
    simulation = make_simulation([0.9], snapshot=snapshot)

    snapshot.goals.pop_front()
    simulation.state.memory.nodes["knowledge"] = ConceptNode(x=1, y=1, understood=True)
    simulation.run_cycle()

    assert simulation.reset() == canonical_snapshot()


def test_failed_cycle_leaves_session_untouched():
    snapshot = canonical_snapshot()
    snapshot.goals = GoalQueue(active=[Goal.deepen("ghost")])
    simulation = make_simulation([0.9], snapshot=snapshot)
    before = simulation.state.model_copy(deep=True)

    with pytest.raises(UnknownConcept):
        simulation.run_cycle()

    assert simulation.state == before
    assert len(simulation.log) == 1
    assert simulation.cycle == 0


def test_cycle_listeners_receive_before_and_after():
    calls = []
    simulation = make_simulation(
        [0.9],
        cycle_listeners=[lambda cycle, before, after, events: calls.append((cycle, before, after, events))],
    )

    events = simulation.run_cycle()

    assert len(calls) == 1
    cycle, before, after, seen = calls[0]
    assert cycle == 1
    assert before == canonical_snapshot()
    assert after is simulation.state
    assert seen == events


def test_verbose_session_prints_events(capsys, monkeypatch):
    monkeypatch.setenv("HIZAWYE_NO_COLOR", "1")
    simulation = Simulation(rng=ScriptedRandomSource([0.9]), engine=CycleEngine(), verbose=True)

    simulation.run_cycle()

    out = capsys.readouterr().out
    assert "[i] Goal-directed focus: belief system" in out
    assert "[ok] understood belief system; storing memory" in out


def test_state_store_commit_and_reset():
    store = StateStore(canonical_snapshot())
    changed = canonical_snapshot()
    changed.focus = "knowledge"

    store.commit(changed)
    assert store.state.focus == "knowledge"

    assert store.reset().focus == "belief system"
    assert store.canonical == canonical_snapshot()
    assert store.canonical is not store.canonical


def test_layout_is_deterministic():
    layout = LayoutOracle()
    parent = ConceptNode(x=50, y=20)

    assert layout.place(parent, 0) == (40, 45)
    assert layout.place(parent, 1) == (55, 45)
    assert layout.place(parent, 1) == layout.place(parent, 1)
    assert LayoutOracle().place(ConceptNode(x=2, y=90), 0) == (0, 100)


def test_zero_log_capacity_is_rejected():
    with pytest.raises(ValueError):
        make_simulation([0.9], log_capacity=0)


def test_listener_may_reset_the_session():
    def reset_on_first_cycle(cycle, before, after, events):
        if cycle == 1:
            simulation.reset()

    simulation = make_simulation([0.9], cycle_listeners=[reset_on_first_cycle])

    simulation.run_cycle()

    assert simulation.state == canonical_snapshot()
    assert simulation.cycle == 0
    assert [entry.message for entry in simulation.log] == [RESET_MESSAGE]
