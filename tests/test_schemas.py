"""Unit tests for the core schema building blocks."""

import pytest
from pydantic import ValidationError

from hizawye.errors import MalformedGoal, UnknownConcept
from hizawye.schemas import (
    ConceptNode,
    DriveState,
    Edge,
    Goal,
    GoalKind,
    GoalQueue,
    LogEntry,
    MemoryGraph,
    Severity,
    SimulationState,
    clamp,
)


def test_concept_node_bounds_and_position():
    node = ConceptNode(x=50, y=20)
    assert node.position == (50, 20)
    assert node.understood is False

    with pytest.raises(ValidationError):
        ConceptNode(x=101, y=0)
    with pytest.raises(ValidationError):
        ConceptNode(x=0, y=-1)


def test_concept_node_is_frozen():
    node = ConceptNode(x=1, y=1)
    with pytest.raises(ValidationError):
        node.understood = True
    assert node.model_copy(update={"understood": True}).understood is True


def test_drive_state_rejects_out_of_range_values():
    drives = DriveState(curiosity=65)
    with pytest.raises(ValidationError):
        drives.pain = 101
    with pytest.raises(ValidationError):
        DriveState(boredom=-5)
    assert clamp(130) == 100
    assert clamp(-20) == 0


def test_goal_parse_reads_text_forms():
    assert Goal.parse("Deepen understanding of the concept: 'belief system'") == Goal.deepen("belief system")
    assert Goal.parse("Break down the concept: 'knowledge'") == Goal.break_down("knowledge")
    assert Goal.parse("Expand knowledge from 'creativity'") == Goal.expand("creativity")


def test_goal_describe_matches_parse():
    for goal in (Goal.deepen("x"), Goal.break_down("x-A"), Goal.expand("y"), Goal.deepen("Occam's razor")):
        assert Goal.parse(goal.describe()) == goal


def test_goal_parse_keeps_apostrophes_in_concept():
    goal = Goal.parse("Deepen understanding of the concept: 'Occam's razor'")
    assert goal == Goal.deepen("Occam's razor")


@pytest.mark.parametrize(
    "text",
    [
        "Contemplate the concept: 'knowledge'",
        "Deepen understanding of the concept: knowledge",
        "Break down the concept: ''",
    ],
)
def test_goal_parse_rejects_malformed_text(text):
    with pytest.raises(MalformedGoal) as excinfo:
        Goal.parse(text)
    assert excinfo.value.payload == text


def test_goal_requires_a_concept():
    with pytest.raises(ValidationError):
        Goal(kind=GoalKind.DEEPEN_UNDERSTANDING, concept="")


def test_goal_queue_front_and_back_operations():
    queue = GoalQueue(active=[Goal.deepen("a")])
    queue.push_front(Goal.deepen("b"))
    queue.push_back(Goal.expand("c"))
    assert queue.head() == Goal.deepen("b")

    previous = queue.replace_head(Goal.break_down("b"))
    assert previous == Goal.deepen("b")
    assert list(queue.active) == [Goal.break_down("b"), Goal.deepen("a"), Goal.expand("c")]

    assert queue.pop_front() == Goal.break_down("b")
    assert GoalQueue().head() is None


def test_memory_graph_neighbors_are_undirected_and_keep_duplicates():
    memory = MemoryGraph(
        nodes={name: ConceptNode(x=0, y=0) for name in ("a", "b", "c")},
        edges=[
            Edge(source="a", target="b"),
            Edge(source="c", target="a"),
            Edge(source="a", target="b"),
        ],
    )
    assert memory.neighbors("a") == ["b", "c", "b"]
    assert memory.neighbors("b") == ["a", "a"]
    assert memory.neighbors("missing") == []


def test_memory_graph_node_lookup_raises_unknown_concept():
    memory = MemoryGraph()
    with pytest.raises(UnknownConcept) as excinfo:
        memory.node("ghost", operation="mark it understood")
    assert excinfo.value.concept == "ghost"
    assert "mark it understood" in str(excinfo.value)


def test_log_entry_constructors():
    assert LogEntry.info("x").severity == Severity.INFO
    assert LogEntry.success("x").severity == Severity.SUCCESS
    assert LogEntry.warn("x").severity == Severity.WARN
    assert LogEntry.critical("x").severity == Severity.CRITICAL


def test_reference_problems_lists_dangling_ids():
    state = SimulationState(
        goals=GoalQueue(active=[Goal.deepen("ghost")]),
        memory=MemoryGraph(
            nodes={"a": ConceptNode(x=0, y=0)},
            edges=[Edge(source="a", target="b")],
        ),
        focus="nowhere",
    )
    problems = state.reference_problems()
    assert len(problems) == 3
    assert any("nowhere" in problem for problem in problems)
    assert any("ghost" in problem for problem in problems)
    assert any("'b'" in problem for problem in problems)


def test_simulation_state_json_round_trip():
    state = SimulationState(
        goals=GoalQueue(active=[Goal.deepen("a")]),
        memory=MemoryGraph(nodes={"a": ConceptNode(x=10, y=10)}),
        focus="a",
    )
    restored = SimulationState.model_validate_json(state.model_dump_json())
    assert restored == state
