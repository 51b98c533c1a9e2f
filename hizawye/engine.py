"""
CycleEngine: the consciousness cycle step function.

Each call to ``step()`` advances the simulated mind by exactly one cycle:

Goal-directed mode (active queue not empty):
1. Focus on the concept of the head goal
2. Draw once from the RandomSource; the thought fails on a low draw or when
   pain is already high
3. Resolve the head goal by kind:
   - DeepenUnderstanding: success marks the concept understood and completes
     the goal; failure raises pain, and once pain crosses its threshold the goal
     is swapped for BreakDownConcept (strategic failure)
   - BreakDownConcept: always succeeds, creating two sub-concepts and queueing
     a DeepenUnderstanding goal for each ahead of everything else
   - ExpandKnowledge: resolved according to the configured expand policy

Idle mode (active queue empty):
1. Boredom rises
2. Past the boredom threshold, an ExpandKnowledge goal is queued on the
   current focus and boredom resets
3. Otherwise the mind wanders to a random neighbor of the focus, if it has any

Transactional contract: the input state is never mutated. The engine works on
a copy of the containers it changes (drives, goal queue, and the memory graph
only when a step writes to it) and returns it with the ordered events. If any
CycleError is raised, nothing is returned and the caller's state is exactly
what it was.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .config import EXPAND_POLICIES
from .errors import UnhandledGoalKind
from .layout import LayoutOracle
from .random_source import RandomSource
from .schemas import (
    ConceptId,
    ConceptNode,
    Edge,
    Goal,
    GoalKind,
    LogEntry,
    SimulationState,
    clamp,
)


class CycleParameters(BaseModel):
    """Tunable constants of the cycle. Defaults reproduce the reference behavior."""

    model_config = ConfigDict(frozen=True)

    failure_chance: float = Field(0.25, ge=0, le=1, description="Draws below this fail")
    pain_failure_gate: int = Field(50, description="Pain above this always fails")
    pain_per_failure: int = Field(25, ge=0)
    pain_threshold: int = Field(80, description="Pain at or above this triggers a breakdown")
    pain_relief: int = Field(20, ge=0, description="Pain removed by a success")
    boredom_per_idle: int = Field(15, ge=0)
    boredom_threshold: int = Field(75, description="Boredom at or above this seeks novelty")


class CycleEngine:
    """Applies one consciousness cycle to a SimulationState.

    The engine itself holds no simulation state; it can be shared between any
    number of sessions. Randomness is passed in per call so each session owns
    its own RandomSource.

    Example:
        engine = CycleEngine()
        state, events = engine.step(state, SystemRandomSource(seed=7))
    """

    def __init__(
        self,
        parameters: Optional[CycleParameters] = None,
        layout: Optional[LayoutOracle] = None,
        expand_policy: str = "discard",
    ):
        if expand_policy not in EXPAND_POLICIES:
            raise ValueError(
                f"Unknown expand policy '{expand_policy}' (expected one of {', '.join(EXPAND_POLICIES)})"
            )
        self.parameters = parameters or CycleParameters()
        self.layout = layout or LayoutOracle()
        self.expand_policy = expand_policy

    def step(self, state: SimulationState, rng: RandomSource) -> Tuple[SimulationState, List[LogEntry]]:
        """Advance ``state`` by one cycle.

        Args:
            state: State before the cycle (not modified)
            rng: Source of this cycle's random draw

        Returns:
            (new state, events emitted during the cycle in order)

        Raises:
            UnknownConcept: If the head goal, a breakdown parent, or the focus an
                ExpandKnowledge goal would be queued on has no node
            UnhandledGoalKind: If an ExpandKnowledge goal is reached under the
                ``strict`` expand policy
        """
        working = _working_copy(state)
        events: List[LogEntry] = []

        if working.goals.active:
            self._pursue_goal(working, rng, events)
        else:
            self._idle(working, rng, events)

        return working, events

    # ------------------------------------------------------------------
    # Goal-directed mode
    # ------------------------------------------------------------------

    def _pursue_goal(self, state: SimulationState, rng: RandomSource, events: List[LogEntry]) -> None:
        goal = state.goals.head()
        concept = goal.concept
        state.memory.node(concept, operation="focus on it")

        state.focus = concept
        events.append(LogEntry.info(f"Goal-directed focus: {concept}"))

        # Draw first so every goal-directed cycle consumes exactly one value.
        draw = rng.uniform()
        should_fail = draw < self.parameters.failure_chance or state.drives.pain > self.parameters.pain_failure_gate

        if goal.kind == GoalKind.DEEPEN_UNDERSTANDING:
            self._deepen(state, concept, should_fail, events)
        elif goal.kind == GoalKind.BREAK_DOWN_CONCEPT:
            self._break_down(state, concept, events)
        elif goal.kind == GoalKind.EXPAND_KNOWLEDGE:
            self._expand(state, concept, should_fail, events)
        else:  # pragma: no cover - GoalKind is closed
            raise UnhandledGoalKind(str(goal.kind), concept)

    def _deepen(self, state: SimulationState, concept: ConceptId, should_fail: bool, events: List[LogEntry]) -> None:
        drives = state.drives
        params = self.parameters

        if should_fail:
            events.append(LogEntry.warn("response malformed; rejecting thought"))
            drives.pain = clamp(drives.pain + params.pain_per_failure)
            if drives.pain >= params.pain_threshold:
                events.append(LogEntry.critical(f"pain threshold reached for {concept}"))
                events.append(LogEntry.info("strategy: break down the concept"))
                state.goals.replace_head(Goal.break_down(concept))
                drives.pain = 0
            return

        events.append(LogEntry.success(f"understood {concept}; storing memory"))
        memory = _writable_memory(state)
        node = memory.node(concept, operation="mark it understood")
        memory.nodes[concept] = node.model_copy(update={"understood": True})
        state.goals.completed.append(state.goals.pop_front())
        drives.pain = clamp(drives.pain - params.pain_relief)

    def _break_down(self, state: SimulationState, concept: ConceptId, events: List[LogEntry]) -> None:
        memory = _writable_memory(state)
        parent = memory.node(concept, operation="break it down")

        events.append(LogEntry.success(f"broke down {concept}"))
        sub_concepts = [f"{concept}-A", f"{concept}-B"]
        events.append(LogEntry.info(f"new sub-concepts discovered: {', '.join(sub_concepts)}"))

        # Breakdown goals are discarded, not completed.
        state.goals.pop_front()

        # B is pushed first so A ends up at the very front.
        for index, sub in enumerate(reversed(sub_concepts)):
            if not memory.has(sub):
                x, y = self.layout.place(parent, index)
                memory.nodes[sub] = ConceptNode(x=x, y=y, understood=False)
            memory.edges.append(Edge(source=concept, target=sub))
            state.goals.push_front(Goal.deepen(sub))

    def _expand(self, state: SimulationState, concept: ConceptId, should_fail: bool, events: List[LogEntry]) -> None:
        if self.expand_policy == "deepen":
            self._deepen(state, concept, should_fail, events)
        elif self.expand_policy == "strict":
            raise UnhandledGoalKind(GoalKind.EXPAND_KNOWLEDGE.value, concept)
        else:
            events.append(LogEntry.warn(f"no strategy to expand knowledge from {concept}; dropping goal"))
            state.goals.pop_front()

    # ------------------------------------------------------------------
    # Idle mode
    # ------------------------------------------------------------------

    def _idle(self, state: SimulationState, rng: RandomSource, events: List[LogEntry]) -> None:
        drives = state.drives
        params = self.parameters

        events.append(LogEntry.info("idle; no active goals"))
        drives.boredom = clamp(drives.boredom + params.boredom_per_idle)

        if drives.boredom >= params.boredom_threshold:
            events.append(LogEntry.critical("boredom threshold reached; seeking novelty"))
            if state.focus is None:
                events.append(LogEntry.warn("no focus to expand from"))
            else:
                state.memory.node(state.focus, operation="expand knowledge from it")
                state.goals.push_back(Goal.expand(state.focus))
            drives.boredom = 0
            return

        if state.focus is None:
            return
        neighbors = state.memory.neighbors(state.focus)
        if not neighbors:
            return
        state.focus = rng.choice(neighbors)
        events.append(LogEntry.info(f"mind wanders to {state.focus}"))


def _working_copy(state: SimulationState) -> SimulationState:
    """Copy the containers every step may touch; memory is shared until written."""
    goals = state.goals.model_copy(
        update={"active": state.goals.active.copy(), "completed": list(state.goals.completed)}
    )
    return state.model_copy(update={"drives": state.drives.model_copy(), "goals": goals})


def _writable_memory(state: SimulationState):
    """Give ``state`` its own node map and edge list before the first write."""
    memory = state.memory.model_copy(
        update={"nodes": dict(state.memory.nodes), "edges": list(state.memory.edges)}
    )
    state.memory = memory
    return memory
