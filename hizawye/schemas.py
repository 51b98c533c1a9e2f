"""
Pydantic schemas for the Hizawye consciousness cycle.

All data structures the cycle engine reads and writes are defined here.

Design Philosophy:
- Leaf values (nodes, edges, goals, log entries) are frozen; changing one means
  replacing it, so two states can safely share the leaves they have in common
- Containers (drives, goal queue, memory graph, aggregate state) are ordinary
  models the engine copies before mutating
- Goals are a tagged variant (kind + concept id) instead of free text, so the
  engine never has to parse a goal to find out what it is about
- Pydantic validation keeps drives and node positions inside [0, 100]
"""

import re
from collections import deque
from enum import Enum
from typing import Deque, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .errors import MalformedGoal, UnknownConcept

# Opaque identifier naming a node in the memory graph ("belief system", "knowledge-A").
ConceptId = str

DRIVE_MIN = 0
DRIVE_MAX = 100


def clamp(value: int, low: int = DRIVE_MIN, high: int = DRIVE_MAX) -> int:
    """Clamp an integer into [low, high]."""
    return max(low, min(high, value))


# ============================================================================
# Memory Graph Schemas
# ============================================================================


class ConceptNode(BaseModel):
    """A concept in the agent's memory graph.

    Position is expressed in percent of the drawing area so the rendering side
    can lay nodes out without knowing pixel sizes. ``understood`` starts False
    and is flipped once, when a DeepenUnderstanding goal for the concept succeeds.
    """

    model_config = ConfigDict(frozen=True)

    x: float = Field(..., ge=0, le=100, description="Horizontal position (percent)")
    y: float = Field(..., ge=0, le=100, description="Vertical position (percent)")
    understood: bool = Field(False, description="Whether the concept has been understood")

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


class Edge(BaseModel):
    """Undirected relationship between two concepts.

    ``source``/``target`` only record the order the edge was written in; the
    engine treats both endpoints the same. Duplicate edges are allowed.
    """

    model_config = ConfigDict(frozen=True)

    source: ConceptId
    target: ConceptId

    def touches(self, concept: ConceptId) -> bool:
        return concept in (self.source, self.target)

    def other(self, concept: ConceptId) -> ConceptId:
        """Return the endpoint opposite ``concept``."""
        return self.target if self.source == concept else self.source


class MemoryGraph(BaseModel):
    """Concept nodes keyed by id plus the list of edges between them."""

    nodes: Dict[ConceptId, ConceptNode] = Field(
        default_factory=dict, description="Map of concept_id → node"
    )
    edges: List[Edge] = Field(default_factory=list, description="Undirected edges")

    def has(self, concept: ConceptId) -> bool:
        return concept in self.nodes

    def node(self, concept: ConceptId, *, operation: Optional[str] = None) -> ConceptNode:
        """Return the node for ``concept``.

        Raises:
            UnknownConcept: If the concept has no node
        """
        try:
            return self.nodes[concept]
        except KeyError:
            raise UnknownConcept(concept, operation) from None

    def neighbors(self, concept: ConceptId) -> List[ConceptId]:
        """All concepts joined to ``concept`` by an edge, in edge order.

        Duplicate edges yield duplicate neighbors, so a concept linked twice is
        twice as likely to be picked by a uniform draw over this list.
        """
        return [edge.other(concept) for edge in self.edges if edge.touches(concept)]


# ============================================================================
# Goal Schemas
# ============================================================================


class GoalKind(str, Enum):
    """The kinds of work the agent can queue."""

    DEEPEN_UNDERSTANDING = "deepen_understanding"
    BREAK_DOWN_CONCEPT = "break_down_concept"
    EXPAND_KNOWLEDGE = "expand_knowledge"


# Text forms used by snapshot files and on-screen goal lists.
_GOAL_TEMPLATES = {
    GoalKind.DEEPEN_UNDERSTANDING: "Deepen understanding of the concept: '{concept}'",
    GoalKind.BREAK_DOWN_CONCEPT: "Break down the concept: '{concept}'",
    GoalKind.EXPAND_KNOWLEDGE: "Expand knowledge from '{concept}'",
}

_GOAL_MARKERS = (
    ("Deepen understanding", GoalKind.DEEPEN_UNDERSTANDING),
    ("Break down", GoalKind.BREAK_DOWN_CONCEPT),
    ("Expand knowledge", GoalKind.EXPAND_KNOWLEDGE),
)

# Greedy up to the closing quote so concepts may contain apostrophes.
_QUOTED_CONCEPT = re.compile(r"'(.*)'\s*$")


class Goal(BaseModel):
    """A pending unit of work: a goal kind applied to one concept."""

    model_config = ConfigDict(frozen=True)

    kind: GoalKind
    concept: ConceptId = Field(..., min_length=1)

    @classmethod
    def deepen(cls, concept: ConceptId) -> "Goal":
        return cls(kind=GoalKind.DEEPEN_UNDERSTANDING, concept=concept)

    @classmethod
    def break_down(cls, concept: ConceptId) -> "Goal":
        return cls(kind=GoalKind.BREAK_DOWN_CONCEPT, concept=concept)

    @classmethod
    def expand(cls, concept: ConceptId) -> "Goal":
        return cls(kind=GoalKind.EXPAND_KNOWLEDGE, concept=concept)

    @classmethod
    def parse(cls, text: str) -> "Goal":
        """Build a goal from its text form.

        The kind comes from the leading phrase and the concept from the quoted
        span that ends the text, apostrophes included:
        "Break down the concept: 'knowledge'" →
        Goal(kind=BREAK_DOWN_CONCEPT, concept="knowledge").

        Raises:
            MalformedGoal: If the kind phrase or a non-empty quoted concept is missing
        """
        kind = next((kind for marker, kind in _GOAL_MARKERS if marker in text), None)
        if kind is None:
            raise MalformedGoal(text, "unrecognized goal kind")
        match = _QUOTED_CONCEPT.search(text)
        if match is None or not match.group(1):
            raise MalformedGoal(text, "no quoted concept id")
        return cls(kind=kind, concept=match.group(1))

    def describe(self) -> str:
        return _GOAL_TEMPLATES[self.kind].format(concept=self.concept)


class GoalQueue(BaseModel):
    """Active goals (front = current) and the goals completed so far.

    ``active`` is a deque so the front/back operations the engine relies on are
    explicit. Completed goals are only ever appended.
    """

    active: Deque[Goal] = Field(default_factory=deque, description="Pending goals, head first")
    completed: List[Goal] = Field(default_factory=list, description="Goals resolved successfully")

    def head(self) -> Optional[Goal]:
        return self.active[0] if self.active else None

    def push_front(self, goal: Goal) -> None:
        self.active.appendleft(goal)

    def push_back(self, goal: Goal) -> None:
        self.active.append(goal)

    def pop_front(self) -> Goal:
        return self.active.popleft()

    def replace_head(self, goal: Goal) -> Goal:
        """Swap the head goal for ``goal`` in place and return the old head."""
        previous = self.active[0]
        self.active[0] = goal
        return previous


# ============================================================================
# Drives, Log Entries, Aggregate State
# ============================================================================


class DriveState(BaseModel):
    """The agent's three motivational drives, each an integer in [0, 100].

    Curiosity is carried through every step untouched; only boredom and pain
    respond to what happens during a cycle.
    """

    model_config = ConfigDict(validate_assignment=True)

    curiosity: int = Field(0, ge=DRIVE_MIN, le=DRIVE_MAX)
    boredom: int = Field(0, ge=DRIVE_MIN, le=DRIVE_MAX)
    pain: int = Field(0, ge=DRIVE_MIN, le=DRIVE_MAX)


class Severity(str, Enum):
    """Severity of a log entry; drives its color on screen."""

    INFO = "info"
    SUCCESS = "success"
    WARN = "warn"
    CRITICAL = "critical"


class LogEntry(BaseModel):
    """One line of the cycle's thought log."""

    model_config = ConfigDict(frozen=True)

    severity: Severity = Severity.INFO
    message: str

    @classmethod
    def info(cls, message: str) -> "LogEntry":
        return cls(severity=Severity.INFO, message=message)

    @classmethod
    def success(cls, message: str) -> "LogEntry":
        return cls(severity=Severity.SUCCESS, message=message)

    @classmethod
    def warn(cls, message: str) -> "LogEntry":
        return cls(severity=Severity.WARN, message=message)

    @classmethod
    def critical(cls, message: str) -> "LogEntry":
        return cls(severity=Severity.CRITICAL, message=message)


class SimulationState(BaseModel):
    """Complete state of the simulated mind between two cycles.

    State composition:
    - drives: curiosity, boredom, pain
    - goals: active queue and completed list
    - memory: concept graph
    - focus: concept currently attended to (None when nothing is in focus)

    Every concept referenced by focus, a goal or an edge is expected to have a
    node in memory; ``reference_problems()`` lists the ones that do not.
    """

    drives: DriveState = Field(default_factory=DriveState)
    goals: GoalQueue = Field(default_factory=GoalQueue)
    memory: MemoryGraph = Field(default_factory=MemoryGraph)
    focus: Optional[ConceptId] = None

    def reference_problems(self) -> List[str]:
        problems: List[str] = []
        if self.focus is not None and not self.memory.has(self.focus):
            problems.append(f"focus '{self.focus}' has no node")
        for goal in list(self.goals.active) + self.goals.completed:
            if not self.memory.has(goal.concept):
                problems.append(f"goal \"{goal.describe()}\" targets unknown concept '{goal.concept}'")
        for edge in self.memory.edges:
            for endpoint in (edge.source, edge.target):
                if not self.memory.has(endpoint):
                    problems.append(f"edge {edge.source} -- {edge.target} references unknown concept '{endpoint}'")
        return problems
