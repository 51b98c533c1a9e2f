"""
Hizawye - simulated consciousness cycle.

Evolves an agent's drives (curiosity, boredom, pain), goal queue and concept
memory graph one cycle at a time, including goal-directed focus, idle
wandering and strategic failure (breaking down a concept that keeps failing).

No file I/O required. No global state. Randomness is injected.
"""

__version__ = "0.1.0"

# Main session
from .simulation import Simulation

# Core engine
from .engine import CycleEngine, CycleParameters
from .event_log import EventLog
from .layout import LayoutOracle
from .random_source import RandomSource, SystemRandomSource, ScriptedRandomSource
from .store import StateStore

# Core schemas
from .schemas import (
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
)

# Errors
from .errors import (
    CycleError,
    MalformedGoal,
    SnapshotError,
    UnhandledGoalKind,
    UnknownConcept,
)

# Snapshot helpers
from .scenario import SnapshotLoader, canonical_snapshot

__all__ = [
    # Main class
    "Simulation",
    # Core engine
    "CycleEngine",
    "CycleParameters",
    "EventLog",
    "LayoutOracle",
    "RandomSource",
    "SystemRandomSource",
    "ScriptedRandomSource",
    "StateStore",
    # Schemas
    "ConceptNode",
    "DriveState",
    "Edge",
    "Goal",
    "GoalKind",
    "GoalQueue",
    "LogEntry",
    "MemoryGraph",
    "Severity",
    "SimulationState",
    # Errors
    "CycleError",
    "MalformedGoal",
    "SnapshotError",
    "UnhandledGoalKind",
    "UnknownConcept",
    # Snapshot helpers
    "SnapshotLoader",
    "canonical_snapshot",
]
