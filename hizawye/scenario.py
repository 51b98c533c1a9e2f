"""
Snapshot loading for the consciousness cycle.

A snapshot is the full SimulationState a session starts from (and returns to
on reset). The built-in canonical snapshot is the "belief system" scenario;
others can be defined as JSON files.

Snapshot file structure:
```json
{
  "name": "Belief system",
  "drives": {"curiosity": 65, "boredom": 0, "pain": 0},
  "goals": {
    "active": ["Deepen understanding of the concept: 'belief system'"],
    "completed": []
  },
  "memory": {
    "nodes": {"belief system": {"x": 50, "y": 20, "understood": false}},
    "links": [{"source": "knowledge", "target": "belief system"}]
  },
  "focus": "belief system"
}
```

Goals may be written either as goal text (as above) or as structured
objects ({"kind": "break_down_concept", "concept": "knowledge"}). Edges may
be listed under "links" or "edges".

Usage:
    loader = SnapshotLoader()
    snapshot = loader.load("belief_system")
    simulation = Simulation(snapshot=snapshot)
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .config import Config
from .errors import MalformedGoal, SnapshotError
from .schemas import (
    ConceptNode,
    DriveState,
    Edge,
    Goal,
    GoalQueue,
    MemoryGraph,
    SimulationState,
)


def canonical_snapshot() -> SimulationState:
    """Return a fresh copy of the built-in starting state."""
    return SimulationState(
        drives=DriveState(curiosity=65, boredom=0, pain=0),
        goals=GoalQueue(active=[Goal.deepen("belief system")], completed=[]),
        memory=MemoryGraph(
            nodes={
                "belief system": ConceptNode(x=50, y=20),
                "knowledge": ConceptNode(x=20, y=50),
                "delusions": ConceptNode(x=80, y=50),
                "creativity": ConceptNode(x=20, y=80),
            },
            edges=[
                Edge(source="knowledge", target="belief system"),
                Edge(source="belief system", target="delusions"),
                Edge(source="knowledge", target="creativity"),
            ],
        ),
        focus="belief system",
    )


class SnapshotLoader:
    """Load and validate snapshots from JSON files.

    Directory structure:
    - Default: {PROJECT_ROOT}/examples/snapshots/
    - Override via constructor: SnapshotLoader(Path("/custom/snapshots"))
    - Snapshot files: {name}.json (e.g., "belief_system.json")

    Validation:
    - Required fields: drives, goals, memory (each a JSON object)
    - goals.active/completed and edges are lists, memory.nodes is an object
    - Goal text must name a goal kind and a quoted concept
    - Every concept referenced by focus, goals or edges must have a node
    - Raises SnapshotError listing every problem found
    """

    def __init__(self, snapshots_dir: Optional[Path] = None):
        self.snapshots_dir = snapshots_dir or Config.SNAPSHOTS_DIR

    def load(self, name: str) -> SimulationState:
        """Load ``{name}.json`` from the snapshots directory.

        Raises:
            FileNotFoundError: If the file does not exist
            SnapshotError: If the content is not a valid snapshot
            json.JSONDecodeError: If the file contains invalid JSON
        """
        path = self.snapshots_dir / f"{name}.json"
        if not path.exists():
            raise FileNotFoundError(f"Snapshot '{name}' not found at {path}")
        return self.load_path(path)

    def load_path(self, path: Path) -> SimulationState:
        data = json.loads(Path(path).read_text())
        return self.parse(data, source=str(path))

    def parse(self, data: Dict[str, Any], source: str = "<memory>") -> SimulationState:
        """Convert snapshot data into a SimulationState.

        Data flow:
        1. Check required top-level fields and container shapes
        2. Parse goals (text or structured)
        3. Build the pydantic models (field validation)
        4. Check concept references against the node map
        """
        if not isinstance(data, dict):
            raise SnapshotError(source, [f"expected a JSON object, got {type(data).__name__}"])
        missing = [key for key in ("drives", "goals", "memory") if key not in data]
        if missing:
            raise SnapshotError(source, [f"missing required field '{key}'" for key in missing])

        problems = [
            f"field '{key}' must be an object, got {type(data[key]).__name__}"
            for key in ("drives", "goals", "memory")
            if not isinstance(data[key], dict)
        ]
        if problems:
            raise SnapshotError(source, problems)

        goals_data = data["goals"]
        memory_data = data["memory"]
        edges = memory_data.get("edges", memory_data.get("links", []))
        shapes = (
            ("goals.active", goals_data.get("active", []), list),
            ("goals.completed", goals_data.get("completed", []), list),
            ("memory.nodes", memory_data.get("nodes", {}), dict),
            ("memory.edges", edges, list),
        )
        for name, value, expected in shapes:
            if not isinstance(value, expected):
                kind = "a list" if expected is list else "an object"
                problems.append(f"field '{name}' must be {kind}, got {type(value).__name__}")
        if problems:
            raise SnapshotError(source, problems)

        active = self._parse_goals(goals_data.get("active", []), problems)
        completed = self._parse_goals(goals_data.get("completed", []), problems)
        if problems:
            raise SnapshotError(source, problems)

        try:
            state = SimulationState(
                drives=DriveState(**data["drives"]),
                goals=GoalQueue(active=active, completed=completed),
                memory=MemoryGraph(nodes=memory_data.get("nodes", {}), edges=edges),
                focus=data.get("focus"),
            )
        except ValidationError as exc:
            raise SnapshotError(
                source, [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()]
            ) from exc

        problems = state.reference_problems()
        if problems:
            raise SnapshotError(source, problems)
        return state

    def _parse_goals(self, entries: List[Any], problems: List[str]) -> List[Goal]:
        goals: List[Goal] = []
        for entry in entries:
            try:
                if isinstance(entry, str):
                    goals.append(Goal.parse(entry))
                else:
                    goals.append(Goal.model_validate(entry))
            except MalformedGoal as exc:
                problems.append(str(exc))
            except ValidationError as exc:
                problems.append(f"Malformed goal {entry!r}: {exc.errors()[0]['msg']}")
        return goals
