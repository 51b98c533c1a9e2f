"""
Exceptions raised by the consciousness cycle.

Only genuine invariant violations are exceptions. Coin-flip failures,
thresholds and wandering with no neighbors are ordinary control flow and
are reported as log entries instead.

Any exception raised inside CycleEngine.step() aborts the step: the caller's
state is left exactly as it was.
"""

from typing import Any, Optional


class CycleError(Exception):
    """Base class for every error raised by the cycle engine and its models."""


class MalformedGoal(CycleError):
    """Raised when a goal's concept id cannot be determined.

    Structured goals validate their concept at construction, so in practice this
    comes from goal text in snapshot files (e.g. "Deepen understanding of the
    concept: 'x'") that does not match any known goal form.
    """

    def __init__(self, payload: Any, reason: Optional[str] = None) -> None:
        self.payload = payload
        self.reason = reason
        message = f"Malformed goal {payload!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class UnknownConcept(CycleError):
    """Raised when an operation references a concept id missing from memory.

    Nodes must exist before they are focused or targeted by a goal. Hitting this
    means the state was built by hand (or loaded) without the matching node.
    """

    def __init__(self, concept: str, operation: Optional[str] = None) -> None:
        self.concept = concept
        self.operation = operation
        message = f"Concept '{concept}' is not in the memory graph"
        if operation:
            message += f" (while trying to {operation})"
        message += (
            "\n\nRemediation tips:\n"
            "  - Add the node to memory.nodes before referencing it from a goal, edge or focus\n"
            "  - Load snapshots through SnapshotLoader, which checks references"
        )
        super().__init__(message)


class UnhandledGoalKind(CycleError):
    """Raised for a goal kind with no resolution under the configured policy.

    Only the ``strict`` expand policy raises this; the default policy drops
    ExpandKnowledge goals with a warning instead.
    """

    def __init__(self, kind: str, concept: str) -> None:
        self.kind = kind
        self.concept = concept
        message = (
            f"No resolution defined for goal kind '{kind}' (concept '{concept}').\n\n"
            "Remediation tips:\n"
            "  - Set HIZAWYE_EXPAND_POLICY=discard to drop the goal with a warning\n"
            "  - Set HIZAWYE_EXPAND_POLICY=deepen to study the concept instead"
        )
        super().__init__(message)


class SnapshotError(CycleError):
    """Raised when a snapshot file is missing required data or breaks invariants."""

    def __init__(self, source: str, problems: list[str]) -> None:
        self.source = source
        self.problems = problems
        message_lines = [f"Invalid snapshot '{source}':"]
        message_lines.extend(f"  - {problem}" for problem in problems)
        super().__init__("\n".join(message_lines))
