"""Plain-text views of a SimulationState for consoles and logs."""

from typing import List

from .schemas import SimulationState

DRIVE_LABELS = (("curiosity", "Curiosity"), ("boredom", "Boredom"), ("pain", "Pain"))


def format_drives(state: SimulationState) -> str:
    """Format drives as a one-line summary.

    Example output:
    "Curiosity=65%, Boredom=30%, Pain=0%"
    """
    drives = state.drives
    return ", ".join(f"{label}={getattr(drives, key)}%" for key, label in DRIVE_LABELS)


def drive_bar(value: int, width: int = 20) -> str:
    """Render a 0-100 value as a fixed-width bar ("#####---------------")."""
    filled = round(value * width / 100)
    return "#" * filled + "-" * (width - filled)


def describe_goals(state: SimulationState) -> List[str]:
    """List active goals (head marked with '>') followed by completed ones."""
    lines = []
    for index, goal in enumerate(state.goals.active):
        marker = ">" if index == 0 else " "
        lines.append(f"{marker} {goal.describe()}")
    for goal in state.goals.completed:
        lines.append(f"  [done] {goal.describe()}")
    return lines


def describe_memory(state: SimulationState) -> List[str]:
    """One line per concept: position, understood flag and focus marker."""
    lines = []
    for concept, node in state.memory.nodes.items():
        focus = "*" if concept == state.focus else " "
        status = "understood" if node.understood else "unexplored"
        lines.append(f"{focus} {concept} ({node.x:g}, {node.y:g}) {status}")
    return lines
