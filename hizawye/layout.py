"""Placement of sub-concept nodes created by a breakdown."""

from typing import Tuple

from .schemas import ConceptNode


class LayoutOracle:
    """Positions children relative to their parent node.

    Child ``index`` i is placed at ``(parent.x + spread * i + offset_x,
    parent.y + offset_y)``, clamped to the [0, 100] drawing area. No randomness:
    the same parent and index always give the same spot.
    """

    def __init__(self, spread: float = 15.0, offset_x: float = -10.0, offset_y: float = 25.0):
        self.spread = spread
        self.offset_x = offset_x
        self.offset_y = offset_y

    def place(self, parent: ConceptNode, index: int) -> Tuple[float, float]:
        x = parent.x + self.spread * index + self.offset_x
        y = parent.y + self.offset_y
        return (_bounded(x), _bounded(y))


def _bounded(value: float) -> float:
    return max(0.0, min(100.0, value))
