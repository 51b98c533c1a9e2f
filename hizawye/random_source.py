"""
Injectable randomness for the cycle engine.

The engine never touches the ``random`` module directly. Each step asks its
RandomSource for one uniform draw: the success/failure coin-flip when a goal
is active, the wandering pick when idle. Production code uses a seeded
``random.Random``; tests script the exact draws they want.
"""

import random
from abc import ABC, abstractmethod
from typing import Iterable, Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(ABC):
    """Supplies uniform draws in [0, 1)."""

    @abstractmethod
    def uniform(self) -> float:
        """Return a number in [0, 1)."""

    def choice(self, items: Sequence[T]) -> T:
        """Pick one item uniformly, consuming exactly one ``uniform()`` draw.

        Built on ``uniform()`` (rather than ``random.choice``) so scripted sources
        decide which neighbor gets picked too.

        Raises:
            IndexError: If ``items`` is empty
        """
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        index = min(int(self.uniform() * len(items)), len(items) - 1)
        return items[index]


class SystemRandomSource(RandomSource):
    """RandomSource backed by ``random.Random``."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random(seed)

    def uniform(self) -> float:
        return self.rng.random()


class ScriptedRandomSource(RandomSource):
    """Replays a fixed sequence of draws.

    With ``cycle=True`` the sequence repeats forever (``ScriptedRandomSource([0.0],
    cycle=True)`` always fails the coin-flip). Otherwise running past the end
    raises, which catches tests that consume more draws than they meant to.
    """

    def __init__(self, values: Iterable[float], *, cycle: bool = False):
        self.values = list(values)
        for value in self.values:
            if not 0.0 <= value < 1.0:
                raise ValueError(f"Scripted draw {value} is outside [0, 1)")
        self.cycle = cycle
        self.calls = 0

    def uniform(self) -> float:
        if not self.values:
            raise RuntimeError("ScriptedRandomSource has no values to replay")
        if self.calls >= len(self.values) and not self.cycle:
            raise RuntimeError(
                f"ScriptedRandomSource exhausted after {len(self.values)} draws"
            )
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value
