"""Holder for the single live SimulationState of a session."""

from .schemas import SimulationState


class StateStore:
    """Owns the live state and the canonical snapshot it can be reset to.

    The store keeps its own deep copy of the canonical snapshot, and every
    reset hands out a fresh deep copy of that, so nothing done to the live
    state (or to the object passed in) can leak into future resets.
    """

    def __init__(self, canonical: SimulationState):
        self._canonical = canonical.model_copy(deep=True)
        self._state = self._canonical.model_copy(deep=True)

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def canonical(self) -> SimulationState:
        """A copy of the snapshot resets restore."""
        return self._canonical.model_copy(deep=True)

    def commit(self, state: SimulationState) -> None:
        """Replace the live state wholesale with a completed step's result."""
        self._state = state

    def reset(self) -> SimulationState:
        self._state = self._canonical.model_copy(deep=True)
        return self._state
