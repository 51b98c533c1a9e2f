"""
Simulation session.

Ties the pieces together for one viewer: the live state, the thought log,
the random source and the engine. Each call to ``run_cycle()`` is one press
of "Run Cycle":
1. Step the engine on the live state
2. Commit the new state (only if the step completed)
3. Append the step's events to the log
4. Notify cycle listeners
"""

import threading
from typing import Callable, List, Optional

from .config import Config
from .engine import CycleEngine
from .errors import CycleError
from .event_log import EventLog
from .logging_utils import log_entry, log_error
from .random_source import RandomSource, SystemRandomSource
from .scenario import canonical_snapshot
from .schemas import LogEntry, SimulationState
from .store import StateStore

NOT_STARTED_MESSAGE = 'Simulation not started. Press "Run Cycle".'
RESET_MESSAGE = 'Simulation reset. Press "Run Cycle".'

CycleListener = Callable[[int, SimulationState, SimulationState, List[LogEntry]], None]


class Simulation:
    """
    One independent simulation session.

    Sessions share nothing mutable: give each viewer its own Simulation. Calls
    on the same session are serialized, so at most one cycle is in flight at a
    time and observers only ever see complete states.
    """

    def __init__(
        self,
        snapshot: Optional[SimulationState] = None,
        rng: Optional[RandomSource] = None,
        engine: Optional[CycleEngine] = None,
        log_capacity: Optional[int] = None,
        verbose: Optional[bool] = None,
        cycle_listeners: Optional[List[CycleListener]] = None,
    ):
        """Initialize a session.

        Args:
            snapshot: Starting state, also restored by reset() (default: canonical snapshot)
            rng: Random source (default: SystemRandomSource seeded from HIZAWYE_SEED)
            engine: Cycle engine (default: CycleEngine using HIZAWYE_EXPAND_POLICY)
            log_capacity: Thought log size (default: HIZAWYE_LOG_CAPACITY)
            verbose: Print events as they happen (default: HIZAWYE_VERBOSE)
            cycle_listeners: Callbacks invoked as (cycle, before, after, events) after
                the cycle is committed and the session lock released
        """
        self.store = StateStore(snapshot if snapshot is not None else canonical_snapshot())
        self.rng = rng or SystemRandomSource(seed=Config.SEED)
        self.engine = engine or CycleEngine(expand_policy=Config.EXPAND_POLICY)
        self.log_capacity = Config.LOG_CAPACITY if log_capacity is None else log_capacity
        self.verbose = Config.VERBOSE if verbose is None else verbose
        self.cycle_listeners: List[CycleListener] = list(cycle_listeners or [])
        self.cycle = 0
        self.log = EventLog(self.log_capacity, [LogEntry.info(NOT_STARTED_MESSAGE)])
        self._lock = threading.Lock()

    @property
    def state(self) -> SimulationState:
        return self.store.state

    def run_cycle(self) -> List[LogEntry]:
        """Run one cycle and return the events it produced.

        Raises:
            CycleError: If the step hit an invariant violation. The state, log
                and cycle counter are left unchanged.
        """
        with self._lock:
            before = self.store.state
            try:
                after, events = self.engine.step(before, self.rng)
            except CycleError as exc:
                if self.verbose:
                    log_error(f"Cycle {self.cycle + 1} aborted: {exc}")
                raise

            self.store.commit(after)
            self.log.extend(events)
            self.cycle += 1
            cycle = self.cycle

            if self.verbose:
                for entry in events:
                    log_entry(entry)

        # Outside the lock so listeners may drive the session themselves.
        for listener in self.cycle_listeners:
            try:
                listener(cycle, before, after, events)
            except Exception as exc:  # pragma: no cover - listeners are user code
                log_error(f"  [Listener] Cycle listener failed: {exc}")
        return events

    def run(self, cycles: int) -> List[LogEntry]:
        """Run several cycles, returning all events in order."""
        events: List[LogEntry] = []
        for _ in range(cycles):
            events.extend(self.run_cycle())
        return events

    def reset(self) -> SimulationState:
        """Restore the starting snapshot and start a fresh log."""
        with self._lock:
            state = self.store.reset()
            self.log = EventLog(self.log_capacity, [LogEntry.info(RESET_MESSAGE)])
            self.cycle = 0
            return state
