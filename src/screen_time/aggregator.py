"""Accumulates state durations into persisted totals."""

from __future__ import annotations

import logging
from typing import Optional

from .models import DeviceState, PersistedTotals, StateTransition
from .store import TotalsStore
from .tracker import ScreenStateTracker

logger = logging.getLogger(__name__)


class TotalsAggregator:
    """Adds finished and in-progress state durations to the saved totals.

    Completed intervals arrive as tracker transitions. Pause and focus
    callbacks trigger a proactive save of the interval still in progress,
    followed by a reset of the tracker's start time so the transition that
    follows only reports time measured from that reset.
    """

    def __init__(self, store: TotalsStore, tracker: ScreenStateTracker) -> None:
        self.store = store
        self.tracker = tracker
        self._totals: Optional[PersistedTotals] = None
        self.is_initialized = False

    @property
    def totals(self) -> PersistedTotals:
        if self._totals is None:
            self._totals = self.store.load()
        return self._totals

    def initialize(self) -> None:
        if self.is_initialized:
            return
        self.tracker.subscribe(self.handle_transition)
        self.is_initialized = True
        logger.info("Totals aggregator initialized")

    def shutdown(self) -> None:
        if not self.is_initialized:
            return
        self.tracker.unsubscribe(self.handle_transition)
        self.is_initialized = False
        logger.info("Totals aggregator shut down")

    def handle_transition(self, transition: StateTransition) -> None:
        seconds = transition.duration_seconds
        if transition.previous is DeviceState.UNKNOWN or seconds <= 0:
            logger.debug(
                "Skipped %s interval of %.1fs",
                transition.previous.value,
                seconds,
            )
            return
        self._accumulate(transition.previous, seconds)

    def save_current_state_time(self) -> bool:
        """Persist time spent so far in the current state and restart its timer."""
        if not self.is_initialized:
            return False
        state = self.tracker.current
        if state is DeviceState.UNKNOWN:
            return False
        seconds = self.tracker.elapsed_in_current_state().total_seconds()
        if seconds <= 0:
            return False

        logger.debug("Proactively saving %.1fs of %s", seconds, state.value)
        self._accumulate(state, seconds)
        self.tracker.reset_state_start_time()
        return True

    def on_pause(self, paused: bool) -> None:
        if paused:
            self.save_current_state_time()

    def on_focus(self, focused: bool) -> None:
        # Both directions: focus regained closes out the time spent away.
        self.save_current_state_time()

    def on_quit(self) -> None:
        self.save_current_state_time()

    def _accumulate(self, state: DeviceState, seconds: float) -> None:
        totals = self.totals
        before = totals.for_state(state)
        if not totals.add(state, seconds):
            return
        logger.info(
            "%s: %.1fs + %.1fs = %.1fs",
            state.value,
            before,
            seconds,
            totals.for_state(state),
        )
        self.store.save(totals)
