"""Read-only status rendering for the tracker and saved totals."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .aggregator import TotalsAggregator
from .config import TrackerSettings
from .models import TRACKED_STATES, DeviceState, PersistedTotals, StateTransition
from .store import TotalsStore
from .tracker import ScreenStateTracker

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class StatusSnapshot:
    state: DeviceState
    elapsed_seconds: float
    totals: PersistedTotals
    paused: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "elapsed_seconds": self.elapsed_seconds,
            "paused": self.paused,
            "totals": totals_to_dict(self.totals),
        }


class StatusPresenter:
    """Keeps a rendered status view in sync with the tracker.

    The view refreshes on every transition and, while the app is not
    paused, whenever :meth:`tick` has accumulated the configured interval.
    """

    def __init__(
        self,
        tracker: ScreenStateTracker,
        aggregator: TotalsAggregator,
        settings: Optional[TrackerSettings] = None,
    ) -> None:
        self.tracker = tracker
        self.aggregator = aggregator
        self.settings = settings or TrackerSettings()
        self.paused = False
        self.lines: list[str] = []
        self._since_refresh = 0.0
        self._subscribed = False

    def initialize(self) -> None:
        if self._subscribed:
            return
        self.tracker.subscribe(self.handle_transition)
        self._subscribed = True
        self.refresh()

    def shutdown(self) -> None:
        if not self._subscribed:
            return
        self.tracker.unsubscribe(self.handle_transition)
        self._subscribed = False

    def handle_transition(self, transition: StateTransition) -> None:
        logger.debug(
            "Refreshing status after %s -> %s",
            transition.previous.value,
            transition.current.value,
        )
        self.refresh()

    def tick(self, delta_seconds: float) -> bool:
        """Advance the poll timer; returns True when the view was refreshed."""
        if self.paused:
            return False
        self._since_refresh += delta_seconds
        if self._since_refresh < self.settings.status_interval.total_seconds():
            return False
        self.refresh()
        return True

    def on_pause(self, paused: bool) -> None:
        self.paused = paused
        if not paused:
            self.refresh()

    def on_focus(self, focused: bool) -> None:
        self.paused = not focused
        if focused:
            self.refresh()

    def snapshot(self) -> StatusSnapshot:
        state = self.tracker.current
        return StatusSnapshot(
            state=state,
            elapsed_seconds=self.tracker.elapsed_in_current_state().total_seconds(),
            totals=self.aggregator.totals.copy(),
            paused=self.paused,
        )

    def refresh(self) -> list[str]:
        self._since_refresh = 0.0
        self.lines = render_status(self.snapshot())
        return self.lines


def render_status(snapshot: StatusSnapshot) -> list[str]:
    """Render one text block per tracked state.

    Only the current state shows live elapsed time; with no known state
    every block shows the saved total alone.
    """
    if snapshot.state is DeviceState.UNKNOWN:
        logger.debug("State unknown; showing saved totals only")
    blocks = []
    for state in TRACKED_STATES:
        current = snapshot.elapsed_seconds if state is snapshot.state else 0.0
        blocks.append(
            f"{state.value}\nCurrent: {current:.1f}s\nTotal: {snapshot.totals.for_state(state):.1f}s"
        )
    return blocks


def totals_to_dict(totals: PersistedTotals) -> Dict[str, float]:
    return {
        "running_seconds": totals.total_running_time,
        "screen_off_seconds": totals.total_screen_off_time,
        "unlocked_seconds": totals.total_unlocked_time,
        "overall_seconds": totals.overall_seconds,
    }


class SummaryPrinter:
    """Render the saved totals in the console."""

    def __init__(self, totals_path: Path) -> None:
        self.store = TotalsStore(totals_path)

    def print_summary(self) -> None:
        totals = self.store.load()
        if totals.overall_seconds <= 0:
            print("No time recorded yet.")
            return

        print(f"Totals from {self.store.path}")
        print("-" * 40)
        for state in TRACKED_STATES:
            seconds = totals.for_state(state)
            print(f"{state.value + ':':<12} {format_duration(seconds)}  {_share(seconds, totals):>5.1f}%")
        print(f"{'Overall:':<12} {format_duration(totals.overall_seconds)}")


def _share(seconds: float, totals: PersistedTotals) -> float:
    overall = totals.overall_seconds
    return (seconds / overall * 100.0) if overall else 0.0


def format_duration(seconds: float) -> str:
    total_seconds = int(round(seconds))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
