"""Composition root wiring the tracker, aggregator, store and presenter."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from .aggregator import TotalsAggregator
from .config import TrackerSettings
from .presentation import StatusPresenter, StatusSnapshot
from .signals import ScreenSignal, ScreenStateProbe
from .store import TotalsStore
from .tracker import Clock, ScreenStateTracker

logger = logging.getLogger(__name__)


class TrackerSession:
    """Owns one instance of each component and routes host callbacks to them.

    Pause and focus callbacks reach the aggregator before the tracker so the
    in-progress interval is saved before the tracker switches state.
    """

    def __init__(
        self,
        totals_path: Path,
        settings: Optional[TrackerSettings] = None,
        *,
        clock: Optional[Clock] = None,
        probe: Optional[ScreenStateProbe] = None,
    ) -> None:
        self.settings = settings or TrackerSettings()
        self.store = TotalsStore(totals_path)
        self.tracker = ScreenStateTracker(clock=clock, probe=probe)
        self.aggregator = TotalsAggregator(self.store, self.tracker)
        self.presenter = StatusPresenter(self.tracker, self.aggregator, self.settings)
        self._started = False

    @property
    def is_running(self) -> bool:
        return self._started

    def start(self) -> None:
        if self._started:
            return
        # Subscribers attach after the tracker has left Unknown; the first
        # transition carries no time to accumulate.
        self.tracker.initialize()
        self.aggregator.initialize()
        self.presenter.initialize()
        self._started = True
        logger.info("Tracker session started; totals at %s", self.store.path)

    def stop(self) -> None:
        if not self._started:
            return
        try:
            self.aggregator.on_quit()
        finally:
            self.presenter.shutdown()
            self.aggregator.shutdown()
            self.tracker.shutdown()
            self._started = False
            logger.info("Tracker session stopped.")

    def on_pause(self, paused: bool) -> None:
        self.aggregator.on_pause(paused)
        self.tracker.on_pause(paused)
        self.presenter.on_pause(paused)

    def on_focus(self, focused: bool) -> None:
        self.aggregator.on_focus(focused)
        self.tracker.on_focus(focused)
        self.presenter.on_focus(focused)

    def on_screen_signal(self, signal: Union[ScreenSignal, str]) -> None:
        self.tracker.report_screen_signal(signal)

    def tick(self, delta_seconds: float) -> bool:
        return self.presenter.tick(delta_seconds)

    def status(self) -> StatusSnapshot:
        return self.presenter.snapshot()
