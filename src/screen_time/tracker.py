"""Foreground/screen state tracking and transition notifications."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Union

from .models import DeviceState, StateTransition, derive_state
from .signals import ScreenSignal, ScreenStateProbe, normalize_screen_signal

logger = logging.getLogger(__name__)

TransitionHandler = Callable[[StateTransition], None]
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ScreenStateTracker:
    """Derives the current device state from foreground and screen inputs.

    Every change of derived state produces exactly one
    :class:`StateTransition` carrying the state that ended and how long it
    lasted. Re-deriving the same state is a no-op. Handlers run
    synchronously on the caller's thread; inputs they report are applied
    once the current delivery finishes.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        probe: Optional[ScreenStateProbe] = None,
    ) -> None:
        self._clock: Clock = clock or utc_now
        self._probe = probe
        self._current = DeviceState.UNKNOWN
        self._state_start_time = self._clock()
        self._app_in_foreground = True
        self._screen_on = True
        self._handlers: list[TransitionHandler] = []
        self._notifying = False
        self._rederive_pending = False
        self.is_initialized = False

    @property
    def current(self) -> DeviceState:
        return self._current

    @property
    def state_start_time(self) -> datetime:
        return self._state_start_time

    @property
    def app_in_foreground(self) -> bool:
        return self._app_in_foreground

    @property
    def screen_on(self) -> bool:
        return self._screen_on

    def initialize(self) -> None:
        if self.is_initialized:
            return
        self._refresh_screen_state()
        self._app_in_foreground = True
        self._rederive()
        self.is_initialized = True
        logger.info("Screen state tracker initialized in %s", self._current.value)

    def shutdown(self) -> None:
        if not self.is_initialized:
            return
        self.is_initialized = False
        logger.info("Screen state tracker shut down")

    def subscribe(self, handler: TransitionHandler) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def unsubscribe(self, handler: TransitionHandler) -> None:
        try:
            self._handlers.remove(handler)
        except ValueError:
            pass

    def report_foreground(self, in_foreground: bool) -> None:
        self._app_in_foreground = bool(in_foreground)
        self._rederive()

    def report_screen_signal(self, signal: Union[ScreenSignal, str]) -> None:
        parsed = normalize_screen_signal(signal)
        if parsed is None:
            logger.warning("Ignoring unrecognised screen signal %r", signal)
            return
        logger.debug("Screen signal: %s", parsed.value)
        self._screen_on = parsed.screen_on
        self._rederive()

    def on_pause(self, paused: bool) -> None:
        """Host pause callback; the app is backgrounded while paused."""
        logger.debug("Pause callback: paused=%s", paused)
        self._app_in_foreground = not paused
        if paused:
            self._refresh_screen_state()
        self._rederive()

    def on_focus(self, focused: bool) -> None:
        logger.debug("Focus callback: focused=%s", focused)
        self._app_in_foreground = bool(focused)
        if focused:
            self._refresh_screen_state()
        self._rederive()

    def elapsed_in_current_state(self) -> timedelta:
        if self._current is DeviceState.UNKNOWN:
            return timedelta(0)
        return self._elapsed_since_start(self._clock())

    def reset_state_start_time(self) -> None:
        """Restart timing of the current state without notifying anyone."""
        if self._current is DeviceState.UNKNOWN:
            return
        self._state_start_time = self._clock()
        logger.debug("Reset start time for %s", self._current.value)

    def _refresh_screen_state(self) -> None:
        if self._probe is None:
            return
        try:
            screen_on = self._probe.is_screen_on()
        except Exception:
            logger.warning("Screen state probe failed; keeping screen_on=%s", self._screen_on, exc_info=True)
            return
        if screen_on is None:
            logger.debug("Screen state probe gave no answer; keeping screen_on=%s", self._screen_on)
            return
        self._screen_on = bool(screen_on)

    def _rederive(self) -> None:
        if self._notifying:
            self._rederive_pending = True
            return
        self._apply_state(derive_state(self._app_in_foreground, self._screen_on))
        while self._rederive_pending:
            self._rederive_pending = False
            self._apply_state(derive_state(self._app_in_foreground, self._screen_on))

    def _apply_state(self, new_state: DeviceState) -> None:
        if new_state is self._current:
            return

        now = self._clock()
        previous = self._current
        if previous is DeviceState.UNKNOWN:
            duration = timedelta(0)
        else:
            duration = self._elapsed_since_start(now)

        self._current = new_state
        self._state_start_time = now
        logger.info(
            "%s -> %s (lasted %.1fs)",
            previous.value,
            new_state.value,
            duration.total_seconds(),
        )
        self._notify(StateTransition(previous, new_state, duration, now))

    def _elapsed_since_start(self, now: datetime) -> timedelta:
        elapsed = now - self._state_start_time
        if elapsed < timedelta(0):
            logger.warning("Clock moved backwards by %s; treating elapsed time as zero", -elapsed)
            return timedelta(0)
        return elapsed

    def _notify(self, transition: StateTransition) -> None:
        self._notifying = True
        try:
            for handler in list(self._handlers):
                try:
                    handler(transition)
                except Exception:
                    logger.exception("Transition handler %r failed", handler)
        finally:
            self._notifying = False
