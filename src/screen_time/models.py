"""Domain models for tracked device states and accumulated totals."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


class DeviceState(str, Enum):
    """Mutually exclusive device/app states."""

    UNKNOWN = "Unknown"
    APP_RUNNING = "AppRunning"
    SCREEN_OFF = "ScreenOff"
    UNLOCKED = "Unlocked"


TRACKED_STATES: tuple[DeviceState, ...] = (
    DeviceState.APP_RUNNING,
    DeviceState.SCREEN_OFF,
    DeviceState.UNLOCKED,
)


def derive_state(app_in_foreground: bool, screen_on: bool) -> DeviceState:
    """Map the two tracker inputs onto a single device state."""
    if app_in_foreground:
        return DeviceState.APP_RUNNING
    if not screen_on:
        return DeviceState.SCREEN_OFF
    return DeviceState.UNLOCKED


@dataclass(slots=True, frozen=True)
class StateTransition:
    """Notification that ``previous`` ended after ``duration``."""

    previous: DeviceState
    current: DeviceState
    duration: timedelta
    occurred_at: datetime

    @property
    def duration_seconds(self) -> float:
        return self.duration.total_seconds()


@dataclass(slots=True)
class PersistedTotals:
    """Cumulative seconds spent in each tracked state."""

    total_running_time: float = 0.0
    total_screen_off_time: float = 0.0
    total_unlocked_time: float = 0.0

    def for_state(self, state: DeviceState) -> float:
        if state is DeviceState.APP_RUNNING:
            return self.total_running_time
        if state is DeviceState.SCREEN_OFF:
            return self.total_screen_off_time
        if state is DeviceState.UNLOCKED:
            return self.total_unlocked_time
        return 0.0

    def add(self, state: DeviceState, seconds: float) -> bool:
        """Accumulate ``seconds`` into the bucket for ``state``.

        Returns False when nothing was added (unknown state or a
        non-positive amount); the totals never decrease.
        """
        if seconds <= 0:
            return False
        if state is DeviceState.APP_RUNNING:
            self.total_running_time += seconds
        elif state is DeviceState.SCREEN_OFF:
            self.total_screen_off_time += seconds
        elif state is DeviceState.UNLOCKED:
            self.total_unlocked_time += seconds
        else:
            return False
        return True

    @property
    def overall_seconds(self) -> float:
        return self.total_running_time + self.total_screen_off_time + self.total_unlocked_time

    def copy(self) -> "PersistedTotals":
        return PersistedTotals(
            total_running_time=self.total_running_time,
            total_screen_off_time=self.total_screen_off_time,
            total_unlocked_time=self.total_unlocked_time,
        )
