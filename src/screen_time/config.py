"""Configuration models and helpers for the screen-time tracker."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(slots=True)
class TrackerSettings:
    """Runtime configuration for the tracker session."""

    status_interval: timedelta = timedelta(milliseconds=100)

    @classmethod
    def from_intervals(cls, status_ms: float | None = None) -> "TrackerSettings":
        interval = status_ms if status_ms is not None else 100.0
        return cls(status_interval=timedelta(milliseconds=max(interval, 1.0)))
