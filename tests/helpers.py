from __future__ import annotations

from datetime import datetime, timedelta, timezone


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class RecordingHandler:
    def __init__(self) -> None:
        self.transitions = []

    def __call__(self, transition) -> None:
        self.transitions.append(transition)


class StaticProbe:
    def __init__(self, screen_on):
        self.screen_on = screen_on
        self.calls = 0

    def is_screen_on(self):
        self.calls += 1
        return self.screen_on


class BrokenProbe:
    def is_screen_on(self):
        raise RuntimeError("power service unavailable")
