from __future__ import annotations

from pathlib import Path
import tempfile
import time
import unittest

from fastapi.testclient import TestClient
from helpers import FakeClock

from screen_time.config import TrackerSettings
from screen_time.paths import TOTALS_FILE_NAME
from screen_time.store import TotalsStore
from screen_time.webapp import create_app


class WebAppTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / TOTALS_FILE_NAME
        self.clock = FakeClock()
        self.app = create_app(totals_path=self.path, clock=self.clock)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_status_after_startup(self) -> None:
        with TestClient(self.app) as client:
            self.clock.advance(1.5)
            response = client.get("/api/status")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["running"])
        self.assertEqual(body["state"], "AppRunning")
        self.assertEqual(body["elapsed_seconds"], 1.5)
        self.assertEqual(body["totals_path"], str(self.path))
        self.assertEqual(body["lines"][0], "AppRunning\nCurrent: 1.5s\nTotal: 0.0s")

    def test_lifecycle_and_signals_accumulate(self) -> None:
        with TestClient(self.app) as client:
            self.clock.advance(5.0)
            response = client.post("/api/lifecycle/pause", json={"paused": True})
            self.assertEqual(response.json()["state"], "Unlocked")

            self.clock.advance(3.0)
            response = client.post("/api/screen-signal", json={"signal": "SCREEN_OFF"})
            self.assertEqual(
                response.json(),
                {"state": "ScreenOff", "app_in_foreground": False, "screen_on": False},
            )

            self.clock.advance(2.0)
            client.post("/api/screen-signal", json={"signal": "user-present"})
            client.post("/api/lifecycle/focus", json={"focused": True})
            totals = client.get("/api/totals").json()

        self.assertEqual(totals["running_seconds"], 5.0)
        self.assertEqual(totals["unlocked_seconds"], 3.0)
        self.assertEqual(totals["screen_off_seconds"], 2.0)
        self.assertEqual(totals["overall_seconds"], 10.0)

    def test_unknown_signal_is_rejected(self) -> None:
        with TestClient(self.app) as client:
            response = client.post("/api/screen-signal", json={"signal": "BATTERY_LOW"})
        self.assertEqual(response.status_code, 400)

    def test_payload_validation(self) -> None:
        with TestClient(self.app) as client:
            response = client.post("/api/lifecycle/pause", json={"paused": True, "extra": 1})
        self.assertEqual(response.status_code, 422)

    def test_shutdown_saves_current_interval(self) -> None:
        with TestClient(self.app):
            self.clock.advance(4.0)
        self.assertEqual(TotalsStore(self.path).load().total_running_time, 4.0)


class StatusPollTests(unittest.TestCase):
    def test_rendered_lines_refresh_without_requests(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            clock = FakeClock()
            app = create_app(
                totals_path=Path(tmp) / TOTALS_FILE_NAME,
                settings=TrackerSettings.from_intervals(status_ms=10),
                clock=clock,
            )
            presenter = app.state.session.presenter
            with TestClient(app):
                self.assertEqual(presenter.lines[0], "AppRunning\nCurrent: 0.0s\nTotal: 0.0s")
                clock.advance(2.0)
                deadline = time.monotonic() + 5.0
                while "Current: 2.0s" not in presenter.lines[0] and time.monotonic() < deadline:
                    time.sleep(0.02)
                self.assertEqual(presenter.lines[0], "AppRunning\nCurrent: 2.0s\nTotal: 0.0s")
            self.assertIsNone(app.state.status_poll)


if __name__ == "__main__":
    unittest.main()
