from __future__ import annotations

import unittest

from screen_time.models import DeviceState, PersistedTotals, derive_state


class DeriveStateTests(unittest.TestCase):
    def test_foreground_wins_regardless_of_screen(self) -> None:
        self.assertEqual(derive_state(True, True), DeviceState.APP_RUNNING)
        self.assertEqual(derive_state(True, False), DeviceState.APP_RUNNING)

    def test_background_splits_on_screen(self) -> None:
        self.assertEqual(derive_state(False, False), DeviceState.SCREEN_OFF)
        self.assertEqual(derive_state(False, True), DeviceState.UNLOCKED)


class PersistedTotalsTests(unittest.TestCase):
    def test_add_routes_to_matching_bucket(self) -> None:
        totals = PersistedTotals()
        self.assertTrue(totals.add(DeviceState.APP_RUNNING, 2.0))
        self.assertTrue(totals.add(DeviceState.SCREEN_OFF, 3.0))
        self.assertTrue(totals.add(DeviceState.UNLOCKED, 4.5))
        self.assertEqual(totals.total_running_time, 2.0)
        self.assertEqual(totals.total_screen_off_time, 3.0)
        self.assertEqual(totals.total_unlocked_time, 4.5)
        self.assertEqual(totals.overall_seconds, 9.5)

    def test_add_rejects_unknown_and_non_positive(self) -> None:
        totals = PersistedTotals(total_running_time=1.0)
        self.assertFalse(totals.add(DeviceState.UNKNOWN, 5.0))
        self.assertFalse(totals.add(DeviceState.APP_RUNNING, 0.0))
        self.assertFalse(totals.add(DeviceState.APP_RUNNING, -3.0))
        self.assertEqual(totals.overall_seconds, 1.0)

    def test_for_state_unknown_is_zero(self) -> None:
        totals = PersistedTotals(1.0, 2.0, 3.0)
        self.assertEqual(totals.for_state(DeviceState.UNKNOWN), 0.0)
        self.assertEqual(totals.for_state(DeviceState.UNLOCKED), 3.0)

    def test_copy_is_independent(self) -> None:
        totals = PersistedTotals(1.0, 2.0, 3.0)
        snapshot = totals.copy()
        totals.add(DeviceState.APP_RUNNING, 1.0)
        self.assertEqual(snapshot.total_running_time, 1.0)


if __name__ == "__main__":
    unittest.main()
