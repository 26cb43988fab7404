"""
Tests for the monitoring window, simulation, and monitoring loop
"""

import threading
import time
import unittest
from datetime import datetime, time as clock_time
from unittest import mock

from campus_geofence.core import (
    AlwaysActive,
    MonitoringLoop,
    MonitoringWindow,
    PositionSimulator,
    Session,
)
from campus_geofence.errors import InvalidBoundary
from campus_geofence.models import BoundaryVertex, Coordinate, PlaneBounds, Student

SQUARE = [(10, 10), (90, 10), (90, 90), (10, 90)]
IN_WINDOW = datetime(2026, 1, 5, 10, 0)
AFTER_WINDOW = datetime(2026, 1, 5, 13, 0)


class FixedRandom:
    """Random stand-in returning one value."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


class TestMonitoringWindow(unittest.TestCase):
    """Test the time-of-day window policy."""

    def setUp(self):
        self.window = MonitoringWindow(clock_time(9, 0), clock_time(12, 15))

    def test_inside_window(self):
        """Test times inside the window are active."""
        self.assertTrue(self.window.is_active(datetime(2026, 1, 5, 9, 0)))
        self.assertTrue(self.window.is_active(datetime(2026, 1, 5, 10, 30)))

    def test_end_minute_inclusive(self):
        """Test the whole end minute counts."""
        self.assertTrue(self.window.is_active(datetime(2026, 1, 5, 12, 15, 59)))
        self.assertFalse(self.window.is_active(datetime(2026, 1, 5, 12, 16)))

    def test_before_window(self):
        """Test times before the start are inactive."""
        self.assertFalse(self.window.is_active(datetime(2026, 1, 5, 8, 59, 59)))

    def test_wraps_midnight(self):
        """Test a window whose start is after its end."""
        night = MonitoringWindow(clock_time(22, 0), clock_time(6, 0))

        self.assertTrue(night.is_active(datetime(2026, 1, 5, 23, 0)))
        self.assertTrue(night.is_active(datetime(2026, 1, 5, 6, 0)))
        self.assertFalse(night.is_active(datetime(2026, 1, 5, 12, 0)))

    def test_parse(self):
        """Test parsing HH:MM-HH:MM."""
        window = MonitoringWindow.parse("08:30-15:45")

        self.assertEqual(window.start, clock_time(8, 30))
        self.assertEqual(window.end, clock_time(15, 45))

    def test_parse_invalid(self):
        """Test malformed window text raises ValueError."""
        with self.assertRaises(ValueError):
            MonitoringWindow.parse("nine-to-noon")

    def test_always_active(self):
        """Test AlwaysActive policy."""
        self.assertTrue(AlwaysActive().is_active(datetime(2026, 1, 5, 3, 0)))


class TestPositionSimulator(unittest.TestCase):
    """Test the random drift simulator."""

    def setUp(self):
        self.session = Session(
            SQUARE,
            [
                Student(id="sim", name="Sim", position=Coordinate(50, 50)),
                Student(id="edge", name="Edge", position=Coordinate(99.5, 0.2)),
                Student(id="live", name="Live", position=Coordinate(50, 50), is_live_tracked=True),
                Student(id="new", name="New"),
            ],
        )

    def test_moves_only_simulated_positioned(self):
        """Test live and unpositioned students stay put."""
        simulator = PositionSimulator(max_step=1.0, rng=FixedRandom(1.0))

        moved = simulator.step(self.session.registry)

        self.assertEqual(moved, 2)
        self.assertEqual(self.session.registry.get("sim").position, Coordinate(51, 51))
        self.assertEqual(self.session.registry.get("live").position, Coordinate(50, 50))
        self.assertIsNone(self.session.registry.get("new").position)

    def test_clamps_to_plane(self):
        """Test drift never leaves the plane."""
        up = PositionSimulator(max_step=5.0, rng=FixedRandom(1.0))
        up.step(self.session.registry)
        edge = self.session.registry.get("edge").position
        self.assertEqual(edge.latitude, 100.0)

        down = PositionSimulator(max_step=5.0, rng=FixedRandom(0.0))
        down.step(self.session.registry)
        down.step(self.session.registry)
        edge = self.session.registry.get("edge").position
        self.assertEqual(edge.longitude, 0.0)

    def test_step_is_bounded(self):
        """Test each axis moves at most max_step."""
        simulator = PositionSimulator(max_step=2.0, bounds=PlaneBounds(0, 100))

        for _ in range(20):
            before = self.session.registry.get("sim").position
            simulator.step(self.session.registry)
            after = self.session.registry.get("sim").position
            self.assertLessEqual(abs(after.latitude - before.latitude), 2.0)
            self.assertLessEqual(abs(after.longitude - before.longitude), 2.0)


class TestMonitoringLoopTick(unittest.TestCase):
    """Test single-tick behaviour of the monitoring loop."""

    def make_loop(self, students, now=IN_WINDOW, **kwargs):
        self.session = Session(SQUARE, students)
        return MonitoringLoop(self.session, clock=lambda: now, **kwargs)

    def test_scenario_exit_in_window(self):
        """Test a student outside at 10:00 yields exactly one alert."""
        loop = self.make_loop([Student(id="s1", name="Eve", position=Coordinate(95, 95))])

        result = loop.tick()

        self.assertTrue(result.window_active)
        self.assertFalse(self.session.students()[0].is_inside)
        alerts = self.session.alerts()
        self.assertEqual(len(alerts), 1)
        self.assertEqual(alerts[0].message, "Eve left the designated boundary.")
        self.assertTrue(alerts[0].message.endswith("left the designated boundary."))
        self.assertEqual(alerts[0].entity_id, "s1")
        self.assertEqual(alerts[0].timestamp, IN_WINDOW)

    def test_no_alert_outside_window(self):
        """Test an exit after the window updates state but does not alert."""
        loop = self.make_loop(
            [Student(id="s1", name="Eve", position=Coordinate(95, 95))], now=AFTER_WINDOW
        )

        result = loop.tick()

        self.assertFalse(result.window_active)
        self.assertEqual(len(result.transitions), 1)
        self.assertFalse(self.session.students()[0].is_inside)
        self.assertEqual(self.session.alerts(), [])

    def test_exit_before_window_not_replayed(self):
        """Test an exit consumed outside the window never alerts later."""
        clock = mock.Mock(return_value=AFTER_WINDOW)
        self.session = Session(
            SQUARE, [Student(id="s1", name="Eve", position=Coordinate(95, 95))]
        )
        loop = MonitoringLoop(self.session, clock=clock)

        loop.tick()
        clock.return_value = IN_WINDOW
        loop.tick()

        self.assertEqual(self.session.alerts(), [])

    def test_suppression_and_acknowledge(self):
        """Test one unread alert per student, re-enabled by acknowledging."""
        loop = self.make_loop([Student(id="s1", name="Eve", position=Coordinate(50, 50))])
        session = self.session

        self.assertEqual(loop.tick().alerts, [])

        session.report_position("s1", Coordinate(95, 95))
        self.assertEqual(len(loop.tick().alerts), 1)

        # Re-enter and exit again while the first alert is unread
        session.report_position("s1", Coordinate(50, 50))
        loop.tick()
        session.report_position("s1", Coordinate(95, 95))
        result = loop.tick()
        self.assertEqual(result.alerts, [])
        self.assertEqual(result.suppressed, ["s1"])
        self.assertEqual(len(session.alerts()), 1)

        # Acknowledge, then exit once more
        self.assertTrue(session.acknowledge(session.alerts()[0].id))
        session.report_position("s1", Coordinate(50, 50))
        loop.tick()
        session.report_position("s1", Coordinate(95, 95))
        self.assertEqual(len(loop.tick().alerts), 1)
        self.assertEqual(len(session.alerts()), 2)

    def test_staying_outside_alerts_once(self):
        """Test repeated ticks while outside do not add alerts."""
        loop = self.make_loop([Student(id="s1", name="Eve", position=Coordinate(95, 95))])

        loop.tick()
        self.session.acknowledge_all()
        loop.tick()
        loop.tick()

        self.assertEqual(len(self.session.alerts()), 1)

    def test_unpositioned_student_skipped(self):
        """Test students without a position are not evaluated."""
        loop = self.make_loop([Student(id="s1", name="Eve")])

        result = loop.tick()

        self.assertEqual(result.evaluated, 0)
        self.assertTrue(self.session.students()[0].is_inside)

    def test_boundary_edit_applies_next_tick(self):
        """Test shrinking the boundary turns an inside student into an exit."""
        loop = self.make_loop([Student(id="s1", name="Eve", position=Coordinate(50, 50))])
        loop.tick()

        self.session.replace_boundary([(0, 0), (40, 0), (40, 40), (0, 40)])
        result = loop.tick()

        self.assertEqual(len(result.alerts), 1)

    def test_invalid_boundary_edit_keeps_old(self):
        """Test a rejected edit leaves the boundary unchanged."""
        self.make_loop([])
        before = self.session.boundary()

        with self.assertRaises(InvalidBoundary):
            self.session.replace_boundary([(0, 0), (1, 1)])

        self.assertEqual(self.session.boundary(), before)

    def test_simulator_runs_each_tick(self):
        """Test the simulator moves students during the tick."""
        simulator = PositionSimulator(max_step=1.0, rng=FixedRandom(1.0))
        loop = self.make_loop(
            [Student(id="s1", name="Eve", position=Coordinate(89.5, 50))],
            simulator=simulator,
        )

        result = loop.tick()

        self.assertEqual(result.moved, 1)
        self.assertEqual(len(result.alerts), 1)

    def test_notifiers_receive_alerts(self):
        """Test every new alert is sent to each notifier."""
        notifier = mock.Mock(id="n1")
        notifier.send.return_value = True
        loop = self.make_loop(
            [Student(id="s1", name="Eve", position=Coordinate(95, 95))],
            notifiers=[notifier],
        )

        result = loop.tick()

        notifier.send.assert_called_once_with(result.alerts[0])

    def test_notifier_error_does_not_break_tick(self):
        """Test a raising notifier is logged and ignored."""
        broken = mock.Mock(id="broken")
        broken.send.side_effect = RuntimeError("down")
        loop = self.make_loop(
            [Student(id="s1", name="Eve", position=Coordinate(95, 95))],
            notifiers=[broken],
        )

        with self.assertLogs("campus_geofence.core.delivery", level="ERROR"):
            result = loop.tick()

        self.assertEqual(len(result.alerts), 1)

    def test_invalid_period(self):
        """Test a non-positive period is rejected."""
        with self.assertRaises(ValueError):
            self.make_loop([], period=0)


class TestMonitoringLoopLifecycle(unittest.TestCase):
    """Test starting and cancelling the background loop."""

    def setUp(self):
        self.session = Session(
            SQUARE, [Student(id="s1", name="Eve", position=Coordinate(50, 50))]
        )

    def test_tick_after_stop_does_nothing(self):
        """Test no tick runs once the loop is stopped."""
        loop = MonitoringLoop(self.session, clock=lambda: IN_WINDOW)
        loop.stop()

        self.session.report_position("s1", Coordinate(95, 95))

        self.assertIsNone(loop.tick())
        self.assertTrue(self.session.students()[0].is_inside)

    def test_stop_is_idempotent(self):
        """Test stop can be called repeatedly, even before start."""
        loop = MonitoringLoop(self.session)

        loop.stop()
        loop.stop()

        self.assertTrue(loop.is_stopped)

    def test_cannot_restart(self):
        """Test start after stop raises."""
        loop = MonitoringLoop(self.session)
        loop.stop()

        with self.assertRaises(RuntimeError):
            loop.start()

    def test_background_ticks_then_stop(self):
        """Test the thread ticks periodically and stops immediately."""
        ticks = []
        ticked = threading.Event()

        class CountingWindow:
            def is_active(self, moment):
                ticks.append(moment)
                if len(ticks) >= 2:
                    ticked.set()
                return True

        loop = MonitoringLoop(
            self.session, window=CountingWindow(), period=0.01, clock=lambda: IN_WINDOW
        )
        loop.start()
        self.assertTrue(loop.is_running)
        self.assertTrue(ticked.wait(timeout=2.0))

        loop.stop()
        count = len(ticks)
        time.sleep(0.05)

        self.assertFalse(loop.is_running)
        self.assertEqual(len(ticks), count)

    def test_tick_error_keeps_loop_alive(self):
        """Test an exception inside one tick does not end the loop."""
        calls = []
        recovered = threading.Event()

        class FlakyWindow:
            def is_active(self, moment):
                calls.append(moment)
                if len(calls) == 1:
                    raise RuntimeError("clock glitch")
                recovered.set()
                return True

        loop = MonitoringLoop(self.session, window=FlakyWindow(), period=0.01)
        with self.assertLogs("campus_geofence.core.monitor", level="ERROR"):
            loop.start()
            self.assertTrue(recovered.wait(timeout=2.0))
        loop.stop()

    def test_stop_does_not_wait_for_slow_notifier(self):
        """Test a blocked notifier neither delays stop nor receives later sends."""
        entered = threading.Event()
        release = threading.Event()
        later = mock.Mock(id="later")

        class SlowNotifier:
            id = "slow"

            def send(self, alert):
                entered.set()
                release.wait(timeout=5.0)
                return True

        self.session.report_position("s1", Coordinate(95, 95))
        loop = MonitoringLoop(
            self.session,
            window=AlwaysActive(),
            period=0.01,
            notifiers=[SlowNotifier(), later],
        )
        loop.start()
        try:
            self.assertTrue(entered.wait(timeout=2.0))

            with self.assertNoLogs("campus_geofence.core.monitor", level="WARNING"):
                started = time.monotonic()
                loop.stop()
                elapsed = time.monotonic() - started

            self.assertLess(elapsed, 1.0)
            self.assertFalse(loop.is_running)
        finally:
            release.set()

        loop.delivery.join(timeout=2.0)
        self.assertFalse(loop.delivery.is_running)
        later.send.assert_not_called()

    def test_ticks_continue_while_notifier_blocks(self):
        """Test a slow send does not hold up the next tick."""
        release = threading.Event()
        ticks = []
        ticked = threading.Event()

        class CountingWindow:
            def is_active(self, moment):
                ticks.append(moment)
                if len(ticks) >= 3:
                    ticked.set()
                return True

        slow = mock.Mock(id="slow")
        slow.send.side_effect = lambda alert: release.wait(timeout=5.0)

        self.session.report_position("s1", Coordinate(95, 95))
        loop = MonitoringLoop(
            self.session, window=CountingWindow(), period=0.01, notifiers=[slow]
        )
        loop.start()
        try:
            self.assertTrue(ticked.wait(timeout=2.0))
        finally:
            loop.stop()
            release.set()

        self.assertEqual(len(self.session.alerts()), 1)

    def test_boundary_replace_serialized_with_tick(self):
        """Test edits wait for the session lock held by a tick."""
        self.session.lock.acquire()
        done = threading.Event()

        def edit():
            self.session.replace_boundary([(0, 0), (40, 0), (40, 40), (0, 40)])
            done.set()

        worker = threading.Thread(target=edit)
        worker.start()
        self.assertFalse(done.wait(timeout=0.05))

        self.session.lock.release()
        self.assertTrue(done.wait(timeout=2.0))
        worker.join()
        self.assertEqual(self.session.boundary()[1], BoundaryVertex(40, 0))


if __name__ == "__main__":
    unittest.main()
