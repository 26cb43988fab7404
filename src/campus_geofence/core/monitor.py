"""
Monitoring Loop - Periodic driver for geofence evaluation and alerting.

Each tick, under the session lock:
  1. Move simulated students (if a simulator is configured)
  2. Ask the window policy whether alerting is active
  3. Evaluate containment for every student
  4. Record one alert per exit, unless that student has an unread alert

New alerts are queued for notifiers after the lock is released. While the
loop runs in the background, a separate delivery worker sends them.

The loop runs on a daemon thread woken by ``threading.Event.wait``, so
``stop()`` takes effect immediately and no tick starts after it returns.
No notifier send starts after ``stop()`` either; a send already in
flight is left to finish on the delivery worker.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import TYPE_CHECKING

from ..models import TickResult
from ..utils.constants import (
    ALERT_MESSAGE_TEMPLATE,
    DEFAULT_TICK_SECONDS,
    LOOP_STOP_TIMEOUT,
)
from .delivery import AlertDelivery
from .session import Session
from .simulation import PositionSimulator
from .window import MonitoringWindow, WindowPolicy

if TYPE_CHECKING:
    from ..notifiers import Notifier

logger = logging.getLogger(__name__)


class MonitoringLoop:
    """
    Drives periodic re-evaluation of a session.

    Args:
        session: State to evaluate
        window: Alerting window policy (default 09:00-12:15)
        period: Seconds between ticks
        simulator: Moves non-live students each tick (None = no movement)
        clock: Returns the current local time
        notifiers: Receive every new alert
    """

    def __init__(
        self,
        session: Session,
        window: WindowPolicy | None = None,
        period: float = DEFAULT_TICK_SECONDS,
        simulator: PositionSimulator | None = None,
        clock: Callable[[], datetime] = datetime.now,
        notifiers: Iterable["Notifier"] = (),
    ):
        if period <= 0:
            raise ValueError(f"Tick period must be positive, got {period}")

        self.session = session
        self.window = window or MonitoringWindow()
        self.period = period
        self.simulator = simulator
        self.clock = clock

        # Cancellation token, set once and never cleared
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None
        self.delivery = AlertDelivery(notifiers, self._stopped)

    @property
    def notifiers(self) -> list["Notifier"]:
        return self.delivery.notifiers

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def is_stopped(self) -> bool:
        return self._stopped.is_set()

    def start(self) -> None:
        """
        Start ticking on a background thread.

        Raises:
            RuntimeError: If the loop was already stopped
        """
        if self._stopped.is_set():
            raise RuntimeError("Monitoring loop was stopped and cannot restart")
        if self._thread is not None:
            logger.warning("Monitoring loop already started")
            return

        logger.info(f"Starting monitoring loop (every {self.period}s, {self.window})")
        self.delivery.start()
        self._thread = threading.Thread(
            target=self._run,
            name="MonitoringLoop",
            daemon=True,  # Dies with parent process
        )
        self._thread.start()

    def stop(self) -> None:
        """
        Stop the loop. Safe to call more than once.

        Waits for a tick in progress to finish, so no tick runs after
        this returns.
        """
        if self._stopped.is_set():
            return

        logger.debug("Stopping monitoring loop...")
        self._stopped.set()  # Wakes thread immediately from wait()

        # A running tick holds the lock; acquiring it waits that tick out
        with self.session.lock:
            pass

        # Notifier sends never run on the loop thread, so this join is short
        thread = self._thread
        if thread and thread is not threading.current_thread():
            thread.join(timeout=LOOP_STOP_TIMEOUT)
            if thread.is_alive():
                logger.warning("Monitoring loop did not stop cleanly")

        self.delivery.stop()
        logger.info("Monitoring loop stopped")

    def _run(self) -> None:
        # wait() returns True as soon as stop() fires
        while not self._stopped.wait(timeout=self.period):
            try:
                self.tick()
            except Exception as e:
                logger.error(f"Error in monitoring tick: {e}", exc_info=True)

        logger.debug("Monitoring loop exited")

    def tick(self) -> TickResult | None:
        """
        Run one evaluation cycle now.

        Returns:
            Tick summary, or None if the loop has been stopped
        """
        with self.session.lock:
            if self._stopped.is_set():
                return None
            result = self._evaluate()

        if result.transitions or result.alerts:
            logger.info(
                f"Tick: {result.evaluated} evaluated, "
                f"{len(result.transitions)} exit(s), {len(result.alerts)} alert(s)"
            )
        else:
            logger.debug(f"Tick: {result.evaluated} evaluated, no exits")

        for alert in result.alerts:
            logger.warning(f"Boundary breach: {alert.message}")
            self.delivery.submit(alert)

        return result

    def _evaluate(self) -> TickResult:
        """Tick body. Caller holds the session lock."""
        session = self.session

        moved = self.simulator.step(session.registry) if self.simulator else 0

        now = self.clock()
        window_active = self.window.is_active(now)

        evaluations = session.registry.evaluate(session.boundary_store.get())
        result = TickResult(
            window_active=window_active, evaluated=len(evaluations), moved=moved
        )

        for student, transitioned in evaluations:
            if not transitioned:
                continue
            result.transitions.append(student)

            if not window_active:
                logger.debug(f"{student.name} left outside the monitoring window")
                continue

            # Check and record stay inside the same locked step
            if session.ledger.has_unacknowledged(student.id):
                result.suppressed.append(student.id)
                logger.debug(f"Suppressed alert for {student.id} (unread alert pending)")
                continue

            alert = session.ledger.record(
                student.id,
                student.name,
                ALERT_MESSAGE_TEMPLATE.format(name=student.name),
                timestamp=now,
            )
            result.alerts.append(alert)

        return result
