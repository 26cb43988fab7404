"""
Alert Delivery - Hands new alerts to notifiers off the monitoring thread.

Alerts are queued by the loop and sent by a worker thread, so a slow or
retrying notifier never delays a tick or a stop. A ``None`` on the queue
shuts the worker down.
"""

import logging
import queue
import threading
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..models import Alert

if TYPE_CHECKING:
    from ..notifiers import Notifier

logger = logging.getLogger(__name__)


class AlertDelivery:
    """
    Queue-fed notifier worker.

    Args:
        notifiers: Receive every submitted alert, in order
        stopped: Shared cancellation token; once set, no further send starts
    """

    def __init__(self, notifiers: Iterable["Notifier"], stopped: threading.Event):
        self.notifiers = list(notifiers)
        self._stopped = stopped
        self._queue: queue.Queue[Alert | None] = queue.Queue()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None or not self.notifiers:
            return
        self._thread = threading.Thread(
            target=self._run,
            name="AlertDelivery",
            daemon=True,
        )
        self._thread.start()

    def submit(self, alert: Alert) -> None:
        """Queue an alert, or send it inline when no worker is running."""
        if self._thread is not None:
            self._queue.put(alert)
        else:
            self.deliver(alert)

    def stop(self) -> None:
        """Signal the worker to exit without waiting on an in-flight send."""
        if self._thread is None:
            return
        self._queue.put(None)
        if self._thread.is_alive():
            logger.debug("Alert delivery still finishing a send; pending alerts dropped")

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout=timeout)

    def _run(self) -> None:
        while True:
            alert = self._queue.get()
            if alert is None:
                break
            self.deliver(alert)
        logger.debug("Alert delivery exited")

    def deliver(self, alert: Alert) -> None:
        """Send one alert to every notifier, stopping early once cancelled."""
        for notifier in self.notifiers:
            if self._stopped.is_set():
                logger.debug(f"Skipping notifier {notifier.id} for {alert.id} (stopped)")
                return
            try:
                if not notifier.send(alert):
                    logger.warning(f"Notifier {notifier.id} failed for {alert.id}")
            except Exception as e:
                logger.error(f"Notifier {notifier.id} error: {e}", exc_info=True)
