"""
Notifiers - Pluggable alert delivery backends.

Provides a common interface for different notification services:
- ntfy: Push notifications via ntfy.sh
- webhook: Generic HTTP webhooks

Called by the monitoring loop for every new breach alert.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable

import requests

from ..models import Alert

logger = logging.getLogger(__name__)

# Retry configuration
DEFAULT_MAX_RETRIES = 2
DEFAULT_BASE_DELAY = 1.0  # seconds
DEFAULT_TIMEOUT = 10  # seconds


def with_retry(
    func: Callable[[], requests.Response],
    max_retries: int = DEFAULT_MAX_RETRIES,
    base_delay: float = DEFAULT_BASE_DELAY,
) -> requests.Response:
    """
    Execute a request function with exponential backoff retry.

    Retries on transient network errors and 5xx responses.
    Client errors (4xx) are returned as-is.

    Args:
        func: Callable that performs the request and returns Response
        max_retries: Maximum number of retry attempts
        base_delay: Initial delay in seconds, doubles each retry

    Returns:
        The last Response object

    Raises:
        requests.RequestException: If all retries hit network errors
    """
    for attempt in range(max_retries + 1):
        try:
            response = func()
        except (requests.Timeout, requests.ConnectionError) as e:
            if attempt >= max_retries:
                raise
            delay = base_delay * (2**attempt)
            logger.warning(
                f"Network error, retry {attempt + 1}/{max_retries} in {delay}s: {e}"
            )
            time.sleep(delay)
            continue

        if response.status_code < 500 or attempt >= max_retries:
            return response

        delay = base_delay * (2**attempt)
        logger.warning(
            f"Server error {response.status_code}, retry {attempt + 1}/{max_retries} in {delay}s"
        )
        time.sleep(delay)

    raise requests.RequestException("Retry exhausted")


def format_title(template: str | None, alert: Alert) -> str:
    """
    Format notification title using template and alert data.

    Available template variables:
        {name} - Student name
        {student_id} - Student id
        {message} - Alert message
        {time} - Alert time as HH:MM:SS
    """
    if not template:
        return f"Boundary alert: {alert.entity_name}"

    try:
        return template.format(
            name=alert.entity_name,
            student_id=alert.entity_id,
            message=alert.message,
            time=alert.timestamp.strftime("%H:%M:%S"),
        )
    except KeyError as e:
        logger.warning(f"Title template error: missing key {e}")
        return template


class Notifier(ABC):
    """Abstract base class for alert delivery backends."""

    @abstractmethod
    def send(self, alert: Alert) -> bool:
        """
        Deliver one alert.

        Returns:
            True if the notification was sent successfully
        """

    @property
    @abstractmethod
    def id(self) -> str:
        """Return the notifier ID from config."""


def create_notifier(config: dict[str, Any]) -> Notifier:
    """
    Factory function to create a notifier from config.

    Args:
        config: Notifier configuration dict with 'type' field

    Returns:
        Configured Notifier instance

    Raises:
        ValueError: If notifier type is unknown
    """
    notifier_type = config.get("type")

    if notifier_type == "ntfy":
        from .ntfy import NtfyNotifier

        return NtfyNotifier(config)

    elif notifier_type == "webhook":
        from .webhook import WebhookNotifier

        return WebhookNotifier(config)

    else:
        raise ValueError(f"Unknown notifier type: {notifier_type}")


def create_notifiers(configs: list[dict[str, Any]]) -> list[Notifier]:
    """
    Create notifiers from a config list, skipping any that fail.
    """
    notifiers = []
    for config in configs:
        try:
            notifier = create_notifier(config)
        except (KeyError, ValueError) as e:
            logger.error(f"Failed to create notifier {config.get('id')}: {e}")
            continue
        notifiers.append(notifier)
        logger.debug(f"Created notifier: {notifier.id} ({config.get('type')})")

    return notifiers


__all__ = [
    "Notifier",
    "create_notifier",
    "create_notifiers",
    "format_title",
    "with_retry",
]
