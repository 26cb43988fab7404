"""
Webhook Notifier - Generic HTTP webhook notifications.

Sends JSON payloads to configured webhook endpoints.
Compatible with Home Assistant, IFTTT, Zapier, and custom endpoints.
"""

import logging
from typing import Any

import requests

from ..models import Alert
from . import DEFAULT_TIMEOUT, Notifier, format_title, with_retry

logger = logging.getLogger(__name__)


class WebhookNotifier(Notifier):
    """
    Notifier that sends JSON payloads to HTTP webhooks.

    Config options:
        id: Notifier identifier
        type: "webhook"
        url: Webhook endpoint URL (required)
        priority: Priority level (included in payload)
        title_template: Optional title with {variable} placeholders
    """

    def __init__(self, config: dict[str, Any]):
        self._id = config["id"]
        self._url = config["url"]
        self._priority = config.get("priority", "default")
        self._title_template = config.get("title_template")
        self._timeout = DEFAULT_TIMEOUT

        logger.debug(f"WebhookNotifier initialized: {self._id} -> {self._url}")

    @property
    def id(self) -> str:
        return self._id

    def send(self, alert: Alert) -> bool:
        payload = {
            "title": format_title(self._title_template, alert),
            "priority": self._priority,
            "alert": alert.to_dict(),
        }

        try:
            response = with_retry(
                lambda: requests.post(
                    self._url,
                    json=payload,
                    timeout=self._timeout,
                )
            )
        except requests.RequestException as e:
            logger.error(f"Webhook error: {e}")
            return False

        if not response.ok:
            logger.warning(
                f"Webhook failed: {response.status_code} {response.text[:100]}"
            )
            return False

        logger.debug(f"Webhook sent to {self._url}")
        return True
