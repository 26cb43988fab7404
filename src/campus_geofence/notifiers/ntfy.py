"""
ntfy.sh Notifier - Push notifications via ntfy.sh service.

See: https://ntfy.sh/
"""

import logging
from typing import Any

import requests

from ..models import Alert
from . import DEFAULT_TIMEOUT, Notifier, format_title, with_retry

logger = logging.getLogger(__name__)

# ntfy.sh API endpoint
NTFY_BASE_URL = "https://ntfy.sh"


class NtfyNotifier(Notifier):
    """
    Notifier that sends push notifications via ntfy.sh.

    Config options:
        id: Notifier identifier
        type: "ntfy"
        topic: ntfy topic name (required)
        server: ntfy server base URL (default https://ntfy.sh)
        priority: min/low/default/high/urgent
        title_template: Optional title with {variable} placeholders
    """

    def __init__(self, config: dict[str, Any]):
        self._id = config["id"]
        self._topic = config["topic"]
        self._priority = config.get("priority", "high")
        self._title_template = config.get("title_template")
        self._timeout = DEFAULT_TIMEOUT

        server = config.get("server", NTFY_BASE_URL).rstrip("/")
        self._url = f"{server}/{self._topic}"
        logger.debug(f"NtfyNotifier initialized: {self._id} -> {self._topic}")

    @property
    def id(self) -> str:
        return self._id

    def send(self, alert: Alert) -> bool:
        headers = {
            "Title": format_title(self._title_template, alert),
            "Priority": self._priority,
            "Tags": "warning",
        }

        try:
            response = with_retry(
                lambda: requests.post(
                    self._url,
                    data=alert.message.encode("utf-8"),
                    headers=headers,
                    timeout=self._timeout,
                )
            )
        except requests.RequestException as e:
            logger.error(f"ntfy send error: {e}")
            return False

        if not response.ok:
            logger.warning(f"ntfy send failed: {response.status_code} {response.text}")
            return False

        logger.debug(f"ntfy alert sent to {self._topic}")
        return True
