"""Webhook notifications for alarm transitions."""

import time
from datetime import datetime
from typing import Any, Dict, Optional
from dataclasses import dataclass

import requests

from ..models.status import AlarmStatus
from ..config.defaults import SYSTEM_CONSTANTS
from .interfaces import StatusListener
from ..logging_config import get_logger

logger = get_logger("notification_service")


@dataclass
class NotificationConfig:
    """Configuration for the alarm notifier."""
    enabled: bool = True
    webhook_url: str = ""
    cooldown_seconds: int = 60
    timeout_seconds: float = SYSTEM_CONSTANTS["NOTIFICATION_TIMEOUT_SECONDS"]

    @classmethod
    def from_system_config(cls, config) -> "NotificationConfig":
        return cls(enabled=config.notifications_enabled,
                   webhook_url=config.notification_webhook_url,
                   cooldown_seconds=config.notification_cooldown_seconds)


class AlarmNotifier(StatusListener):
    """Posts a JSON message to a webhook when the system enters ALARM.

    Delivery failures are logged and counted; they never reach the engine.
    """

    def __init__(self, config: Optional[NotificationConfig] = None,
                 session: Optional[requests.Session] = None):
        self.config = config or NotificationConfig()
        self.session = session or requests.Session()
        self.last_status: Optional[AlarmStatus] = None
        self.last_sent_time: Optional[float] = None
        self.sent_count = 0
        self.failed_count = 0
        self.last_cat_detected = False

    def notify(self, alarm_status: AlarmStatus) -> None:
        previous = self.last_status
        self.last_status = alarm_status

        if alarm_status is not AlarmStatus.ALARM or previous is AlarmStatus.ALARM:
            return

        if not self.config.enabled or not self.config.webhook_url:
            logger.debug("Alarm notification disabled")
            return

        if not self._check_cooldown():
            logger.debug("Alarm notification skipped due to cooldown")
            return

        self.send(self._build_payload(alarm_status))

    def cat_detected(self, cat_detected: bool) -> None:
        self.last_cat_detected = cat_detected

    def sensor_status_changed(self) -> None:
        pass

    def send(self, payload: Dict[str, Any]) -> bool:
        """Post a payload to the webhook, returning whether it was accepted."""
        try:
            response = self.session.post(
                self.config.webhook_url,
                json=payload,
                timeout=self.config.timeout_seconds
            )
            response.raise_for_status()
        except requests.RequestException as e:
            self.failed_count += 1
            logger.error(f"Failed to send alarm notification: {e}")
            return False

        self.sent_count += 1
        self.last_sent_time = time.monotonic()
        logger.info(f"Alarm notification sent to {self.config.webhook_url}")
        return True

    def _check_cooldown(self) -> bool:
        if self.last_sent_time is None:
            return True
        return time.monotonic() - self.last_sent_time >= self.config.cooldown_seconds

    def _build_payload(self, alarm_status: AlarmStatus) -> Dict[str, Any]:
        return {
            "alarm_status": alarm_status.name,
            "message": alarm_status.description,
            "cat_detected": self.last_cat_detected,
            "timestamp": datetime.now().isoformat()
        }
