"""
Notification service for forwarding form submissions

Demo submissions and contact messages are posted to the label's Discord
channel through an incoming webhook as a single embed.
"""

import logging
from typing import Optional

import requests

from config import DEFAULT_LABEL_NAME
from errors import NotificationDeliveryError
from results import Result

logger = logging.getLogger(__name__)


class DiscordNotifier:
    """Posts embeds to a Discord incoming webhook"""

    def __init__(self, webhook_url: Optional[str],
                 session: Optional[requests.Session] = None,
                 username: str = DEFAULT_LABEL_NAME):
        self.webhook_url = webhook_url
        self.session = session or requests.Session()
        self.username = username

    @property
    def configured(self) -> bool:
        return bool(self.webhook_url)

    def send_embed(self, embed: dict) -> Result:
        """
        Send one embed to the webhook

        Args:
            embed: Discord embed object (title, color, fields, timestamp)

        Returns:
            Result with no value on success, NotificationDeliveryError otherwise
        """
        if not self.configured:
            logger.error("[NOTIFICATION NOT SENT - No webhook URL] "
                         f"Title: {embed.get('title')}")
            return Result.failure(
                NotificationDeliveryError("Missing DISCORD_WEBHOOK_URL environment variable.")
            )

        payload = {
            'username': self.username,
            'embeds': [embed]
        }

        try:
            response = self.session.post(self.webhook_url, json=payload)
        except requests.exceptions.RequestException as e:
            logger.error(f"Webhook delivery failed: {e}")
            return Result.failure(NotificationDeliveryError(f"Webhook delivery failed: {e}"))

        # Discord answers 204 No Content on success
        if not response.ok:
            logger.error(f"Webhook delivery failed: {response.status_code} - {response.text}")
            return Result.failure(
                NotificationDeliveryError(f"Webhook delivery failed: {response.status_code}")
            )

        logger.info(f"Notification sent: {embed.get('title')}")
        return Result.success()
