"""
Slack Webhook Client

Posts notification payloads to a Slack incoming webhook.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Union

import requests

from ..types import Payload

logger = logging.getLogger(__name__)

SUCCESS_RESPONSE = "ok"


class DeliveryError(Exception):
    """Raised when the webhook does not acknowledge a message with 'ok'."""

    def __init__(self, response_text: str):
        super().__init__(
            f"Failed to send notification to Slack\nResponse: {response_text}"
        )
        self.response_text = response_text


class SlackWebhook:
    """
    Sends payloads to a Slack incoming webhook.

    Usage:
        webhook = SlackWebhook(url, {"username": "ci-bot"})
        webhook.send(payload)
    """

    def __init__(self, url: str, defaults: Optional[Mapping[str, Any]] = None):
        """
        Initialize webhook client.

        Args:
            url: Incoming webhook URL
            defaults: Arguments merged into every message (channel,
                username, icon_emoji, icon_url). None values are dropped.
        """
        self.url = url
        self.defaults = {k: v for k, v in (defaults or {}).items() if v is not None}

    def _body(self, payload: Union[Payload, Mapping[str, Any]]) -> Dict[str, Any]:
        message = payload.to_dict() if isinstance(payload, Payload) else dict(payload)
        return {**self.defaults, **message}

    def send(self, payload: Union[Payload, Mapping[str, Any]]) -> str:
        """
        Send a message.

        Args:
            payload: Payload or an already rendered message dict

        Returns:
            The acknowledgement text ('ok')

        Raises:
            DeliveryError: If the acknowledgement is anything but 'ok'
            requests.RequestException: On transport failure
        """
        response = requests.post(self.url, json=self._body(payload))

        if response.text != SUCCESS_RESPONSE:
            logger.warning(
                "Slack webhook rejected notification (HTTP %s): %s",
                response.status_code,
                response.text,
            )
            raise DeliveryError(response.text)

        logger.debug("Slack notification sent successfully")
        return response.text


def send(
    url: str,
    default_args: Optional[Mapping[str, Any]],
    payload: Union[Payload, Mapping[str, Any]],
) -> str:
    """Send a payload to a webhook in one call."""
    return SlackWebhook(url, default_args).send(payload)
