"""Workflow Notifier - Facade that builds and delivers a job status notification."""

import logging
from typing import Optional

from .api.client import GitHubApiClient
from .config import NotifierConfig
from .monitoring import capture_errors, track_performance
from .slack.blocks import build_payload
from .slack.client import SlackWebhook
from .types import EventContext, Payload

logger = logging.getLogger(__name__)


class WorkflowNotifier:
    """
    Sends a status notification for a GitHub Actions job.

    Usage:
        config = NotifierConfig.from_env()
        notifier = WorkflowNotifier(config, EventContext.from_env())
        notifier.notify()
    """

    def __init__(
        self,
        config: NotifierConfig,
        context: EventContext,
        github_client: Optional[GitHubApiClient] = None,
    ):
        self.config = config
        self.context = context
        self.github_client = github_client

    @capture_errors(step_name="build_payload")
    def build_payload(self) -> Payload:
        """Build the payload described by the config."""
        config = self.config
        return build_payload(
            job_name=config.job_name,
            status=config.status,
            mention=config.mention,
            mention_condition=config.mention_if,
            commit_flag=config.commit,
            compact_mode=config.compact,
            release_mode=config.release,
            created_tag=config.created_tag,
            context=self.context,
            token=config.token,
            client=self.github_client,
        )

    @capture_errors(step_name="deliver")
    @track_performance(operation_name="deliver")
    def deliver(self, payload: Payload) -> str:
        """Post a payload to the configured webhook."""
        if not self.config.slack.enabled:
            raise ValueError("Slack webhook URL is not configured")

        webhook = SlackWebhook(self.config.slack.webhook_url, self.config.slack.default_args)
        return webhook.send(payload)

    def notify(self) -> Payload:
        """
        Build the payload and send it.

        Returns:
            The delivered payload

        Raises:
            InvalidStatusError: Unknown status, raised before any request
            DeliveryError: Webhook did not answer 'ok'
        """
        payload = self.build_payload()
        logger.info(
            "Sending %s notification for %s to Slack",
            payload.mode.value,
            self.config.job_name or self.context.workflow,
        )
        self.deliver(payload)
        logger.info("Notification delivered")
        return payload
