"""GitHub Actions Slack Notifier - Main package.

Formats a job status notification from the workflow event and posts it
to a Slack incoming webhook.

Modules:
    types - Status, event context and payload types
    api - GitHub API client (commit lookups)
    slack - Payload builders and webhook client
    monitoring - Sentry error tracking
    config - Configuration
    notifier - Facade that builds and sends a notification
"""

from .config import NotifierConfig, SlackConfig, SentryConfig
from .types import EventContext, InvalidStatusError, JobStatus, Payload, RenderMode
from .slack import DeliveryError, build_payload, send
from .notifier import WorkflowNotifier

__all__ = [
    'NotifierConfig',
    'SlackConfig',
    'SentryConfig',
    'EventContext',
    'InvalidStatusError',
    'JobStatus',
    'Payload',
    'RenderMode',
    'DeliveryError',
    'build_payload',
    'send',
    'WorkflowNotifier',
]

__version__ = '1.0.0'
