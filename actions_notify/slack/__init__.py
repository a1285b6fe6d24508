"""
Slack Notification Module

Builds attachment payloads for workflow events and delivers them to a webhook.
"""

from .client import DeliveryError, SlackWebhook, send
from .blocks import (
    build_base_fields,
    build_commit_fields,
    build_compact_text,
    build_payload,
    build_release_text,
)

__all__ = [
    'DeliveryError',
    'SlackWebhook',
    'send',
    'build_base_fields',
    'build_commit_fields',
    'build_compact_text',
    'build_payload',
    'build_release_text',
]
