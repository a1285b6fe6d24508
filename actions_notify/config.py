"""
Notifier Configuration

Loads notification settings from environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class SlackConfig:
    """Webhook destination and message defaults."""

    webhook_url: Optional[str] = field(default=None)
    channel: Optional[str] = None
    username: Optional[str] = None
    icon_emoji: Optional[str] = None
    icon_url: Optional[str] = None

    @classmethod
    def from_env(cls) -> "SlackConfig":
        """Create config from environment variables."""
        return cls(
            webhook_url=os.getenv("SLACK_WEBHOOK_URL"),
            channel=os.getenv("SLACK_CHANNEL"),
            username=os.getenv("SLACK_USERNAME"),
            icon_emoji=os.getenv("SLACK_ICON_EMOJI"),
            icon_url=os.getenv("SLACK_ICON_URL"),
        )

    @property
    def enabled(self) -> bool:
        """Check if a webhook URL is configured."""
        return bool(self.webhook_url)

    @property
    def default_args(self) -> Dict[str, Any]:
        """Arguments merged into every webhook message."""
        args = {
            "channel": self.channel,
            "username": self.username,
            "icon_emoji": self.icon_emoji,
            "icon_url": self.icon_url,
        }
        return {k: v for k, v in args.items() if v}


@dataclass
class SentryConfig:
    """Error tracking settings."""

    dsn: Optional[str] = None
    environment: str = "production"
    traces_sample_rate: float = 0.0

    @classmethod
    def from_env(cls) -> "SentryConfig":
        return cls(
            dsn=os.getenv("SENTRY_DSN"),
            environment=os.getenv("SENTRY_ENVIRONMENT", "production"),
            traces_sample_rate=float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.0")),
        )

    @property
    def enabled(self) -> bool:
        """Check if Sentry tracking is configured."""
        return bool(self.dsn)


@dataclass
class NotifierConfig:
    """Configuration for a single notification run."""

    job_name: str = ""
    status: str = ""
    mention: str = ""
    mention_if: str = ""
    commit: bool = False
    compact: bool = False
    release: bool = False
    created_tag: str = ""
    token: Optional[str] = None
    slack: SlackConfig = None
    sentry: SentryConfig = None

    def __post_init__(self):
        if self.slack is None:
            self.slack = SlackConfig()
        if self.sentry is None:
            self.sentry = SentryConfig()

    @classmethod
    def from_env(cls) -> "NotifierConfig":
        """Create config from environment variables."""
        return cls(
            job_name=os.getenv("JOB_NAME", ""),
            status=os.getenv("JOB_STATUS", ""),
            mention=os.getenv("SLACK_MENTION", ""),
            mention_if=os.getenv("SLACK_MENTION_IF", ""),
            commit=_env_flag("NOTIFY_COMMIT"),
            compact=_env_flag("NOTIFY_COMPACT"),
            release=_env_flag("NOTIFY_RELEASE"),
            created_tag=os.getenv("CREATED_TAG", ""),
            token=os.getenv("GITHUB_TOKEN") or None,
            slack=SlackConfig.from_env(),
            sentry=SentryConfig.from_env(),
        )
