"""
Notification Types

Data structures for job status, event context and the Slack payload.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

DEFAULT_SERVER_URL = "https://github.com"
DEFAULT_API_URL = "https://api.github.com"

logger = logging.getLogger(__name__)


class InvalidStatusError(ValueError):
    """Raised when a job status is not one of success/failure/cancelled."""

    def __init__(self, status: Any):
        super().__init__(
            f"Invalid job status: {status!r} "
            f"(expected one of: {', '.join(s.value for s in JobStatus)})"
        )
        self.status = status


class JobStatus(Enum):
    """Outcome of the CI job being reported."""
    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: Union[str, "JobStatus"]) -> "JobStatus":
        """Convert a raw status string, raising InvalidStatusError if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidStatusError(value) from None


@dataclass(frozen=True)
class Accessory:
    """Color and label shown for a job outcome."""

    color: str
    result: str


ACCESSORIES: Dict[JobStatus, Accessory] = {
    JobStatus.SUCCESS: Accessory(color="#2cbe4e", result="Succeeded"),
    JobStatus.FAILURE: Accessory(color="#cb2431", result="Failed"),
    JobStatus.CANCELLED: Accessory(color="#ffc107", result="Cancelled"),
}


def resolve_accessory(status: Union[str, JobStatus]) -> Accessory:
    """Look up the fixed Accessory for a status."""
    return ACCESSORIES[JobStatus.parse(status)]


class RenderMode(Enum):
    """How the message body is rendered."""
    COMPACT = "compact"
    RELEASE = "release"
    FULL = "full"

    @classmethod
    def select(cls, compact: bool, release: bool) -> "RenderMode":
        """Pick the mode from caller flags. Compact takes precedence over release."""
        if compact:
            return cls.COMPACT
        if release:
            return cls.RELEASE
        return cls.FULL


@dataclass(frozen=True)
class EventContext:
    """Read-only snapshot of the GitHub Actions event that triggered the job."""

    sha: str
    event_name: str
    workflow: str
    ref: str
    actor: str
    owner: str
    repo: str
    issue_number: Optional[int] = None
    head_ref: str = ""
    server_url: str = DEFAULT_SERVER_URL
    api_url: str = DEFAULT_API_URL

    @property
    def is_pull_request(self) -> bool:
        return self.event_name == "pull_request"

    @property
    def repo_slug(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def repo_url(self) -> str:
        return f"{self.server_url}/{self.owner}/{self.repo}"

    @property
    def pull_request_url(self) -> str:
        return f"{self.repo_url}/pull/{self.issue_number}"

    @property
    def commit_checks_url(self) -> str:
        return f"{self.repo_url}/commit/{self.sha}/checks"

    @property
    def checks_url(self) -> str:
        """PR checks page for pull_request events, commit checks page otherwise."""
        if self.is_pull_request:
            return f"{self.pull_request_url}/checks"
        return self.commit_checks_url

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EventContext":
        """
        Create context from the GitHub Actions runner environment.

        Args:
            environ: Environment mapping (defaults to os.environ)

        Raises:
            ValueError: If GITHUB_REPOSITORY is not in owner/repo form
        """
        env = os.environ if environ is None else environ

        repository = env.get("GITHUB_REPOSITORY", "")
        owner, sep, repo = repository.partition("/")
        if not sep or not owner or not repo:
            raise ValueError(f"GITHUB_REPOSITORY must be 'owner/repo', got {repository!r}")

        event_name = env.get("GITHUB_EVENT_NAME", "")
        issue_number = _read_issue_number(env.get("GITHUB_EVENT_PATH"))
        if event_name == "pull_request" and issue_number is None:
            logger.warning("No pull request number in GITHUB_EVENT_PATH, PR links will be incomplete")

        return cls(
            sha=env.get("GITHUB_SHA", ""),
            event_name=event_name,
            workflow=env.get("GITHUB_WORKFLOW", ""),
            ref=env.get("GITHUB_REF", ""),
            actor=env.get("GITHUB_ACTOR", ""),
            owner=owner,
            repo=repo,
            issue_number=issue_number,
            head_ref=env.get("GITHUB_HEAD_REF", ""),
            server_url=env.get("GITHUB_SERVER_URL") or DEFAULT_SERVER_URL,
            api_url=env.get("GITHUB_API_URL") or DEFAULT_API_URL,
        )


def _read_issue_number(event_path: Optional[str]) -> Optional[int]:
    """Read the issue or pull request number from the webhook event file."""
    if not event_path or not os.path.exists(event_path):
        return None

    with open(event_path, encoding="utf-8") as f:
        event = json.load(f)

    for key in ("issue", "pull_request"):
        number = (event.get(key) or {}).get("number")
        if number is not None:
            return int(number)

    number = event.get("number")
    return int(number) if number is not None else None


@dataclass(frozen=True)
class Field:
    """A labeled mrkdwn field inside a section block."""

    label: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {"type": "mrkdwn", "text": f"*{self.label}*\n{self.value}"}


@dataclass(frozen=True)
class CompactSection:
    """Single condensed summary line."""

    text: str
    mode = RenderMode.COMPACT

    def to_block(self) -> Dict[str, Any]:
        return {"type": "section", "text": {"type": "mrkdwn", "text": self.text}}


@dataclass(frozen=True)
class ReleaseSection:
    """Single link to a release tag page."""

    text: str
    mode = RenderMode.RELEASE

    def to_block(self) -> Dict[str, Any]:
        return {"type": "section", "text": {"type": "mrkdwn", "text": self.text}}


@dataclass(frozen=True)
class FullSection:
    """Structured context fields, optionally followed by commit fields."""

    fields: Tuple[Field, ...] = field(default_factory=tuple)
    mode = RenderMode.FULL

    def to_block(self) -> Dict[str, Any]:
        return {"type": "section", "fields": [f.to_dict() for f in self.fields]}


Section = Union[CompactSection, ReleaseSection, FullSection]


@dataclass(frozen=True)
class Payload:
    """Complete message ready to be posted to an incoming webhook."""

    text: str
    color: str
    section: Section
    unfurl_links: bool = True

    @property
    def mode(self) -> RenderMode:
        return self.section.mode

    @property
    def fields(self) -> List[Field]:
        """Section fields (empty for compact and release messages)."""
        if isinstance(self.section, FullSection):
            return list(self.section.fields)
        return []

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the incoming webhook JSON body."""
        return {
            "text": self.text,
            "attachments": [
                {
                    "color": self.color,
                    "blocks": [self.section.to_block()],
                }
            ],
            "unfurl_links": self.unfurl_links,
        }
