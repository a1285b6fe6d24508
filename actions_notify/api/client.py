"""GitHub API Client - Interface and implementations for commit lookups."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import requests

from ..types import DEFAULT_API_URL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommitInfo:
    """The parts of a commit shown in a notification."""

    message: str
    html_url: str
    author_login: Optional[str] = None
    author_url: Optional[str] = None

    @property
    def has_author(self) -> bool:
        """True when the commit is linked to a GitHub user account."""
        return bool(self.author_login)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "CommitInfo":
        """
        Build from a GET /repos/{owner}/{repo}/commits/{ref} response.

        Raises:
            KeyError: If required keys are missing
        """
        author = data.get("author")
        return cls(
            message=data["commit"]["message"],
            html_url=data["html_url"],
            author_login=author["login"] if author else None,
            author_url=author["html_url"] if author else None,
        )


class GitHubApiClient(ABC):
    """Abstract interface for GitHub API calls."""

    @abstractmethod
    def get_commit(self, owner: str, repo: str, ref: str) -> CommitInfo:
        """Get a single commit by sha or branch name."""
        pass


class ProductionGitHubApiClient(GitHubApiClient):
    """Real GitHub REST API client using requests."""

    def __init__(self, token: str, api_url: str = DEFAULT_API_URL):
        self.api_url = api_url.rstrip("/")
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"token {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        })

    def get_commit(self, owner: str, repo: str, ref: str) -> CommitInfo:
        url = f"{self.api_url}/repos/{owner}/{repo}/commits/{ref}"
        logger.debug("Fetching commit %s for %s/%s", ref, owner, repo)

        response = self.session.get(url)
        response.raise_for_status()
        return CommitInfo.from_api(response.json())


class MockGitHubApiClient(GitHubApiClient):
    """Mock client for testing."""

    def __init__(self):
        self.responses: Dict[str, CommitInfo] = {}
        self.calls: List[Tuple[str, str, str]] = []
        self.error: Optional[Exception] = None

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def get_commit(self, owner: str, repo: str, ref: str) -> CommitInfo:
        self.calls.append((owner, repo, ref))
        if self.error is not None:
            raise self.error
        return self.responses[f"{owner}/{repo}@{ref}"]

    def set_response(self, owner: str, repo: str, ref: str, commit: CommitInfo) -> None:
        """Test helper to set mock responses."""
        self.responses[f"{owner}/{repo}@{ref}"] = commit

    def reset(self) -> None:
        """Reset recorded calls and responses."""
        self.calls = []
        self.responses = {}
        self.error = None
