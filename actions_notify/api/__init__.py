"""API layer - External API communication."""

from .client import CommitInfo, GitHubApiClient, ProductionGitHubApiClient, MockGitHubApiClient

__all__ = [
    'CommitInfo',
    'GitHubApiClient',
    'ProductionGitHubApiClient',
    'MockGitHubApiClient',
]
