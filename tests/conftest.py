"""Shared pytest fixtures for notifier tests."""

import pytest

from actions_notify.api.client import CommitInfo, MockGitHubApiClient
from actions_notify.types import EventContext

NOTIFIER_ENV_VARS = [
    'JOB_NAME', 'JOB_STATUS', 'SLACK_MENTION', 'SLACK_MENTION_IF',
    'NOTIFY_COMMIT', 'NOTIFY_COMPACT', 'NOTIFY_RELEASE', 'CREATED_TAG',
    'GITHUB_TOKEN', 'SLACK_WEBHOOK_URL', 'SLACK_CHANNEL', 'SLACK_USERNAME',
    'SLACK_ICON_EMOJI', 'SLACK_ICON_URL', 'SENTRY_DSN', 'SENTRY_ENVIRONMENT',
    'SENTRY_TRACES_SAMPLE_RATE', 'GITHUB_SHA', 'GITHUB_EVENT_NAME',
    'GITHUB_WORKFLOW', 'GITHUB_REF', 'GITHUB_ACTOR', 'GITHUB_REPOSITORY',
    'GITHUB_EVENT_PATH', 'GITHUB_HEAD_REF', 'GITHUB_SERVER_URL', 'GITHUB_API_URL',
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove notifier and runner variables so tests don't see the host CI."""
    for name in NOTIFIER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def push_context():
    """Context for a push to main."""
    return EventContext(
        sha='abc123',
        event_name='push',
        workflow='CI',
        ref='refs/heads/main',
        actor='octocat',
        owner='acme',
        repo='widgets',
    )


@pytest.fixture
def pr_context():
    """Context for a pull_request event on PR #42."""
    return EventContext(
        sha='def456',
        event_name='pull_request',
        workflow='CI',
        ref='refs/pull/42/merge',
        actor='octocat',
        owner='acme',
        repo='widgets',
        issue_number=42,
        head_ref='refs/heads/feature/login',
    )


@pytest.fixture
def sample_commit():
    """Commit linked to a GitHub user."""
    return CommitInfo(
        message='Fix login redirect\n\nLonger description of the change.',
        html_url='https://github.com/acme/widgets/commit/abc123',
        author_login='octocat',
        author_url='https://github.com/octocat',
    )


@pytest.fixture
def mock_github(sample_commit):
    """Mock GitHub client that knows the push commit."""
    client = MockGitHubApiClient()
    client.set_response('acme', 'widgets', 'abc123', sample_commit)
    return client


@pytest.fixture
def runner_env(clean_env, tmp_path):
    """GitHub Actions runner variables for a push event."""
    event_path = tmp_path / 'event.json'
    event_path.write_text('{"ref": "refs/heads/main"}')

    clean_env.setenv('GITHUB_SHA', 'abc123')
    clean_env.setenv('GITHUB_EVENT_NAME', 'push')
    clean_env.setenv('GITHUB_WORKFLOW', 'CI')
    clean_env.setenv('GITHUB_REF', 'refs/heads/main')
    clean_env.setenv('GITHUB_ACTOR', 'octocat')
    clean_env.setenv('GITHUB_REPOSITORY', 'acme/widgets')
    clean_env.setenv('GITHUB_EVENT_PATH', str(event_path))
    return clean_env
