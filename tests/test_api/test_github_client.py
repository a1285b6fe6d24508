"""Tests for the GitHub API client (api/client.py)."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from actions_notify.api.client import CommitInfo, MockGitHubApiClient, ProductionGitHubApiClient

COMMIT_RESPONSE = {
    "sha": "abc123",
    "html_url": "https://github.com/acme/widgets/commit/abc123",
    "commit": {"message": "Fix login redirect\n\nDetails"},
    "author": {"login": "octocat", "html_url": "https://github.com/octocat"},
}


def _response(json_data=None, error=None):
    response = MagicMock()
    response.json.return_value = json_data
    if error is not None:
        response.raise_for_status.side_effect = error
    return response


class TestCommitInfo:
    def test_from_api(self):
        commit = CommitInfo.from_api(COMMIT_RESPONSE)

        assert commit.message == "Fix login redirect\n\nDetails"
        assert commit.html_url == "https://github.com/acme/widgets/commit/abc123"
        assert commit.author_login == "octocat"
        assert commit.has_author

    def test_from_api_null_author(self):
        commit = CommitInfo.from_api({**COMMIT_RESPONSE, "author": None})

        assert commit.author_login is None
        assert not commit.has_author

    def test_from_api_missing_keys(self):
        with pytest.raises(KeyError):
            CommitInfo.from_api({"html_url": "https://github.com/x"})


class TestProductionGitHubApiClient:
    def test_sets_auth_headers(self):
        client = ProductionGitHubApiClient("ghp_test")

        assert client.session.headers["Authorization"] == "token ghp_test"
        assert client.session.headers["Accept"] == "application/vnd.github+json"

    def test_get_commit(self):
        client = ProductionGitHubApiClient("ghp_test")

        with patch.object(client.session, "get", return_value=_response(COMMIT_RESPONSE)) as mock_get:
            commit = client.get_commit("acme", "widgets", "feature/login")

        mock_get.assert_called_once_with(
            "https://api.github.com/repos/acme/widgets/commits/feature/login"
        )
        assert commit.author_url == "https://github.com/octocat"

    def test_custom_api_url(self):
        client = ProductionGitHubApiClient("ghp_test", api_url="https://git.example.com/api/v3/")

        with patch.object(client.session, "get", return_value=_response(COMMIT_RESPONSE)) as mock_get:
            client.get_commit("acme", "widgets", "abc123")

        assert mock_get.call_args.args[0] == "https://git.example.com/api/v3/repos/acme/widgets/commits/abc123"

    def test_http_error_propagates(self):
        client = ProductionGitHubApiClient("ghp_test")
        error = requests.HTTPError("422 Client Error: Unprocessable Entity")

        with patch.object(client.session, "get", return_value=_response(error=error)):
            with pytest.raises(requests.HTTPError, match="422"):
                client.get_commit("acme", "widgets", "missing")

    def test_malformed_body_propagates(self):
        client = ProductionGitHubApiClient("ghp_test")

        with patch.object(client.session, "get", return_value=_response({"message": "weird"})):
            with pytest.raises(KeyError):
                client.get_commit("acme", "widgets", "abc123")


class TestMockGitHubApiClient:
    def test_records_calls_and_reset(self, mock_github):
        mock_github.get_commit("acme", "widgets", "abc123")
        assert mock_github.call_count == 1

        mock_github.reset()
        assert mock_github.call_count == 0
        assert mock_github.responses == {}

    def test_unknown_ref_raises(self):
        with pytest.raises(KeyError):
            MockGitHubApiClient().get_commit("acme", "widgets", "nope")
