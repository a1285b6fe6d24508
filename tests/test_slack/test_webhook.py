"""Tests for the webhook sender (slack/client.py)."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from actions_notify.slack.client import DeliveryError, SlackWebhook, send
from actions_notify.types import CompactSection, Payload

WEBHOOK_URL = "https://hooks.slack.com/services/T000/B000/XXXX"


def _response(text, status_code=200):
    response = MagicMock()
    response.text = text
    response.status_code = status_code
    return response


@pytest.fixture
def payload():
    return Payload(text="build Succeeded", color="#2cbe4e", section=CompactSection("done"))


class TestSlackWebhook:
    @patch("actions_notify.slack.client.requests.post")
    def test_send_ok(self, mock_post, payload):
        mock_post.return_value = _response("ok")

        assert SlackWebhook(WEBHOOK_URL).send(payload) == "ok"

        mock_post.assert_called_once_with(WEBHOOK_URL, json=payload.to_dict())

    @patch("actions_notify.slack.client.requests.post")
    def test_defaults_merged_under_payload(self, mock_post, payload):
        mock_post.return_value = _response("ok")
        webhook = SlackWebhook(WEBHOOK_URL, {
            "username": "ci-bot",
            "channel": "#builds",
            "icon_url": None,
            "text": "overridden",
        })

        webhook.send(payload)

        body = mock_post.call_args.kwargs["json"]
        assert body["username"] == "ci-bot"
        assert body["channel"] == "#builds"
        assert "icon_url" not in body
        assert body["text"] == "build Succeeded"

    @patch("actions_notify.slack.client.requests.post")
    def test_accepts_rendered_dict(self, mock_post):
        mock_post.return_value = _response("ok")

        SlackWebhook(WEBHOOK_URL).send({"text": "hello"})

        assert mock_post.call_args.kwargs["json"] == {"text": "hello"}

    @patch("actions_notify.slack.client.requests.post")
    def test_rejected_payload_raises_delivery_error(self, mock_post, payload):
        mock_post.return_value = _response("error: invalid_payload", status_code=400)

        with pytest.raises(DeliveryError, match="error: invalid_payload") as exc_info:
            SlackWebhook(WEBHOOK_URL).send(payload)

        assert exc_info.value.response_text == "error: invalid_payload"

    @patch("actions_notify.slack.client.requests.post")
    def test_rejection_logged_as_warning(self, mock_post, payload, caplog):
        mock_post.return_value = _response("invalid_token", status_code=403)

        with caplog.at_level("DEBUG", logger="actions_notify.slack.client"):
            with pytest.raises(DeliveryError):
                SlackWebhook(WEBHOOK_URL).send(payload)

        levels = [r.levelname for r in caplog.records if r.name == "actions_notify.slack.client"]
        assert levels == ["WARNING"]

    @pytest.mark.parametrize("text", ["", "OK", "ok\n", "no_service"])
    @patch("actions_notify.slack.client.requests.post")
    def test_anything_but_ok_raises(self, mock_post, text, payload):
        mock_post.return_value = _response(text)

        with pytest.raises(DeliveryError):
            SlackWebhook(WEBHOOK_URL).send(payload)

    @patch("actions_notify.slack.client.requests.post")
    def test_transport_error_propagates(self, mock_post, payload):
        mock_post.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(requests.ConnectionError):
            SlackWebhook(WEBHOOK_URL).send(payload)


class TestSend:
    @patch("actions_notify.slack.client.requests.post")
    def test_send_function(self, mock_post, payload):
        mock_post.return_value = _response("ok")

        assert send(WEBHOOK_URL, {"username": "ci-bot"}, payload) == "ok"
        assert mock_post.call_args.kwargs["json"]["username"] == "ci-bot"

    @patch("actions_notify.slack.client.requests.post")
    def test_send_function_raises(self, mock_post, payload):
        mock_post.return_value = _response("invalid_token", status_code=403)

        with pytest.raises(DeliveryError, match="invalid_token"):
            send(WEBHOOK_URL, None, payload)
