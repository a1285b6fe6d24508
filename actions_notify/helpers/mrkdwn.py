"""Slack mrkdwn formatting helpers."""


def link(url: str, label: str) -> str:
    """Format a mrkdwn link: <url|label>."""
    return f"<{url}|{label}>"


def first_line(message: str) -> str:
    """Return the first line of a (commit) message."""
    return message.split("\n", 1)[0]
