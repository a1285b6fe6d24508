"""Helpers - Pure utility functions."""

from .mrkdwn import first_line, link

__all__ = [
    'first_line',
    'link',
]
