"""
Error Tracking Module

Sentry integration and decorators used around payload building and delivery.
"""

from .sentry import (
    init_sentry,
    set_workflow_context,
    add_breadcrumb,
    capture_exception,
)
from .decorators import capture_errors, track_performance

__all__ = [
    'init_sentry',
    'set_workflow_context',
    'add_breadcrumb',
    'capture_exception',
    'capture_errors',
    'track_performance',
]
