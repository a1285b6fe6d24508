"""
Sentry Setup and Context Management

Initializes Sentry SDK and provides context enrichment helpers.
"""

import logging
from typing import Any, Dict, Optional

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from ..config import SentryConfig
from ..types import EventContext

logger = logging.getLogger(__name__)

# Track initialization state
_sentry_initialized = False


def init_sentry(config: Optional[SentryConfig] = None) -> bool:
    """
    Initialize Sentry SDK.

    Args:
        config: SentryConfig with DSN

    Returns:
        True if initialized successfully
    """
    global _sentry_initialized

    if _sentry_initialized:
        return True

    config = config or SentryConfig.from_env()

    if not config.enabled:
        logger.debug("Sentry not configured, skipping initialization")
        return False

    try:
        logging_integration = LoggingIntegration(
            level=logging.INFO,  # Capture INFO and above as breadcrumbs
            event_level=logging.ERROR,  # Send ERROR and above as events
        )

        sentry_sdk.init(
            dsn=config.dsn,
            environment=config.environment,
            traces_sample_rate=config.traces_sample_rate,
            integrations=[logging_integration],
            send_default_pii=False,
            attach_stacktrace=True,
        )
    except Exception as e:
        logger.error("Failed to initialize Sentry: %s", e)
        return False

    _sentry_initialized = True
    logger.debug("Sentry initialized successfully")
    return True


def set_workflow_context(context: EventContext, job_name: str = "") -> None:
    """
    Attach the triggering workflow event to Sentry events.

    Args:
        context: Event context
        job_name: Job being reported
    """
    if not _sentry_initialized:
        return

    sentry_sdk.set_context("workflow", {
        "repository": context.repo_slug,
        "workflow": context.workflow,
        "event_name": context.event_name,
        "ref": context.ref,
        "sha": context.sha,
        "actor": context.actor,
        "job_name": job_name,
    })
    sentry_sdk.set_tag("repository", context.repo_slug)
    sentry_sdk.set_tag("event_name", context.event_name)


def add_breadcrumb(
    message: str,
    category: str = "notify",
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Add a breadcrumb to the current Sentry scope.

    Args:
        message: Breadcrumb message
        category: Category (notify, api, webhook)
        level: Level (debug, info, warning, error)
        data: Additional data
    """
    if not _sentry_initialized:
        return

    sentry_sdk.add_breadcrumb(
        message=message,
        category=category,
        level=level,
        data=data,
    )


def capture_exception(
    exception: BaseException,
    level: str = "error",
    tags: Optional[Dict[str, str]] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Capture an exception and send to Sentry.

    Args:
        exception: The exception to capture
        level: Severity level (error, warning, info)
        tags: Additional tags
        extra: Additional context data

    Returns:
        Sentry event ID if captured, None otherwise
    """
    if not _sentry_initialized:
        return None

    with sentry_sdk.new_scope() as scope:
        scope.set_level(level)

        for key, value in (tags or {}).items():
            scope.set_tag(key, value)

        for key, value in (extra or {}).items():
            scope.set_extra(key, value)

        return sentry_sdk.capture_exception(exception)
