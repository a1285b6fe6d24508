"""
Monitoring Decorators

Provides decorators for automatic error capture and performance tracking.
"""

import functools
import logging
import time
from typing import Any, Callable, Dict, Optional, TypeVar, cast

from .sentry import add_breadcrumb, capture_exception

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def capture_errors(
    step_name: Optional[str] = None,
    tags: Optional[Dict[str, str]] = None,
) -> Callable[[F], F]:
    """
    Decorator to capture exceptions in Sentry and re-raise them.

    Args:
        step_name: Optional step name for context
        tags: Additional tags to include

    Usage:
        @capture_errors(step_name="deliver")
        def notify():
            ...
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            name = step_name or func.__name__

            add_breadcrumb(message=f"Starting {name}")

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                error_tags = {"step": name}
                if tags:
                    error_tags.update(tags)

                capture_exception(
                    exception=e,
                    tags=error_tags,
                    extra={"function": func.__name__},
                )
                raise

            add_breadcrumb(message=f"Completed {name}")
            return result

        return cast(F, wrapper)

    return decorator


def track_performance(
    operation_name: Optional[str] = None,
    warn_threshold_seconds: float = 10.0,
) -> Callable[[F], F]:
    """
    Decorator to time a call and warn when it runs long.

    Args:
        operation_name: Name for the operation
        warn_threshold_seconds: Log warning if exceeds this duration
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            name = operation_name or func.__name__
            start_time = time.time()

            try:
                return func(*args, **kwargs)
            finally:
                duration = time.time() - start_time

                add_breadcrumb(
                    message=f"{name} completed in {duration:.2f}s",
                    category="performance",
                    data={"duration_seconds": duration},
                )

                if duration > warn_threshold_seconds:
                    logger.warning(
                        "%s took %.2f seconds (threshold: %.2f)",
                        name,
                        duration,
                        warn_threshold_seconds,
                    )

        return cast(F, wrapper)

    return decorator
