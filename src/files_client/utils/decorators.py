"""Decorator utilities for cross-cutting concerns."""
import functools
import logging
from typing import Any, Callable, Optional, TypeVar, cast

from files_client.errors import FileRequestError

# Setup logging
logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def log_request_build(func: Optional[F] = None, *, logger_name: Optional[str] = None):
    """Decorator to log the descriptors a builder function produces.

    Successful builds are logged at DEBUG with method and URL. Builder errors
    are logged at WARNING and re-raised unchanged.

    Args:
        func: The builder function to decorate
        logger_name: Optional logger name (defaults to module logger)

    Returns:
        Decorated function, or a decorator when called with keyword arguments only
    """
    build_logger = logging.getLogger(logger_name) if logger_name else logger

    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                request = fn(*args, **kwargs)
            except FileRequestError as e:
                build_logger.warning(f"{fn.__name__} rejected its arguments: {str(e)}")
                raise
            build_logger.debug(f"{fn.__name__} built {request.method.value} {request.url}")
            return request
        return cast(F, wrapper)

    if func is not None:
        return decorator(func)
    return decorator
