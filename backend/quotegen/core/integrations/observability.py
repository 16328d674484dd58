"""
Observability hooks.
Exceptions are recorded through the standard logging pipeline.
"""

from fastapi import Request
import logging

from quotegen.core.config import settings

logger = logging.getLogger(__name__)


def setup_observability() -> None:
    """Announce the service identity once at startup."""
    logger.info(
        "Setting up observability",
        extra={
            "service_name": settings.SERVICE_NAME,
            "environment": settings.ENVIRONMENT,
        },
    )


def record_exception(exc: Exception, request: Request) -> None:
    """
    Record an exception against the request that raised it.

    Args:
        exc: The exception that occurred
        request: The FastAPI request object
    """
    logger.error(
        f"Exception recorded: {type(exc).__name__}",
        extra={
            "exception_message": str(exc),
            "path": request.url.path,
            "method": request.method,
        },
    )
