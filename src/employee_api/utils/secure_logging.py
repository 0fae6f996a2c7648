"""Logging helpers that keep storage details out of production logs."""

import logging
import re
from typing import Any

from employee_api.config import get_settings

MAX_LOGGED_MESSAGE_LENGTH = 200

_URL_PATTERN = re.compile(r"(postgresql|postgres|sqlite)(\+\w+)?://[^\s]+")
_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+")
_PATH_PATTERN = re.compile(r"['\"]?(/[a-zA-Z0-9_./\-]+|[A-Z]:\\[^\s'\"]+)['\"]?")


def sanitize_exception_message(error: Exception) -> str:
    """Mask connection strings, file paths and email addresses in an error.

    Unique violations echo the offending key (often an email), so the
    message is scrubbed before it reaches a non-debug log.

    Args:
        error: The exception to sanitize

    Returns:
        Sanitized error message suitable for production logs
    """
    error_msg = str(error)
    error_msg = _URL_PATTERN.sub("[URL]", error_msg)
    error_msg = _PATH_PATTERN.sub("[PATH]", error_msg)
    error_msg = _EMAIL_PATTERN.sub("[EMAIL]", error_msg)

    if len(error_msg) > MAX_LOGGED_MESSAGE_LENGTH:
        error_msg = error_msg[: MAX_LOGGED_MESSAGE_LENGTH - 3] + "..."

    return error_msg


def log_error(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
    **kwargs: Any,
) -> None:
    """Log an error with full detail in debug mode, sanitized otherwise.

    Args:
        logger: The logger instance to use
        message: The log message (should be generic, no sensitive data)
        error: Optional exception to include
        **kwargs: Additional context, attached as log record extras
    """
    if get_settings().debug:
        if error:
            logger.error(f"{message}: {error}", exc_info=error, extra=kwargs)
        else:
            logger.error(message, extra=kwargs)
    elif error:
        logger.error(f"{message}: {sanitize_exception_message(error)}", extra=kwargs)
    else:
        logger.error(message, extra=kwargs)
