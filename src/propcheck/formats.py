"""Built-in string formats.

- date-time: ISO 8601 date or date/time
- date: ISO 8601 calendar date, exactly YYYY-MM-DD
- email, uuid, uri: common identifier formats

Usage:
    from propcheck.formats import register_builtin_formats

    register_builtin_formats(context.formats)
"""

import logging
import re
from datetime import datetime

from propcheck.registry import FormatRegistry

logger = logging.getLogger(__name__)


DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")

# Email: Basic RFC 5322 compliant pattern
EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
)

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE
)

URI_PATTERN = re.compile(
    r"^https?://[^\s/$.?#].[^\s]*$",
    re.IGNORECASE
)


def is_date_time(value: str) -> bool:
    """Check if a string parses as an ISO 8601 date/time."""
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_date(value: str) -> bool:
    """Check if a string is an ISO 8601 calendar date (YYYY-MM-DD).

    A valid date-time that is not a bare date is rejected, with a
    warning suggesting the date-time format.
    """
    if not is_date_time(value):
        return False

    if not DATE_PATTERN.match(value):
        logger.warning(
            '"%s" is a valid `date-time` but not `date`, did you mean to use `date-time`?',
            value,
        )
        return False

    return True


def register_builtin_formats(registry: FormatRegistry) -> None:
    """Register date-time, date, email, uuid and uri."""
    registry.register("date-time", is_date_time)
    registry.register("date", is_date)
    registry.register("email", lambda value: bool(EMAIL_PATTERN.match(value)))
    registry.register("uuid", lambda value: bool(UUID_PATTERN.match(value)))
    registry.register("uri", lambda value: bool(URI_PATTERN.match(value)))
