"""Recording start-time utilities.

MythTV hands the job queue a start time as a 14-digit UTC code
(``%STARTTIMEUTC%`` -> ``20160306203000``) while the catalog stores it as
``YYYY-MM-DD HH:MM:SS``. Everything inside mythpms uses the catalog form.
"""

import re
from datetime import datetime, timezone

CATALOG_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_COMPACT_PATTERN = re.compile(r"^\d{14}$")


def parse_start_time(value: str) -> datetime:
    """Parse a recording start time into a UTC datetime.

    Accepts the compact job-queue form (``YYYYMMDDHHMMSS``) and the
    ISO-like catalog forms (``YYYY-MM-DD HH:MM:SS`` or with a ``T``
    separator, optionally suffixed with ``Z``).

    Args:
        value: Start time string as supplied on the command line.

    Returns:
        Timezone-aware datetime in UTC.

    Raises:
        ValueError: If the value matches none of the accepted formats.
    """
    text = value.strip()
    if _COMPACT_PATTERN.match(text):
        dt = datetime.strptime(text, "%Y%m%d%H%M%S")
    else:
        normalized = text.replace("Z", "+00:00")
        try:
            dt = datetime.fromisoformat(normalized)
        except ValueError as e:
            raise ValueError(
                f"Invalid start time '{value}': expected YYYYMMDDHHMMSS "
                "or YYYY-MM-DD HH:MM:SS"
            ) from e

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_catalog_time(dt: datetime) -> str:
    """Format a datetime the way the catalog stores ``starttime``."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime(CATALOG_TIME_FORMAT)


def normalize_start_time(value: str) -> str:
    """Normalize any accepted start-time form to the catalog form.

    Example:
        >>> normalize_start_time("20160306203000")
        '2016-03-06 20:30:00'
    """
    return format_catalog_time(parse_start_time(value))


def compact_start_time(value: str) -> str:
    """Return the 14-digit form used in log file names.

    Example:
        >>> compact_start_time("2016-03-06 20:30:00")
        '20160306203000'
    """
    return parse_start_time(value).strftime("%Y%m%d%H%M%S")
