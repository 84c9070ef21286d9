"""
Time Utilities

The Ionomy API authenticates requests with a Unix timestamp in whole seconds
(the ``api-auth-time`` header), which is also appended to the signed string.
These helpers produce that value from timezone-aware UTC datetimes.
"""

from datetime import datetime, timezone


def datetime_to_timestamp(dt: datetime, milliseconds: bool = False) -> int:
    """
    Convert a datetime object to Unix timestamp.

    Args:
        dt: Datetime object (can be naive or timezone-aware)
        milliseconds: If True, return milliseconds; if False, return seconds

    Returns:
        int: Unix timestamp in seconds or milliseconds

    Examples:
        >>> dt = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        >>> datetime_to_timestamp(dt)
        1704110400

        >>> datetime_to_timestamp(dt, milliseconds=True)
        1704110400000

    Notes:
        - If datetime is naive (no timezone), UTC is assumed
        - Result is always an integer (fractional seconds are truncated)
    """
    # Naive datetimes are treated as UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    if milliseconds:
        return int(dt.timestamp() * 1000)

    return int(dt.timestamp())


def current_utc_timestamp(milliseconds: bool = False) -> int:
    """
    Get current UTC timestamp.

    Args:
        milliseconds: If True, return milliseconds; if False, return seconds

    Returns:
        int: Current Unix timestamp

    Example:
        >>> current_utc_timestamp()
        1704110400
    """
    return datetime_to_timestamp(datetime.now(timezone.utc), milliseconds)
