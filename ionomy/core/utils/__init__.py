"""
Core Utilities Package

Modules:
    - time: Unix timestamp helpers used for request authentication
"""

from ionomy.core.utils.time import current_utc_timestamp, datetime_to_timestamp

__all__ = ["current_utc_timestamp", "datetime_to_timestamp"]
