"""
Unified Logging Configuration

All client modules log through loggers under the "ionomy" namespace.
The library itself never installs handlers; applications call setup_logging()
(or configure logging themselves) to see the output.

Usage:
    from ionomy.core.logging import get_logger

    logger = get_logger(__name__)
    logger.debug("Detailed debugging information")

Log Levels used by the client:
    DEBUG    - Request/response traces (endpoint, params, status, timing)
    INFO     - Session lifecycle and configuration summary
    WARNING  - Suspicious configuration (e.g. only half of the credentials set)
    ERROR    - Transport failures and API errors

Configuration:
    Log level of the "ionomy" logger comes from the LOG_LEVEL setting.
    Secrets and request signatures are never logged.
"""

import logging
import sys
from typing import Any, Mapping, Optional

from ionomy.core.config import settings

ROOT_LOGGER_NAME = "ionomy"


def setup_logging(
    log_level: str = "INFO",
    log_format: Optional[str] = None,
    include_timestamp: bool = True,
    include_module: bool = True
) -> logging.Logger:
    """
    Configure console logging for an application using the client.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Custom log format string (uses default if None)
        include_timestamp: Include timestamp in log messages
        include_module: Include logger name in log messages

    Returns:
        logging.Logger: The configured "ionomy" logger

    Example:
        >>> logger = setup_logging(log_level="DEBUG")
        >>> logger.info("Client ready")
        2024-01-01 12:00:00 [INFO] ionomy: Client ready
    """
    if log_format is None:
        format_parts = []

        if include_timestamp:
            format_parts.append("%(asctime)s")

        format_parts.append("[%(levelname)s]")

        if include_module:
            format_parts.append("%(name)s:")

        format_parts.append("%(message)s")

        log_format = " ".join(format_parts)

    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True
    )

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    return root


# Package logger, level taken from settings; handlers are left to the application
logger = logging.getLogger(ROOT_LOGGER_NAME)
logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger inside the "ionomy" namespace.

    Args:
        name: Name for the logger (typically __name__)

    Returns:
        logging.Logger: Child of the "ionomy" logger

    Example:
        >>> get_logger("ionomy.api_client").name
        'ionomy.api_client'
        >>> get_logger("scripts.check").name
        'ionomy.scripts.check'
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def set_log_level(level: str) -> None:
    """
    Change the level of the "ionomy" logger at runtime.

    Args:
        level: New log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))


# ============================================
# Log Helper Functions
# ============================================

def log_api_request(endpoint: str, params: Optional[Mapping[str, Any]] = None, signed: bool = False) -> None:
    """
    Log an outgoing API request.

    Example:
        >>> log_api_request("public/orderbook", {"market": "BTC-LTC", "type": "both"})
        [DEBUG] API Request: GET public/orderbook (unsigned) | Params: {'market': 'BTC-LTC', 'type': 'both'}
    """
    auth = "signed" if signed else "unsigned"
    if params:
        logger.debug(f"API Request: GET {endpoint} ({auth}) | Params: {dict(params)}")
    else:
        logger.debug(f"API Request: GET {endpoint} ({auth})")


def log_api_response(endpoint: str, status: int, response_time: Optional[float] = None) -> None:
    """
    Log an API response with status and timing information.

    Example:
        >>> log_api_response("public/markets", 200, 0.342)
        [DEBUG] API Response: public/markets | Status: 200 | Time: 0.342s
    """
    time_str = f" | Time: {response_time:.3f}s" if response_time is not None else ""
    logger.debug(f"API Response: {endpoint} | Status: {status}{time_str}")
