"""
Ionomy Request Signing

Authenticated Ionomy requests carry an HMAC-SHA512 token computed over the
full request URL followed by the Unix timestamp sent in ``api-auth-time``:

    canonical = base_url + endpoint + ["?" + query] + str(timestamp)
    token     = hex(HMAC_SHA512(key=api_secret, msg=canonical))

The query segment (including the "?") is left out when there are no
parameters. The query string is form-encoded (space becomes "+") in the order
the caller supplied the parameters, so {"a": 1, "b": 2} and {"b": 2, "a": 1}
sign differently. The client sends exactly the URL it signed.

Everything here is pure: no I/O, no clock access.

Example:
    >>> token = sign("https://ionomy.com/api/v1/", "public/markets", {}, "secret", 1000)
    >>> len(token)
    128
"""

import hashlib
import hmac
from decimal import Decimal
from typing import Any, Mapping, Optional
from urllib.parse import urlencode


def format_value(value: Any) -> str:
    """
    Render a query parameter value as text.

    Examples:
        >>> format_value(True)
        'true'
        >>> format_value(2.0)
        '2'
        >>> format_value(0.00000001)
        '0.00000001'
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        # Plain positional notation: 1e-08 -> 0.00000001, 2.0 -> 2
        return format(Decimal(repr(value)).normalize(), "f")
    if isinstance(value, Decimal):
        return format(value.normalize(), "f")
    return str(value)


def encode_query(params: Optional[Mapping[str, Any]] = None) -> str:
    """
    Form-encode ``params`` preserving their order.

    Example:
        >>> encode_query({"market": "BTC-LTC", "note": "a b"})
        'market=BTC-LTC&note=a+b'
    """
    if not params:
        return ""
    return urlencode([(key, format_value(value)) for key, value in params.items()])


def canonical_url(base_url: str, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """
    Build the full request URL, which is also the signed string minus the timestamp.

    Example:
        >>> canonical_url("https://ionomy.com/api/v1/", "account/balance", {"currency": "BTC"})
        'https://ionomy.com/api/v1/account/balance?currency=BTC'
    """
    query = encode_query(params)
    return f"{base_url}{endpoint}?{query}" if query else f"{base_url}{endpoint}"


def sign_url(url: str, secret: str, timestamp: int) -> str:
    """Return the lowercase hex HMAC-SHA512 of ``url + str(timestamp)`` keyed by ``secret``."""
    message = f"{url}{timestamp}"
    return hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha512).hexdigest()


def sign(
    base_url: str,
    endpoint: str,
    params: Optional[Mapping[str, Any]],
    secret: str,
    timestamp: int
) -> str:
    """
    Compute the ``api-auth-token`` for a request.

    Args:
        base_url: API base URL (e.g. "https://ionomy.com/api/v1/")
        endpoint: Endpoint path relative to base_url (e.g. "market/buy-limit")
        params: Query parameters in the order they will be sent
        secret: API secret
        timestamp: Unix seconds, as sent in ``api-auth-time``

    Returns:
        128-character lowercase hex signature
    """
    return sign_url(canonical_url(base_url, endpoint, params), secret, timestamp)


__all__ = ["canonical_url", "encode_query", "format_value", "sign", "sign_url"]
