"""
Ionomy Exchange API Client

Async client for the Ionomy REST API with HMAC-SHA512 request signing.

Usage:
    from ionomy import IonomyAPIClient, ApiError

    async with IonomyAPIClient(api_key="...", api_secret="...") as client:
        balances = await client.balances()
"""

from ionomy.api_client import IonomyAPIClient
from ionomy.core.exceptions import ApiError, IonomyError, TransportError, ValidationError
from ionomy.signer import sign

__all__ = [
    "IonomyAPIClient",
    "IonomyError",
    "ValidationError",
    "ApiError",
    "TransportError",
    "sign",
]
