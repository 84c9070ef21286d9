"""
Ionomy REST API Client

This module provides an async HTTP client for the Ionomy exchange API.
It handles:
- Signing requests when API credentials are configured
- HTTP GET dispatch (Ionomy uses GET for every endpoint, including orders)
- Unwrapping the {success, message, data} response envelope
- Parameter validation for every endpoint before any network I/O

API Documentation:
    https://ionomy.com/api-documentation

Errors:
    - ValidationError: bad or missing parameters, raised before the request
    - ApiError: the exchange answered with success=false
    - TransportError: the request failed or the body was not a JSON envelope

No retries are performed; every error surfaces directly to the caller.

Usage:
    async with IonomyAPIClient(api_key="...", api_secret="...") as client:
        markets = await client.markets()
        order = await client.limit_buy("BTC-LTC", amount=1.5, price=0.0061)
"""

import asyncio
import time
from typing import Any, Dict, Mapping, Optional, Type

import aiohttp
from pydantic import ValidationError as PydanticValidationError
from yarl import URL

from ionomy.core.config import normalize_base_url, settings
from ionomy.core.exceptions import ApiError, TransportError
from ionomy.core.logging import get_logger, log_api_request, log_api_response
from ionomy.core.schemas import (
    CurrencyQuery,
    LimitOrder,
    MarketQuery,
    OrderBookQuery,
    OrderIdQuery,
    QueryModel,
    ResponseEnvelope,
    WithdrawRequest,
)
from ionomy.core.utils.time import current_utc_timestamp
from ionomy.signer import canonical_url, sign, sign_url


class IonomyAPIClient:
    """
    Async HTTP client for the Ionomy REST API

    Public market endpoints work without credentials. When both api_key and
    api_secret are set, every request is signed and carries the
    api-auth-time / api-auth-key / api-auth-token headers.

    Attributes:
        base_url: API base URL, always ending with "/"
        keep_alive: Whether the owned session reuses connections
        timeout: Total timeout for one request in seconds
        session: aiohttp ClientSession for HTTP requests
        logger: Logger instance for debugging

    Example:
        >>> async with IonomyAPIClient() as client:
        ...     book = await client.order_book("BTC-LTC", type="bid")

    Notes:
        - Constructor arguments left as None fall back to the shared settings
        - Credentials are fixed for the lifetime of the client
        - A session passed in by the caller is used as-is and never closed here
        - Safe to share between concurrent tasks; no mutable state is touched
          while signing or dispatching
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        base_url: Optional[str] = None,
        keep_alive: Optional[bool] = None,
        timeout: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize the Ionomy API client.

        Args:
            api_key: Ionomy API key (empty disables signing)
            api_secret: Ionomy API secret (empty disables signing)
            base_url: API base URL (default "https://ionomy.com/api/v1/")
            keep_alive: Reuse HTTP connections (forwarded to the aiohttp connector)
            timeout: Request timeout in seconds
            session: Existing aiohttp session to use instead of creating one
        """
        self._api_key = settings.ionomy_api_key if api_key is None else api_key
        self._api_secret = settings.ionomy_api_secret if api_secret is None else api_secret
        self.base_url = normalize_base_url(settings.ionomy_base_url if base_url is None else base_url)
        self.keep_alive = settings.ionomy_keep_alive if keep_alive is None else keep_alive
        self.timeout = settings.request_timeout if timeout is None else timeout
        self.session = session
        self._owns_session = session is None
        self.logger = get_logger(__name__)

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def has_credentials(self) -> bool:
        """True when requests will be signed."""
        return bool(self._api_key and self._api_secret)

    # ============================================
    # Context Manager for Session Management
    # ============================================

    async def __aenter__(self):
        """
        Enter async context - creates HTTP session unless one was injected.

        Returns:
            Self for use in async with statement
        """
        if self.session is None:
            self.session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(force_close=not self.keep_alive),
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._owns_session = True
            self.logger.debug(f"IonomyAPIClient session created (keep-alive={self.keep_alive})")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context - closes the HTTP session if this client created it."""
        await self.close()

    async def close(self) -> None:
        """Close the owned HTTP session. Injected sessions are left open."""
        if self.session is not None and self._owns_session:
            await self.session.close()
            self.session = None
            self.logger.debug("IonomyAPIClient session closed")

    # ============================================
    # Signing & Request Primitive
    # ============================================

    def request_signature(
        self,
        endpoint: str,
        params: Optional[Mapping[str, Any]],
        timestamp: int
    ) -> str:
        """
        Signature this client would send for ``endpoint`` at ``timestamp``.

        Example:
            >>> client = IonomyAPIClient(api_key="key", api_secret="secret")
            >>> len(client.request_signature("account/balances", {}, 1700000000))
            128
        """
        return sign(self.base_url, endpoint, params, self._api_secret, timestamp)

    def _auth_headers(self, url: str) -> Dict[str, str]:
        if not self.has_credentials:
            return {}

        timestamp = current_utc_timestamp()
        return {
            "api-auth-time": str(timestamp),
            "api-auth-key": self._api_key,
            "api-auth-token": sign_url(url, self._api_secret, timestamp),
        }

    async def request(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Send a GET request to ``endpoint`` and unwrap the response envelope.

        The URL is built once and used both for the signature and on the wire,
        so the query the server sees is byte-for-byte the one that was signed.

        Args:
            endpoint: Path relative to base_url (e.g. "public/markets")
            params: Query parameters, sent in the given order

        Returns:
            The envelope's ``data`` field, unmodified

        Raises:
            ApiError: If the envelope reports success=false
            TransportError: On connection errors, timeouts or undecodable bodies
            RuntimeError: If the client session has not been opened
        """
        if not self.session:
            raise RuntimeError("Client session not initialized. Use 'async with' statement.")

        params = dict(params or {})
        url = canonical_url(self.base_url, endpoint, params)
        headers = self._auth_headers(url)

        log_api_request(endpoint, params, signed=bool(headers))
        started = time.monotonic()

        try:
            async with self.session.get(
                URL(url, encoded=True),
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as resp:
                status = resp.status
                log_api_response(endpoint, status, time.monotonic() - started)
                try:
                    body = await resp.json(content_type=None)
                except ValueError as e:
                    self.logger.error(f"Non-JSON response (HTTP {status}) on {endpoint}")
                    raise TransportError(
                        f"Invalid JSON response from {endpoint} (HTTP {status})",
                        cause=e,
                        status_code=status
                    ) from e

        except asyncio.TimeoutError as e:
            self.logger.error(f"Timeout on {endpoint} after {self.timeout}s")
            raise TransportError(f"Request to {endpoint} timed out", cause=e) from e

        except aiohttp.ClientError as e:
            self.logger.error(f"Request failed on {endpoint}: {e}")
            raise TransportError(f"Request to {endpoint} failed: {e}", cause=e) from e

        return self._unwrap(endpoint, status, body)

    def _unwrap(self, endpoint: str, status: int, body: Any) -> Any:
        try:
            envelope = ResponseEnvelope.model_validate(body)
        except PydanticValidationError as e:
            self.logger.error(f"Unexpected response shape (HTTP {status}) on {endpoint}")
            raise TransportError(
                f"Malformed response envelope from {endpoint} (HTTP {status})",
                cause=e,
                status_code=status
            ) from e

        if not envelope.success:
            self.logger.error(f"API error on {endpoint}: {envelope.error_message}")
            raise ApiError(envelope.error_message, status_code=status, payload=body)

        return envelope.data

    async def _query(self, endpoint: str, model: Type[QueryModel], **fields: Any) -> Any:
        # Validation runs before the session is touched
        query = model.build(**fields)
        return await self.request(endpoint, query.to_params())

    # ============================================
    # Public Market Endpoints
    # ============================================

    async def markets(self) -> Any:
        """
        List all markets.

        Ionomy Endpoint:
            GET public/markets
        """
        return await self.request("public/markets")

    async def currencies(self) -> Any:
        """
        List all currencies.

        Ionomy Endpoint:
            GET public/currencies
        """
        return await self.request("public/currencies")

    async def order_book(self, market: str, type: str = "both") -> Any:
        """
        Fetch the order book for a market.

        Args:
            market: Market name (e.g., "BTC-LTC")
            type: Which side to return: "ask", "bid" or "both" (default)

        Returns:
            Order book payload as returned by Ionomy

        Raises:
            ValidationError: If market is empty or type is not ask/bid/both

        Ionomy Endpoint:
            GET public/orderbook?market=BTC-LTC&type=both

        Example:
            >>> book = await client.order_book("BTC-LTC", type="ask")
        """
        return await self._query("public/orderbook", OrderBookQuery, market=market, type=type)

    async def market_summaries(self) -> Any:
        """Fetch 24h summaries for every market (GET public/markets-summaries)."""
        return await self.request("public/markets-summaries")

    async def market_summary(self, market: str) -> Any:
        """Fetch the 24h summary of one market (GET public/market-summary)."""
        return await self._query("public/market-summary", MarketQuery, market=market)

    async def market_history(self, market: str) -> Any:
        """Fetch recent trades of one market (GET public/market-history)."""
        return await self._query("public/market-history", MarketQuery, market=market)

    # ============================================
    # Trading Endpoints (signed)
    # ============================================

    async def limit_buy(self, market: str, amount: float, price: float) -> Any:
        """
        Place a limit buy order.

        Args:
            market: Market name (e.g., "BTC-LTC")
            amount: Quantity to buy, must be greater than 0
            price: Limit price, must be greater than 0

        Returns:
            Order payload as returned by Ionomy (includes the order id)

        Raises:
            ValidationError: If a field is missing or not positive

        Ionomy Endpoint:
            GET market/buy-limit?market=...&amount=...&price=...
        """
        self.logger.info(f"Placing limit buy: {market} amount={amount} price={price}")
        return await self._query("market/buy-limit", LimitOrder, market=market, amount=amount, price=price)

    async def limit_sell(self, market: str, amount: float, price: float) -> Any:
        """
        Place a limit sell order.

        Same parameters and validation as limit_buy().

        Ionomy Endpoint:
            GET market/sell-limit?market=...&amount=...&price=...
        """
        self.logger.info(f"Placing limit sell: {market} amount={amount} price={price}")
        return await self._query("market/sell-limit", LimitOrder, market=market, amount=amount, price=price)

    async def cancel_order(self, order_id: str) -> Any:
        """
        Cancel an open order.

        Args:
            order_id: Id returned when the order was placed (sent as "orderId")

        Ionomy Endpoint:
            GET market/cancel-order?orderId=...
        """
        self.logger.info(f"Cancelling order {order_id}")
        return await self._query("market/cancel-order", OrderIdQuery, order_id=order_id)

    async def open_orders(self, market: str) -> Any:
        """List open orders in a market (GET market/open-orders)."""
        return await self._query("market/open-orders", MarketQuery, market=market)

    # ============================================
    # Account Endpoints (signed)
    # ============================================

    async def balances(self) -> Any:
        """List balances for all currencies (GET account/balances)."""
        return await self.request("account/balances")

    async def balance(self, currency: str) -> Any:
        """Fetch the balance of one currency (GET account/balance)."""
        return await self._query("account/balance", CurrencyQuery, currency=currency)

    async def deposit_address(self, currency: str) -> Any:
        return await self._query("account/deposit-address", CurrencyQuery, currency=currency)

    async def deposit_history(self, currency: str) -> Any:
        return await self._query("account/deposit-history", CurrencyQuery, currency=currency)

    async def withdraw(self, currency: str, amount: float, address: str) -> Any:
        """
        Withdraw funds to an external address.

        Args:
            currency: Currency code (e.g., "BTC")
            amount: Amount to withdraw, must be greater than 0
            address: Destination address

        Raises:
            ValidationError: If a field is missing or amount is not positive

        Ionomy Endpoint:
            GET account/withdraw?currency=...&amount=...&address=...
        """
        self.logger.info(f"Requesting withdrawal: {amount} {currency}")
        return await self._query(
            "account/withdraw", WithdrawRequest, currency=currency, amount=amount, address=address
        )

    async def withdrawal_history(self, currency: str) -> Any:
        return await self._query("account/withdrawal-history", CurrencyQuery, currency=currency)

    async def order(self, order_id: str) -> Any:
        """Fetch one order by id (GET account/order?orderId=...)."""
        return await self._query("account/order", OrderIdQuery, order_id=order_id)

    async def order_history(self, market: str) -> Any:
        """List closed orders in a market (GET account/order-history)."""
        return await self._query("account/order-history", MarketQuery, market=market)
