"""
Request and Response Schemas

This module defines the Pydantic models exchanged with the Ionomy API.

Response side:
    - ResponseEnvelope: the {success, message, data} wrapper around every reply

Request side (one model per parameter shape):
    - MarketQuery: endpoints taking a single market (e.g. "BTC-LTC")
    - CurrencyQuery: endpoints taking a single currency (e.g. "BTC")
    - OrderIdQuery: endpoints taking an order id
    - OrderBookQuery: market + order book side
    - LimitOrder: market + amount + price
    - WithdrawRequest: currency + amount + destination address

Request models are validated at construction. QueryModel.build() turns
pydantic's validation errors into the client's ValidationError, naming the
offending wire parameter. to_params() returns the query parameters in the
order the fields are declared, which is the order they are signed and sent in.
"""

from typing import Annotated, Any, Dict, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic import ValidationError as PydanticValidationError

from ionomy.core.exceptions import ValidationError


ORDER_BOOK_TYPES = ("ask", "bid", "both")

# Required text parameter: surrounding whitespace dropped, empty rejected
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Order amounts and prices: finite and strictly positive
PositiveNumber = Annotated[float, Field(gt=0, allow_inf_nan=False)]


# ============================================
# Response Envelope
# ============================================

class ResponseEnvelope(BaseModel):
    """
    Wrapper returned by every Ionomy endpoint.

    Attributes:
        success: Whether the call succeeded
        message: Error description (present on failure)
        data: Endpoint payload (present on success)

    Example:
        >>> ResponseEnvelope.model_validate({"success": True, "data": {"x": 1}}).data
        {'x': 1}
    """

    model_config = ConfigDict(extra="allow")

    success: bool
    message: Optional[Any] = None
    data: Any = None

    @property
    def error_message(self) -> str:
        """Message to report for a failed call."""
        if self.message is None:
            return "Ionomy API request failed"
        return self.message if isinstance(self.message, str) else str(self.message)


# ============================================
# Request Parameter Models
# ============================================

class QueryModel(BaseModel):
    """Base class for validated endpoint parameters."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    @classmethod
    def build(cls, **fields: Any) -> "QueryModel":
        """
        Validate ``fields`` and return the model.

        Raises:
            ValidationError: Naming the first invalid parameter
        """
        try:
            return cls(**fields)
        except PydanticValidationError as exc:
            raise _to_validation_error(cls, exc) from None

    def to_params(self) -> Dict[str, Any]:
        """Query parameters keyed by wire name, in declaration order."""
        return self.model_dump(by_alias=True)


class MarketQuery(QueryModel):
    market: RequiredText


class CurrencyQuery(QueryModel):
    currency: RequiredText


class OrderIdQuery(QueryModel):
    order_id: RequiredText = Field(alias="orderId")


class OrderBookQuery(QueryModel):
    """Order book request; ``type`` selects the ask side, bid side or both."""

    market: RequiredText
    type: Literal["ask", "bid", "both"] = "both"


class LimitOrder(QueryModel):
    """Limit buy/sell order: ``amount`` units of ``market`` at ``price``."""

    market: RequiredText
    amount: PositiveNumber
    price: PositiveNumber


class WithdrawRequest(QueryModel):
    """Withdrawal of ``amount`` ``currency`` to ``address``."""

    currency: RequiredText
    amount: PositiveNumber
    address: RequiredText


def _to_validation_error(model: Type[QueryModel], exc: PydanticValidationError) -> ValidationError:
    error = exc.errors()[0]
    field = str(error["loc"][0]) if error["loc"] else None

    # Report the wire name (e.g. "orderId") whichever key pydantic used
    field_info = model.model_fields.get(field) if field else None
    if field_info is not None and field_info.alias:
        field = field_info.alias

    kind = error["type"]
    ctx = error.get("ctx") or {}

    if kind == "literal_error":
        message = f"{field} must be one of: {', '.join(ORDER_BOOK_TYPES)}"
    elif kind in ("missing", "string_too_short") or error.get("input") is None:
        message = f"{field} is required"
    elif kind == "greater_than":
        message = f"{field} must be greater than {ctx.get('gt', 0)}"
    else:
        message = f"{field} is invalid: {error['msg']}"

    return ValidationError(message, field=field)
