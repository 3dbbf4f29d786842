"""Request assembly and dispatch for the ``/info`` and ``/exchange`` endpoints."""

import logging
from decimal import Decimal

from hyperliquid_hip3.errors import (
    ApiError,
    BadGateway,
    BadHttpStatus,
    BadRequest,
    Forbidden,
    GatewayTimeout,
    InternalServerError,
    NotFound,
    PriceUnavailableError,
    RateLimited,
    ServiceUnavailable,
    Unauthorized,
    UnprocessableEntity,
    ValidationError,
)
from hyperliquid_hip3.executors.interface import HttpExecutor, HttpResponse
from hyperliquid_hip3.helpers import EXCHANGE_PATH, INFO_PATH
from hyperliquid_hip3.signer import SignedEnvelope
from hyperliquid_hip3.types import (
    JsonObject,
    JsonValue,
    Operation,
    TradeIntent,
    numeric_to_decimal,
)

log = logging.getLogger(__name__)


def raise_response_errors(response: HttpResponse) -> None:
    """Check HTTP response status and raise appropriate errors.

    Args:
        response: The HTTP response to validate

    Raises:
        BadRequest: For 400 status codes
        Unauthorized: For 401 status codes
        Forbidden: For 403 status codes
        NotFound: For 404 status codes
        UnprocessableEntity: For 422 status codes
        RateLimited: For 429 status codes
        BadHttpStatus: For other 4XX status codes
        InternalServerError: For 500 status codes
        BadGateway: For 502 status codes
        ServiceUnavailable: For 503 status codes
        GatewayTimeout: For 504 status codes

    """
    status = response.status

    # Success status codes (2xx)
    if 200 <= status < 300:
        return

    body = response.body
    if isinstance(body, str):
        error_message = body or "<no error message>"
    else:
        error_message = str(body) if body else "<no error message>"

    # 4xx Client Errors
    if status == 400:
        raise BadRequest(status, f"Bad request: {error_message}")

    if status == 401:
        raise Unauthorized(status, f"Unauthorized: {error_message}")

    if status == 403:
        raise Forbidden(status, f"Forbidden: {error_message}")

    if status == 404:
        raise NotFound(status, f"Not found: {error_message}")

    if status == 422:
        raise UnprocessableEntity(status, f"Unprocessable request: {error_message}")

    if status == 429:
        raise RateLimited(status, f"Rate limit exceeded: {error_message}")

    # Other 4xx errors
    if 400 <= status < 500:
        raise BadHttpStatus(status, f"Client error ({status}): {error_message}")

    # 5xx Server Errors
    if status == 500:
        raise InternalServerError(status, f"Internal server error: {error_message}")

    if status == 502:
        raise BadGateway(status, f"Bad gateway: {error_message}")

    if status == 503:
        raise ServiceUnavailable(status, f"Service unavailable: {error_message}")

    if status == 504:
        raise GatewayTimeout(status, f"Gateway timeout: {error_message}")

    # Other 5xx errors
    if 500 <= status < 600:
        raise InternalServerError(status, f"Server error ({status}): {error_message}")

    raise BadHttpStatus(status, f"Unexpected status code ({status}): {error_message}")


def raise_exchange_rejection(body: JsonValue) -> None:
    """Raise ApiError when ``/exchange`` answers ``{"status": "err", ...}``.

    Raises:
        ApiError: With the exchange's ``response`` field verbatim

    """
    if isinstance(body, dict) and body.get("status") == "err":
        raise ApiError(body.get("response"))


# ============================================================================
# INFO QUERY BODIES
# ============================================================================


def all_mids_body() -> JsonObject:
    return {"type": "allMids"}


def meta_body() -> JsonObject:
    return {"type": "meta"}


def info_query_body(intent: TradeIntent, address: str) -> JsonObject:
    """Map a read-only intent to its ``/info`` request body.

    Args:
        intent: A read-only intent
        address: Effective trading address of the signing identity

    Raises:
        ValidationError: If the operation is not a read-only query or a
            required field is missing

    """
    operation = intent.operation
    if operation is Operation.GET_OPEN_ORDERS:
        return {"type": "openOrders", "user": address}
    if operation in (Operation.GET_POSITIONS, Operation.GET_ACCOUNT_SUMMARY):
        return {"type": "clearinghouseState", "user": address}
    if operation is Operation.GET_MARKET_INFO:
        return {"type": "perpDexs"}
    if operation is Operation.GET_ORDER_BOOK:
        if not intent.asset:
            raise ValidationError("Asset is required for the order book")
        return {"type": "l2Book", "coin": intent.asset}
    if operation is Operation.GET_USER_FILLS:
        return {"type": "userFills", "user": intent.user_address or address}
    raise ValidationError(f"{operation.value} is not a read-only query")


# ============================================================================
# DISPATCHER
# ============================================================================


class RequestDispatcher:
    """Posts info queries and signed envelopes to one API base URL.

    No retries and no timeout policy: transport errors raised by the executor
    propagate unchanged.
    """

    def __init__(self, base_url: str, executor: HttpExecutor):
        """Initialize the dispatcher.

        Args:
            base_url: API base URL, fixed for the lifetime of the dispatcher
            executor: HTTP transport

        """
        self.base_url = base_url.rstrip("/")
        self._http_executor = executor

    def info(self, body: JsonObject) -> JsonValue:
        """``POST /info`` and return the decoded response."""
        return self.__post(INFO_PATH, body)

    def exchange(self, envelope: SignedEnvelope) -> JsonValue:
        """``POST /exchange`` with a signed envelope.

        Raises:
            ApiError: If the exchange rejects the action

        """
        body = self.__post(EXCHANGE_PATH, envelope.to_dict())
        raise_exchange_rejection(body)
        return body

    def all_mids(self) -> JsonObject:
        """Mid prices keyed by coin."""
        mids = self.info(all_mids_body())
        if not isinstance(mids, dict):
            log.warning("Unexpected allMids response type %s", type(mids).__name__)
            return {}
        return mids

    def mid_price(self, asset: str) -> Decimal:
        """Current mid price for an asset.

        Raises:
            PriceUnavailableError: If no usable mid price is published

        """
        mid = self.all_mids().get(asset)
        if not mid:
            raise PriceUnavailableError(asset)
        try:
            price = numeric_to_decimal(mid)  # type: ignore
        except ValidationError as e:
            raise PriceUnavailableError(asset) from e
        if price <= 0:
            raise PriceUnavailableError(asset)
        return price

    def __post(self, path: str, body: JsonValue) -> JsonValue:
        url = f"{self.base_url}{path}"
        log.debug("POST %s", url)
        response = self._http_executor.post(url, body)
        raise_response_errors(response)
        return response.body
