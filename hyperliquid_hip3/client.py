"""Signed-request client for Hyperliquid HIP3 markets.

This module provides the HyperliquidHip3Client class, which runs batches of
trade intents through action building, signing and dispatch, and the
per-batch context it threads through every call.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping

from hyperliquid_hip3.actions import build_action
from hyperliquid_hip3.dispatcher import RequestDispatcher, info_query_body, meta_body
from hyperliquid_hip3.env_setup import load_credentials
from hyperliquid_hip3.executors import DEFAULT_HTTP_EXECUTOR, HttpExecutor
from hyperliquid_hip3.helpers import base_url_for, current_timestamp_ms
from hyperliquid_hip3.keys import SigningIdentity
from hyperliquid_hip3.normalizer import capture, normalize
from hyperliquid_hip3.signer import sign_envelope
from hyperliquid_hip3.types import (
    AssetRef,
    Credentials,
    ItemResult,
    JsonValue,
    Nonce,
    Operation,
    OrderType,
    Side,
    TradeIntent,
)

log = logging.getLogger(__name__)


class NonceSource:
    """Epoch-millisecond nonces that never repeat within one source.

    When two actions are signed within the same millisecond the second one
    gets ``last + 1`` instead of a colliding timestamp.
    """

    def __init__(self, clock: Callable[[], int] = current_timestamp_ms):
        self._clock = clock
        self._last = 0

    def next(self) -> Nonce:
        nonce = max(self._clock(), self._last + 1)
        self._last = nonce
        return nonce


@dataclass(frozen=True)
class BatchContext:
    """State resolved once per batch and shared read-only by every item."""

    base_url: str
    identity: SigningIdentity
    nonces: NonceSource = field(default_factory=NonceSource, compare=False)

    @classmethod
    def from_credentials(cls, credentials: Credentials) -> "BatchContext":
        """Select the base URL from the network and derive the signing identity.

        Raises:
            MissingCredentialsError: If the private key is empty
            SigningError: If the private key is malformed

        """
        return cls(
            base_url=base_url_for(credentials.network),
            identity=SigningIdentity.from_credentials(credentials),
        )


class HyperliquidHip3Client:
    """Hyperliquid client for trading builder-deployed (HIP3) perpetuals.

    Examples:
        .. code-block:: python

            from hyperliquid_hip3 import Credentials, HyperliquidHip3Client, Side

            client = HyperliquidHip3Client(
                Credentials(private_key="abc123...", network="testnet")
            )

            client.place_order("xyz:XYZ100", Side.Buy, "1.0", order_type="limit", price="100.5")
            print(client.get_open_orders())

            results = client.execute(
                [
                    {"operation": "getPositions"},
                    {"operation": "cancelOrder", "orderId": "42", "coin": "xyz:XYZ100"},
                ],
                continue_on_fail=True,
            )
    """

    context: BatchContext
    dispatcher: RequestDispatcher

    def __init__(
        self,
        credentials: Credentials,
        executor: HttpExecutor | None = None,
    ):
        """Initialize the client.

        Args:
            credentials: Private key, network and optional vault / wallet addresses
            executor: Custom HTTP executor (optional, uses default if not provided)

        Raises:
            MissingCredentialsError: If the private key is empty
            SigningError: If the private key is malformed

        """
        self.context = BatchContext.from_credentials(credentials)
        self.dispatcher = RequestDispatcher(
            self.context.base_url,
            executor if executor is not None else DEFAULT_HTTP_EXECUTOR(),
        )

    @classmethod
    def from_env(
        cls, env_file: str = ".env", executor: HttpExecutor | None = None
    ) -> "HyperliquidHip3Client":
        """Create a client from ``HYPERLIQUID_*`` environment variables."""
        return cls(load_credentials(env_file), executor=executor)

    @property
    def address(self) -> str:
        """Effective trading address used for account queries."""
        return self.context.identity.trading_address

    """ Batch execution """

    def submit(self, intent: TradeIntent | Mapping[str, Any]) -> JsonValue:
        """Run one intent through its full request/response cycle.

        Read-only operations are posted to ``/info`` unsigned. Order and
        cancel operations are built, signed with a fresh nonce and posted
        to ``/exchange``.

        Args:
            intent: A TradeIntent or a parameter mapping for TradeIntent.from_dict

        Returns:
            JsonValue: The raw response body

        Raises:
            ValidationError: If the intent is malformed
            PriceUnavailableError: If a market order has no reference mid price
            SigningError: If the action cannot be signed
            ApiError: If the exchange rejects the action
            BadHttpStatus: If the API answers with a non-2XX status
            TransportError: If the request could not be transmitted

        """
        if not isinstance(intent, TradeIntent):
            intent = TradeIntent.from_dict(intent)

        if intent.operation.is_read_only:
            return self.dispatcher.info(info_query_body(intent, self.address))

        action = build_action(intent, self.dispatcher.mid_price)
        envelope = sign_envelope(
            action, self.context.nonces.next(), self.context.identity
        )
        return self.dispatcher.exchange(envelope)

    def execute(
        self,
        intents: Iterable[TradeIntent | Mapping[str, Any]],
        continue_on_fail: bool = False,
    ) -> list[ItemResult]:
        """Run a batch of intents sequentially.

        Item ``i + 1`` starts only after item ``i`` has completed.

        Args:
            intents: Intents to run, in order
            continue_on_fail: When True a failing item yields an error result
                and the batch continues. When False the first error is raised
                and the remaining items are not processed.

        Returns:
            list[ItemResult]: One result per processed item, in input order

        """
        results: list[ItemResult] = []
        for index, intent in enumerate(intents):
            outcome = capture(self.submit, intent)
            results.append(normalize(index, outcome, continue_on_fail))
        log.debug(
            "Batch finished: %d items, %d failed",
            len(results),
            sum(1 for result in results if not result.ok),
        )
        return results

    """ Exchange endpoints, signed """

    def place_order(
        self,
        asset: str,
        side: Side | str,
        size: str,
        order_type: OrderType | str = OrderType.MARKET,
        price: str | None = None,
        reduce_only: bool = False,
    ) -> JsonValue:
        """Place an order on a HIP3 asset.

        Market orders are sent as immediate-or-cancel limit orders priced 5%
        through the current mid price.

        Args:
            asset: HIP3 asset as ``dex:ASSET`` (e.g., "xyz:XYZ100")
            side: Side.Buy or Side.Sell (or "B" / "A")
            size: Order size as a decimal string
            order_type: "market" (default) or "limit"
            price: Limit price as a decimal string, required for limit orders
            reduce_only: Whether the order may only reduce a position

        Returns:
            JsonValue: The exchange response

        Endpoint:
            POST /exchange

        """
        return self.submit(
            TradeIntent(
                operation=Operation.PLACE_ORDER,
                asset=asset,
                side=side,  # type: ignore
                size=size,
                order_type=order_type,  # type: ignore
                price=price,
                reduce_only=reduce_only,
            )
        )

    def cancel_order(self, order_id: int | str, coin: str | AssetRef) -> JsonValue:
        """Cancel an order by exchange order id.

        Endpoint:
            POST /exchange

        """
        return self.submit(
            TradeIntent(operation=Operation.CANCEL_ORDER, order_id=order_id, coin=coin)
        )

    def cancel_all_orders(self, asset: str | AssetRef) -> JsonValue:
        """Cancel every open order on a HIP3 asset.

        Endpoint:
            POST /exchange

        """
        return self.submit(
            TradeIntent(operation=Operation.CANCEL_ALL_ORDERS, asset=asset)
        )

    """ Info endpoints, unsigned """

    def get_open_orders(self) -> JsonValue:
        """Open orders of the trading address.

        Endpoint:
            POST /info ``{"type": "openOrders"}``

        """
        return self.submit(TradeIntent(operation=Operation.GET_OPEN_ORDERS))

    def get_positions(self) -> JsonValue:
        """Positions of the trading address.

        Endpoint:
            POST /info ``{"type": "clearinghouseState"}``

        """
        return self.submit(TradeIntent(operation=Operation.GET_POSITIONS))

    def get_account_summary(self) -> JsonValue:
        """Balance and margin summary of the trading address.

        Endpoint:
            POST /info ``{"type": "clearinghouseState"}``

        """
        return self.submit(TradeIntent(operation=Operation.GET_ACCOUNT_SUMMARY))

    def get_market_info(self) -> JsonValue:
        """Metadata of the deployed perp dexes.

        Endpoint:
            POST /info ``{"type": "perpDexs"}``

        """
        return self.submit(TradeIntent(operation=Operation.GET_MARKET_INFO))

    def get_order_book(self, asset: str) -> JsonValue:
        """L2 order book of an asset.

        Endpoint:
            POST /info ``{"type": "l2Book"}``

        """
        return self.submit(TradeIntent(operation=Operation.GET_ORDER_BOOK, asset=asset))

    def get_user_fills(self, user_address: str | None = None) -> JsonValue:
        """Historical fills of ``user_address``, or of the trading address.

        Endpoint:
            POST /info ``{"type": "userFills"}``

        """
        return self.submit(
            TradeIntent(operation=Operation.GET_USER_FILLS, user_address=user_address)
        )

    def test_credentials(self) -> JsonValue:
        """Check that the configured network answers an info query.

        Endpoint:
            POST /info ``{"type": "meta"}``

        """
        return self.dispatcher.info(meta_body())
