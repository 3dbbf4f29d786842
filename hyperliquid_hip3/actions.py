"""Builders mapping trade intents to exchange action objects.

Everything here is pure except market orders, which need a reference mid
price and receive it through the ``mid_price_lookup`` callable.
"""

import re
from decimal import Decimal
from typing import Callable, TypeAlias

from hyperliquid_hip3.errors import ValidationError
from hyperliquid_hip3.types import (
    Action,
    AssetRef,
    CancelAction,
    CancelByCloidAction,
    CancelByCloidWire,
    CancelWire,
    Operation,
    OrderAction,
    OrderId,
    OrderType,
    OrderWire,
    Side,
    TimeInForce,
    TradeIntent,
    compact_decimal_string,
)

MidPriceLookup: TypeAlias = Callable[[str], Decimal]

# market orders are sent as IOC limits priced through the book
MARKET_BUY_SLIPPAGE = Decimal("1.05")
MARKET_SELL_SLIPPAGE = Decimal("0.95")

# plain ASCII integers only, no underscores or other digit scripts
ORDER_ID_PATTERN = re.compile(r"^[+-]?[0-9]+\Z")


def market_limit_price(mid_price: Decimal, side: Side) -> str:
    """Aggressive limit price for a market order: mid +5% to buy, -5% to sell."""
    factor = MARKET_BUY_SLIPPAGE if side is Side.Buy else MARKET_SELL_SLIPPAGE
    return compact_decimal_string(mid_price * factor)


def parse_order_id(order_id: int | str | None) -> OrderId:
    """Parse an exchange order id given as an integer or integer string.

    Raises:
        ValidationError: If the value is not an integer

    """
    if isinstance(order_id, bool):
        raise ValidationError(f"Invalid order id {order_id!r}")
    if isinstance(order_id, int):
        return order_id
    if isinstance(order_id, str):
        text = order_id.strip()
        if ORDER_ID_PATTERN.match(text):
            return int(text)
    raise ValidationError(f"Invalid order id {order_id!r}")


def build_order_action(
    intent: TradeIntent, mid_price_lookup: MidPriceLookup | None = None
) -> OrderAction:
    """Build an ``order`` action for a single HIP3 order.

    Raises:
        ValidationError: If the asset, side, size or limit price is invalid
        PriceUnavailableError: If a market order's mid price is unavailable

    """
    asset = AssetRef.hip3(intent.asset)  # type: ignore
    if intent.side is None:
        raise ValidationError("Side is required for orders")
    if not intent.size:
        raise ValidationError("Size is required for orders")

    if intent.order_type is OrderType.LIMIT:
        if not intent.price:
            raise ValidationError("Price is required for limit orders")
        limit_price = str(intent.price)
        tif = TimeInForce.Gtc
    else:
        if mid_price_lookup is None:
            raise ValidationError("Market orders need a mid price lookup")
        limit_price = market_limit_price(mid_price_lookup(asset.name), intent.side)  # type: ignore
        tif = TimeInForce.Ioc

    order = OrderWire(
        asset=asset,
        is_buy=intent.side is Side.Buy,
        limit_price=limit_price,
        size=str(intent.size),
        reduce_only=intent.reduce_only,
        tif=tif,
    )
    return OrderAction(orders=(order,))


def build_cancel_action(intent: TradeIntent) -> CancelAction:
    """Build a ``cancel`` action for one order id.

    The coin is signed exactly as given, in ``c`` with the ``a`` placeholder,
    unless the intent carries an explicit ``AssetRef``.

    Raises:
        ValidationError: If the order id is not an integer or the coin is missing

    """
    order_id = parse_order_id(intent.order_id)
    asset = AssetRef.coerce(intent.coin, "Coin")
    return CancelAction(cancels=(CancelWire(asset=asset, order_id=order_id),))


def build_cancel_all_action(intent: TradeIntent) -> CancelByCloidAction:
    """Build a ``cancelByCloid`` action with a null cloid for the asset.

    A string asset is signed verbatim.

    Raises:
        ValidationError: If the asset is missing

    """
    asset = AssetRef.coerce(intent.asset, "Asset")
    return CancelByCloidAction(cancels=(CancelByCloidWire(asset=asset),))


def build_action(
    intent: TradeIntent, mid_price_lookup: MidPriceLookup | None = None
) -> Action:
    """Map a signed-operation intent to its action object.

    Raises:
        ValidationError: If the intent is a read-only query or has invalid fields
        PriceUnavailableError: If a market order's mid price is unavailable

    """
    if intent.operation is Operation.PLACE_ORDER:
        return build_order_action(intent, mid_price_lookup)
    if intent.operation is Operation.CANCEL_ORDER:
        return build_cancel_action(intent)
    if intent.operation is Operation.CANCEL_ALL_ORDERS:
        return build_cancel_all_action(intent)
    raise ValidationError(f"{intent.operation.value} is not a signed action")
