"""Type definitions for the Hyperliquid HIP3 client.

This module contains type aliases, enums and dataclasses used throughout
the package, organized into logical sections for clarity.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, ClassVar, Mapping, Self, TypeAlias

from hyperliquid_hip3.errors import BaseError, ValidationError

# ============================================================================
# TYPE ALIASES
# ============================================================================

Nonce: TypeAlias = int
OrderId: TypeAlias = int

# JSON type hierarchy
JsonObject: TypeAlias = dict[str, "JsonValue"]
JsonArray: TypeAlias = list["JsonValue"]
JsonValue: TypeAlias = None | bool | int | float | str | JsonObject | JsonArray
Json: TypeAlias = JsonObject


# ============================================================================
# INPUT CONVERSION UTILITIES
# ============================================================================

DECIMAL_PATTERN = re.compile(r"^\d+(\.\d+)?$")


def numeric_to_decimal(n: Decimal | str | float | int) -> Decimal:
    """Convert a numeric input (as published by the exchange) to Decimal."""
    if isinstance(n, bool):
        raise ValidationError(f"Invalid numeric input type {n} - {type(n)}")
    if isinstance(n, str):
        if not DECIMAL_PATTERN.match(n):
            raise ValidationError(f"Invalid numeric input {n}")
        return Decimal(n)
    if isinstance(n, (int, float)):
        n = Decimal(str(n))
    if not isinstance(n, Decimal):
        raise ValidationError(f"Invalid numeric input type {n} - {type(n)}")
    return n


def parse_flag(value: bool | str, name: str) -> bool:
    """Accept a bool or the strings ``true`` / ``false`` (any case)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized == "true":
            return True
        if normalized == "false":
            return False
    raise ValidationError(f"Invalid {name} {value!r}, expected true or false")


def compact_decimal_string(n: Decimal) -> str:
    """Render a Decimal in plain notation without trailing zeros.

    ``Decimal("105.000")`` becomes ``"105"`` and ``Decimal("2.6250")``
    becomes ``"2.625"``.
    """
    try:
        text = format(n.normalize(), "f")
    except InvalidOperation as e:
        raise ValidationError(f"Invalid decimal {n}") from e
    return text


# ============================================================================
# CORE ENUMS
# ============================================================================


class Operation(Enum):
    """Operations a trade intent can request."""

    PLACE_ORDER = "placeOrder"
    CANCEL_ORDER = "cancelOrder"
    CANCEL_ALL_ORDERS = "cancelAllOrders"
    GET_OPEN_ORDERS = "getOpenOrders"
    GET_POSITIONS = "getPositions"
    GET_ACCOUNT_SUMMARY = "getAccountSummary"
    GET_MARKET_INFO = "getMarketInfo"
    GET_ORDER_BOOK = "getOrderBook"
    GET_USER_FILLS = "getUserFills"

    @property
    def is_read_only(self) -> bool:
        """Whether the operation is an unsigned info query."""
        return self not in (
            Operation.PLACE_ORDER,
            Operation.CANCEL_ORDER,
            Operation.CANCEL_ALL_ORDERS,
        )


class Side(Enum):
    """Order side. Values are the exchange's side codes."""

    Buy = "B"
    Sell = "A"

    @classmethod
    def from_input(cls, side: "Side | str") -> "Side":
        """Accept a Side, a side code (``B``/``A``) or a side name (``Buy``/``Sell``)."""
        if isinstance(side, Side):
            return side
        if isinstance(side, str):
            normalized = side.strip().lower()
            if normalized in ("b", "buy"):
                return cls.Buy
            if normalized in ("a", "sell"):
                return cls.Sell
        raise ValidationError(f"Invalid side {side!r}, expected Buy or Sell")


class OrderType(Enum):
    """Order type."""

    MARKET = "market"
    LIMIT = "limit"


class TimeInForce(Enum):
    """Time-in-force codes understood by the exchange."""

    Ioc = "Ioc"
    Gtc = "Gtc"


class Network(Enum):
    """Hyperliquid network a credential targets."""

    MAINNET = "mainnet"
    TESTNET = "testnet"

    @classmethod
    def from_input(cls, network: "Network | str | None") -> "Network":
        """Parse a network flag, defaulting to mainnet when unset."""
        if isinstance(network, Network):
            return network
        if network is None or network == "":
            return cls.MAINNET
        try:
            return cls(network.strip().lower())
        except (AttributeError, ValueError) as e:
            raise ValidationError(
                f"Invalid network {network!r}, expected mainnet or testnet"
            ) from e


# ============================================================================
# ASSET REFERENCES
# ============================================================================

HIP3_SEPARATOR = ":"
# HIP3 assets are resolved server-side by name, the numeric index is ignored
HIP3_ASSET_INDEX_PLACEHOLDER = 0


class AssetKind(Enum):
    """How an asset is identified on the wire."""

    NUMERIC_INDEX = "numericIndex"
    HIP3_NAME = "hip3Name"


@dataclass(frozen=True)
class AssetRef:
    """Reference to a perpetual asset, either by numeric index or HIP3 name."""

    kind: AssetKind
    index: int | None = None
    name: str | None = None

    @classmethod
    def hip3(cls, name: str) -> Self:
        """Create a reference to a HIP3 asset given as ``dex:ASSET``.

        Raises:
            ValidationError: If the name does not contain exactly one separator.

        """
        if not isinstance(name, str) or name.count(HIP3_SEPARATOR) != 1:
            raise ValidationError(
                f"HIP3 asset must be in format dex_name:ASSET (e.g., xyz:XYZ100), got {name!r}"
            )
        return cls(kind=AssetKind.HIP3_NAME, name=name)

    @classmethod
    def numeric(cls, index: int) -> Self:
        """Create a reference to an asset by its numeric index."""
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise ValidationError(f"Invalid asset index {index!r}")
        return cls(kind=AssetKind.NUMERIC_INDEX, index=index)

    @classmethod
    def named(cls, name: str, field: str = "Coin") -> Self:
        """Reference an asset by the name the caller gave, without reinterpreting it.

        The name goes on the wire exactly as given, even when it looks like
        a number. Use ``numeric`` to address an asset by index.

        Raises:
            ValidationError: If the name is empty or not a string.

        """
        if not isinstance(name, str) or not name:
            raise ValidationError(f"{field} is required")
        return cls(kind=AssetKind.HIP3_NAME, name=name)

    @classmethod
    def coerce(cls, value: "AssetRef | str | None", field: str = "Coin") -> "AssetRef":
        """Pass an AssetRef through, treat anything else as a verbatim name."""
        if isinstance(value, AssetRef):
            return value
        return cls.named(value, field)  # type: ignore

    @property
    def wire_index(self) -> int:
        """Value of the numeric ``a`` field."""
        if self.kind is AssetKind.NUMERIC_INDEX:
            return self.index  # type: ignore
        return HIP3_ASSET_INDEX_PLACEHOLDER

    @property
    def client_order_id(self) -> str | None:
        """Value of the ``c`` field, which carries the HIP3 name."""
        if self.kind is AssetKind.HIP3_NAME:
            return self.name
        return None

    def to_wire(self) -> int | str:
        """Asset identity as a single JSON value (name for HIP3, index otherwise)."""
        if self.kind is AssetKind.HIP3_NAME:
            return self.name  # type: ignore
        return self.index  # type: ignore


# ============================================================================
# INPUT TYPES
# ============================================================================


@dataclass(frozen=True)
class Credentials:
    """Credential bundle supplied by the caller."""

    private_key: str
    network: Network = Network.MAINNET
    vault_address: str | None = None
    wallet_address: str | None = None

    def __post_init__(self) -> None:
        """Normalize the network flag."""
        object.__setattr__(self, "network", Network.from_input(self.network))


@dataclass(frozen=True)
class TradeIntent:
    """A single trading or query request, one per batch item."""

    operation: Operation
    asset: str | AssetRef | None = None
    side: Side | None = None
    size: str | None = None
    order_type: OrderType = OrderType.MARKET
    price: str | None = None
    reduce_only: bool = False
    order_id: int | str | None = None
    coin: str | AssetRef | None = None
    user_address: str | None = None

    def __post_init__(self) -> None:
        """Normalize enum-valued and flag fields given as plain strings."""
        try:
            object.__setattr__(self, "operation", Operation(self.operation))
            object.__setattr__(
                self, "order_type", OrderType(self.order_type or OrderType.MARKET)
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e
        if self.side == "":
            object.__setattr__(self, "side", None)
        elif self.side is not None:
            object.__setattr__(self, "side", Side.from_input(self.side))
        object.__setattr__(
            self, "reduce_only", parse_flag(self.reduce_only, "reduceOnly")
        )

    # camelCase parameter name -> field name
    _PARAMETER_NAMES: ClassVar[dict[str, str]] = {
        "operation": "operation",
        "asset": "asset",
        "side": "side",
        "size": "size",
        "orderType": "order_type",
        "price": "price",
        "reduceOnly": "reduce_only",
        "orderId": "order_id",
        "coin": "coin",
        "userAddress": "user_address",
    }

    @classmethod
    def from_dict(cls, params: Mapping[str, Any]) -> Self:
        """Build an intent from a parameter mapping.

        Both the camelCase parameter names (``orderType``, ``reduceOnly``,
        ``orderId``, ``userAddress``) and the field names are accepted.
        Unknown keys are ignored.

        Raises:
            ValidationError: If ``operation`` is missing or unknown.

        """
        if "operation" not in params:
            raise ValidationError("operation is required")
        kwargs: dict[str, Any] = {}
        for key, value in params.items():
            name = cls._PARAMETER_NAMES.get(key, key)
            if name in cls.__dataclass_fields__:
                kwargs[name] = value
        return cls(**kwargs)


# ============================================================================
# ACTION TYPES
# ============================================================================


@dataclass(frozen=True)
class OrderWire:
    """One order inside an ``order`` action."""

    asset: AssetRef
    is_buy: bool
    limit_price: str
    size: str
    reduce_only: bool
    tif: TimeInForce

    def to_dict(self) -> JsonObject:
        """Wire representation. Key order is significant for signing."""
        order: JsonObject = {
            "a": self.asset.wire_index,
            "b": self.is_buy,
            "p": self.limit_price,
            "s": self.size,
            "r": self.reduce_only,
            "t": {"limit": {"tif": self.tif.value}},
        }
        client_order_id = self.asset.client_order_id
        if client_order_id is not None:
            order["c"] = client_order_id
        return order


@dataclass(frozen=True)
class OrderAction:
    """Place one or more orders."""

    type: ClassVar[str] = "order"

    orders: tuple[OrderWire, ...]
    grouping: str = "na"

    def to_dict(self) -> JsonObject:
        """Wire representation. Key order is significant for signing."""
        return {
            "type": self.type,
            "orders": [order.to_dict() for order in self.orders],
            "grouping": self.grouping,
        }


@dataclass(frozen=True)
class CancelWire:
    """One cancel request by exchange order id."""

    asset: AssetRef
    order_id: OrderId

    def to_dict(self) -> JsonObject:
        """Wire representation. Key order is significant for signing."""
        cancel: JsonObject = {"a": self.asset.wire_index, "o": self.order_id}
        client_order_id = self.asset.client_order_id
        if client_order_id is not None:
            cancel["c"] = client_order_id
        return cancel


@dataclass(frozen=True)
class CancelAction:
    """Cancel orders by exchange order id."""

    type: ClassVar[str] = "cancel"

    cancels: tuple[CancelWire, ...]

    def to_dict(self) -> JsonObject:
        """Wire representation. Key order is significant for signing."""
        return {
            "type": self.type,
            "cancels": [cancel.to_dict() for cancel in self.cancels],
        }


@dataclass(frozen=True)
class CancelByCloidWire:
    """One cancel-by-client-order-id request. A null cloid matches every order."""

    asset: AssetRef
    cloid: str | None = None

    def to_dict(self) -> JsonObject:
        """Wire representation. Key order is significant for signing."""
        return {"asset": self.asset.to_wire(), "cloid": self.cloid}


@dataclass(frozen=True)
class CancelByCloidAction:
    """Cancel orders by client order id."""

    type: ClassVar[str] = "cancelByCloid"

    cancels: tuple[CancelByCloidWire, ...]

    def to_dict(self) -> JsonObject:
        """Wire representation. Key order is significant for signing."""
        return {
            "type": self.type,
            "cancels": [cancel.to_dict() for cancel in self.cancels],
        }


Action: TypeAlias = OrderAction | CancelAction | CancelByCloidAction


# ============================================================================
# SIGNATURE
# ============================================================================


@dataclass(frozen=True)
class Signature:
    """Recoverable ECDSA signature in the exchange's ``{r, s, v}`` shape."""

    r: str
    s: str
    v: int

    @classmethod
    def from_components(cls, r: int, s: int, v: int) -> Self:
        """Build from integer components; ``v`` must already include the 27 offset."""
        return cls(
            r="0x" + r.to_bytes(32, "big").hex(),
            s="0x" + s.to_bytes(32, "big").hex(),
            v=v,
        )

    def to_bytes(self) -> bytes:
        """The 65 byte ``r || s || v`` encoding."""
        return (
            bytes.fromhex(self.r[2:]) + bytes.fromhex(self.s[2:]) + bytes([self.v])
        )

    def to_dict(self) -> JsonObject:
        """Wire representation."""
        return {"r": self.r, "s": self.s, "v": self.v}


# ============================================================================
# RESULT TYPES
# ============================================================================


@dataclass(frozen=True)
class Success:
    """An item that completed its request/response cycle."""

    value: JsonValue


@dataclass(frozen=True)
class Failure:
    """An item that raised a library error."""

    error: BaseError


Outcome: TypeAlias = Success | Failure


@dataclass(frozen=True)
class ItemResult:
    """Normalized result for one batch item, tagged with its input index."""

    index: int
    data: JsonValue = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the item succeeded."""
        return self.error is None

    def to_dict(self) -> JsonObject:
        """``{"index", "data"}`` on success, ``{"index", "error"}`` on failure."""
        if self.error is not None:
            return {"index": self.index, "error": self.error}
        return {"index": self.index, "data": self.data}
