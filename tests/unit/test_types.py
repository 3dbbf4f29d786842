from decimal import Decimal

import pytest

from hyperliquid_hip3.errors import ValidationError
from hyperliquid_hip3.types import (
    AssetKind,
    AssetRef,
    CancelByCloidAction,
    CancelByCloidWire,
    Credentials,
    ItemResult,
    Network,
    Operation,
    OrderType,
    Side,
    Signature,
    TradeIntent,
    compact_decimal_string,
    numeric_to_decimal,
)


@pytest.mark.parametrize("name", ["xyz:XYZ100", "flx:GOLD", "a:b"])
def test_hip3_asset_accepts_single_separator(name):
    asset = AssetRef.hip3(name)

    assert asset.kind is AssetKind.HIP3_NAME
    assert asset.wire_index == 0
    assert asset.client_order_id == name
    assert asset.to_wire() == name


@pytest.mark.parametrize("name", ["XYZ100", "", "xyz:XYZ:100", "::"])
def test_hip3_asset_rejects_bad_separator_count(name):
    with pytest.raises(ValidationError) as exc_info:
        AssetRef.hip3(name)

    assert "dex_name:ASSET" in str(exc_info.value)


def test_numeric_asset():
    asset = AssetRef.numeric(4)

    assert asset.kind is AssetKind.NUMERIC_INDEX
    assert asset.wire_index == 4
    assert asset.client_order_id is None
    assert asset.to_wire() == 4


@pytest.mark.parametrize("index", [-1, True, "3"])
def test_numeric_asset_rejects_non_index(index):
    with pytest.raises(ValidationError):
        AssetRef.numeric(index)


@pytest.mark.parametrize("name", ["xyz:XYZ100", "BTC", "7", "a:b:c"])
def test_named_asset_is_verbatim(name):
    asset = AssetRef.named(name)

    assert asset.kind is AssetKind.HIP3_NAME
    assert asset.wire_index == 0
    assert asset.client_order_id == name
    assert asset.to_wire() == name


@pytest.mark.parametrize("name", ["", None, 7])
def test_named_asset_requires_string(name):
    with pytest.raises(ValidationError, match="Coin is required"):
        AssetRef.named(name)  # type: ignore


def test_asset_coerce():
    numeric = AssetRef.numeric(3)

    assert AssetRef.coerce(numeric) is numeric
    assert AssetRef.coerce("3") == AssetRef.named("3")

    with pytest.raises(ValidationError, match="Asset is required"):
        AssetRef.coerce(None, "Asset")


@pytest.mark.parametrize(
    "value,expected",
    [
        ("B", Side.Buy),
        ("buy", Side.Buy),
        (" Buy ", Side.Buy),
        ("A", Side.Sell),
        ("SELL", Side.Sell),
        (Side.Sell, Side.Sell),
    ],
)
def test_side_from_input(value, expected):
    assert Side.from_input(value) is expected


def test_side_from_input_rejects_unknown():
    with pytest.raises(ValidationError):
        Side.from_input("long")


def test_network_from_input():
    assert Network.from_input(None) is Network.MAINNET
    assert Network.from_input("") is Network.MAINNET
    assert Network.from_input("Testnet") is Network.TESTNET
    assert Network.from_input(Network.TESTNET) is Network.TESTNET

    with pytest.raises(ValidationError):
        Network.from_input("devnet")


def test_credentials_normalize_network():
    credentials = Credentials(private_key="00", network="testnet")  # type: ignore

    assert credentials.network is Network.TESTNET
    assert Credentials(private_key="00").network is Network.MAINNET


def test_operation_read_only_flag():
    signed = {
        Operation.PLACE_ORDER,
        Operation.CANCEL_ORDER,
        Operation.CANCEL_ALL_ORDERS,
    }
    for operation in Operation:
        assert operation.is_read_only is (operation not in signed)


def test_trade_intent_from_dict_accepts_parameter_names():
    intent = TradeIntent.from_dict(
        {
            "operation": "placeOrder",
            "asset": "xyz:XYZ100",
            "side": "B",
            "size": "1.5",
            "orderType": "limit",
            "price": "101.25",
            "reduceOnly": True,
            "unrelated": "ignored",
        }
    )

    assert intent.operation is Operation.PLACE_ORDER
    assert intent.side is Side.Buy
    assert intent.order_type is OrderType.LIMIT
    assert intent.price == "101.25"
    assert intent.reduce_only is True


def test_trade_intent_from_dict_accepts_field_names():
    intent = TradeIntent.from_dict(
        {"operation": "cancelOrder", "order_id": "42", "coin": "xyz:XYZ100"}
    )

    assert intent.operation is Operation.CANCEL_ORDER
    assert intent.order_id == "42"
    assert intent.order_type is OrderType.MARKET


def test_trade_intent_empty_strings_use_defaults():
    intent = TradeIntent.from_dict(
        {"operation": "getPositions", "side": "", "orderType": ""}
    )

    assert intent.side is None
    assert intent.order_type is OrderType.MARKET


@pytest.mark.parametrize(
    "params",
    [{}, {"operation": "transfer"}, {"operation": "placeOrder", "orderType": "stop"}],
)
def test_trade_intent_rejects_bad_operation_or_type(params):
    with pytest.raises(ValidationError):
        TradeIntent.from_dict(params)


def test_cancel_by_cloid_wire_shape():
    action = CancelByCloidAction(
        cancels=(CancelByCloidWire(asset=AssetRef.hip3("xyz:XYZ100")),)
    )

    assert action.to_dict() == {
        "type": "cancelByCloid",
        "cancels": [{"asset": "xyz:XYZ100", "cloid": None}],
    }


def test_signature_encoding():
    signature = Signature.from_components(r=1, s=2, v=28)

    assert signature.r == "0x" + "00" * 31 + "01"
    assert signature.s == "0x" + "00" * 31 + "02"
    assert signature.to_dict() == {"r": signature.r, "s": signature.s, "v": 28}
    assert len(signature.to_bytes()) == 65
    assert signature.to_bytes()[-1] == 28


def test_item_result_to_dict():
    success = ItemResult(index=0, data={"status": "ok"})
    failure = ItemResult(index=1, error="Coin is required")

    assert success.ok
    assert success.to_dict() == {"index": 0, "data": {"status": "ok"}}
    assert not failure.ok
    assert failure.to_dict() == {"index": 1, "error": "Coin is required"}


def test_numeric_to_decimal():
    assert numeric_to_decimal("100.5") == Decimal("100.5")
    assert numeric_to_decimal(3) == Decimal(3)

    for invalid in ("-1", "abc", True):
        with pytest.raises(ValidationError):
            numeric_to_decimal(invalid)  # type: ignore


@pytest.mark.parametrize(
    "value,expected",
    [
        (Decimal("105.000"), "105"),
        (Decimal("2.6250"), "2.625"),
        (Decimal("1E+2"), "100"),
        (Decimal("0.0000950"), "0.000095"),
    ],
)
def test_compact_decimal_string(value, expected):
    assert compact_decimal_string(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [(True, True), (False, False), ("true", True), ("false", False), (" FALSE ", False)],
)
def test_trade_intent_reduce_only_flag(value, expected):
    intent = TradeIntent.from_dict({"operation": "placeOrder", "reduceOnly": value})

    assert intent.reduce_only is expected


@pytest.mark.parametrize("value", ["yes", "0", "", 1, None])
def test_trade_intent_rejects_loose_reduce_only(value):
    with pytest.raises(ValidationError, match="reduceOnly"):
        TradeIntent.from_dict({"operation": "placeOrder", "reduceOnly": value})
