import pytest

from hyperliquid_hip3.client import HyperliquidHip3Client
from hyperliquid_hip3.errors import ServiceUnavailable, ValidationError
from hyperliquid_hip3.executors.interface import HttpResponse
from hyperliquid_hip3.types import Credentials
from tests.mock_executors import MockHttpExecutor, MockSuccessfulOutput, is_post_to
from tests.unit.conftest import (
    TEST_PRIVATE_KEY,
    TEST_VAULT_ADDRESS,
    TEST_WALLET_ADDRESS,
    load_json,
    ok,
)

INFO_URL = "https://api.hyperliquid-testnet.xyz/info"


@pytest.mark.parametrize(
    "method,body_type,data_file",
    [
        ("get_open_orders", "openOrders", "response.open_orders"),
        ("get_positions", "clearinghouseState", "response.clearinghouse_state"),
        ("get_account_summary", "clearinghouseState", "response.clearinghouse_state"),
        ("get_user_fills", "userFills", "response.user_fills"),
    ],
)
def test_account_queries(mock_http_client, method, body_type, data_file):
    client, mock_http = mock_http_client
    payload = load_json(data_file)

    mock_http.stage_output(
        MockSuccessfulOutput(
            output=ok(payload),
            call_validation=is_post_to("/info", body_type),
        )
    )

    response = getattr(client, method)()

    assert response == payload
    url, body = mock_http.call_log[0].arg_pack
    assert url == INFO_URL
    assert body == {"type": body_type, "user": client.address}


def test_get_user_fills_for_other_user(mock_http_client):
    client, mock_http = mock_http_client

    mock_http.stage_output(MockSuccessfulOutput(output=ok([])))

    assert client.get_user_fills("0xabc") == []
    assert mock_http.call_log[0].arg_pack[1] == {"type": "userFills", "user": "0xabc"}


def test_get_market_info(mock_http_client):
    client, mock_http = mock_http_client
    payload = load_json("response.perp_dexs")

    mock_http.stage_output(
        MockSuccessfulOutput(
            output=ok(payload), call_validation=is_post_to("/info", "perpDexs")
        )
    )

    assert client.get_market_info() == payload
    assert mock_http.call_log[0].arg_pack[1] == {"type": "perpDexs"}


def test_get_order_book(mock_http_client):
    client, mock_http = mock_http_client
    payload = load_json("response.l2_book")

    mock_http.stage_output(
        MockSuccessfulOutput(
            output=ok(payload), call_validation=is_post_to("/info", "l2Book")
        )
    )

    assert client.get_order_book("xyz:XYZ100") == payload
    assert mock_http.call_log[0].arg_pack[1] == {
        "type": "l2Book",
        "coin": "xyz:XYZ100",
    }


def test_get_order_book_requires_asset(mock_http_client):
    client, mock_http = mock_http_client

    with pytest.raises(ValidationError):
        client.get_order_book("")

    assert mock_http.call_log == []


def test_test_credentials(mock_http_client):
    client, mock_http = mock_http_client
    payload = load_json("response.meta")

    mock_http.stage_output(
        MockSuccessfulOutput(
            output=ok(payload), call_validation=is_post_to("/info", "meta")
        )
    )

    assert client.test_credentials() == payload


def test_info_query_http_error(mock_http_client):
    client, mock_http = mock_http_client

    mock_http.stage_output(
        MockSuccessfulOutput(output=HttpResponse(status=503, body="maintenance"))
    )

    with pytest.raises(ServiceUnavailable) as exc_info:
        client.get_positions()

    assert exc_info.value.status_code == 503


@pytest.mark.parametrize(
    "vault_address,wallet_address,expected",
    [
        (TEST_VAULT_ADDRESS, TEST_WALLET_ADDRESS, TEST_VAULT_ADDRESS),
        (None, TEST_WALLET_ADDRESS, TEST_WALLET_ADDRESS),
    ],
)
def test_queries_use_effective_address(vault_address, wallet_address, expected):
    mock_http = MockHttpExecutor()
    client = HyperliquidHip3Client(
        Credentials(
            private_key=TEST_PRIVATE_KEY,
            vault_address=vault_address,
            wallet_address=wallet_address,
        ),
        executor=mock_http,
    )

    mock_http.stage_output(MockSuccessfulOutput(output=ok([])))

    client.get_open_orders()

    url, body = mock_http.call_log[0].arg_pack
    assert url == "https://api.hyperliquid.xyz/info"
    assert body["user"] == expected
