import pytest

from hyperliquid_hip3.client import BatchContext, NonceSource
from hyperliquid_hip3.errors import HttpConnectionError, ValidationError
from hyperliquid_hip3.helpers import TESTNET_API_URL
from hyperliquid_hip3.types import ItemResult
from tests.mock_executors import (
    MockExceptionOutput,
    MockSuccessfulOutput,
    is_exchange_action,
    is_post_to,
)
from tests.unit.conftest import load_json, ok

BATCH = [
    {"operation": "getOpenOrders"},
    {"operation": "cancelOrder", "orderId": "42", "coin": "xyz:XYZ100"},
    {"operation": "getPositions"},
]


def test_nonce_source_follows_clock():
    ticks = iter([1000, 2000])
    nonces = NonceSource(clock=lambda: next(ticks))

    assert nonces.next() == 1000
    assert nonces.next() == 2000


def test_nonce_source_never_repeats():
    nonces = NonceSource(clock=lambda: 1700000000000)

    assert [nonces.next() for _ in range(3)] == [
        1700000000000,
        1700000000001,
        1700000000002,
    ]


def test_nonce_source_survives_clock_going_backwards():
    ticks = iter([5000, 4000])
    nonces = NonceSource(clock=lambda: next(ticks))

    assert nonces.next() == 5000
    assert nonces.next() == 5001


def test_batch_context_from_credentials(credentials):
    context = BatchContext.from_credentials(credentials)

    assert context.base_url == TESTNET_API_URL
    assert context.identity.signer_address == context.identity.trading_address


def test_execute_all_succeed(mock_http_client):
    client, mock_http = mock_http_client

    mock_http.stage_output(
        [
            MockSuccessfulOutput(
                output=ok(load_json("response.open_orders")),
                call_validation=is_post_to("/info", "openOrders"),
            ),
            MockSuccessfulOutput(
                output=ok(load_json("response.cancel")),
                call_validation=is_exchange_action("cancel"),
            ),
            MockSuccessfulOutput(
                output=ok(load_json("response.clearinghouse_state")),
                call_validation=is_post_to("/info", "clearinghouseState"),
            ),
        ]
    )

    results = client.execute(BATCH)

    assert [result.index for result in results] == [0, 1, 2]
    assert all(result.ok for result in results)
    assert results[0].data == load_json("response.open_orders")
    assert results[1].data == load_json("response.cancel")
    assert results[2].data == load_json("response.clearinghouse_state")


def test_execute_isolates_failures(mock_http_client):
    client, mock_http = mock_http_client

    mock_http.stage_output(
        [
            MockSuccessfulOutput(output=ok(load_json("response.open_orders"))),
            MockExceptionOutput(
                exception=HttpConnectionError("Failed to connect"),
                call_validation=is_exchange_action("cancel"),
            ),
            MockSuccessfulOutput(
                output=ok(load_json("response.clearinghouse_state"))
            ),
        ]
    )

    results = client.execute(BATCH, continue_on_fail=True)

    assert len(results) == 3
    assert results[0].ok and results[2].ok
    assert results[1] == ItemResult(index=1, error="Failed to connect")
    assert len(mock_http.call_log) == 3


def test_execute_aborts_on_first_failure(mock_http_client):
    client, mock_http = mock_http_client

    mock_http.stage_output(
        [
            MockSuccessfulOutput(output=ok(load_json("response.open_orders"))),
            MockExceptionOutput(exception=HttpConnectionError("Failed to connect")),
        ]
    )

    with pytest.raises(HttpConnectionError):
        client.execute(BATCH)

    # the third item is never sent
    assert len(mock_http.call_log) == 2


def test_execute_validation_failure_sends_nothing(mock_http_client):
    client, mock_http = mock_http_client

    mock_http.stage_output(
        MockSuccessfulOutput(output=ok(load_json("response.clearinghouse_state")))
    )

    results = client.execute(
        [
            {"operation": "placeOrder", "asset": "XYZ100", "side": "B", "size": "1"},
            {"operation": "getAccountSummary"},
        ],
        continue_on_fail=True,
    )

    assert not results[0].ok
    assert "dex_name:ASSET" in results[0].error  # type: ignore
    assert results[1].ok
    assert len(mock_http.call_log) == 1


def test_execute_invalid_operation_isolated(mock_http_client):
    client, mock_http = mock_http_client

    results = client.execute([{"operation": "transfer"}], continue_on_fail=True)

    assert not results[0].ok
    assert mock_http.call_log == []

    with pytest.raises(ValidationError):
        client.execute([{"operation": "transfer"}])


def test_signed_items_get_increasing_nonces(mock_http_client):
    client, mock_http = mock_http_client
    client.context.nonces._clock = lambda: 1700000000000

    mock_http.stage_output(
        [
            MockSuccessfulOutput(output=ok(load_json("response.cancel"))),
            MockSuccessfulOutput(output=ok(load_json("response.cancel"))),
        ]
    )

    client.execute([BATCH[1], BATCH[1]])

    nonces = [call.arg_pack[1]["nonce"] for call in mock_http.call_log]
    assert nonces == [1700000000000, 1700000000001]
