import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Generator

import orjson
import pytest

from hyperliquid_hip3.client import HyperliquidHip3Client
from hyperliquid_hip3.executors.interface import HttpResponse
from hyperliquid_hip3.keys import SigningIdentity
from hyperliquid_hip3.types import Credentials, Network
from tests.mock_executors import MockHttpExecutor, MockOutputNotExhausted

DATA_DIR = Path(__file__).parent.joinpath("data")

# throwaway key, never funded
TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
TEST_VAULT_ADDRESS = "0x1111111111111111111111111111111111111111"
TEST_WALLET_ADDRESS = "0x2222222222222222222222222222222222222222"

log = logging.getLogger(__name__)


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(private_key=TEST_PRIVATE_KEY, network=Network.TESTNET)


@pytest.fixture
def identity(credentials) -> SigningIdentity:
    return SigningIdentity.from_credentials(credentials)


@pytest.fixture
def mock_http_client(
    credentials,
) -> Generator[tuple[HyperliquidHip3Client, MockHttpExecutor], None, None]:
    mock_http = MockHttpExecutor()
    client = HyperliquidHip3Client(
        credentials,
        # replace real network requests with our mock
        executor=mock_http,
    )

    yield (client, mock_http)

    if len(mock_http.staged_outputs) > 0:
        raise MockOutputNotExhausted(mock_http.staged_outputs)


def ok(body: Any) -> HttpResponse:
    return HttpResponse(status=200, body=body)


@lru_cache(maxsize=1)
def data_files() -> list[Path]:
    return list(DATA_DIR.iterdir())


@lru_cache(maxsize=None)
def json_data_files(name: str) -> list[Path]:
    return list(
        sorted(
            path
            for path in data_files()
            if path.match(f"*/{name}.*.json", case_sensitive=True)
        )
    )


def load_json(name: str, case: int | None = None) -> Any:
    case_part = f"{case}." if case else ""
    path = DATA_DIR / f"{name}.{case_part}json"
    with open(path, "rb") as fh:
        return orjson.loads(fh.read())


def load_json_all_cases(name: str) -> list[tuple[Any, Path]]:
    """Load all json payloads for a given base name (case1, case2, ...)."""
    results = []
    for path in json_data_files(name):
        log.debug("Loading json from %s", path.as_posix())
        with open(path, "rb") as fh:
            results.append((orjson.loads(fh.read()), path))
    return results
