"""Helper utilities for the Hyperliquid HIP3 client.

This module contains endpoint constants, client identification and the
JSON serialization used both on the wire and for signing.
"""

import logging
from decimal import Decimal
from functools import lru_cache
from time import time_ns

import orjson

from hyperliquid_hip3.errors import DeserializationError, SerializationError
from hyperliquid_hip3.types import JsonValue, Network

log = logging.getLogger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

MAINNET_API_URL: str = "https://api.hyperliquid.xyz"
TESTNET_API_URL: str = "https://api.hyperliquid-testnet.xyz"

INFO_PATH: str = "/info"
EXCHANGE_PATH: str = "/exchange"


def base_url_for(network: Network) -> str:
    """Return the API base URL for a network."""
    if network is Network.TESTNET:
        return TESTNET_API_URL
    return MAINNET_API_URL


# ============================================================================
# CLIENT IDENTIFICATION
# ============================================================================


@lru_cache(maxsize=1)
def get_client_id() -> str:
    """Get the client identification string sent with every request."""
    import hyperliquid_hip3

    return f"HyperliquidHip3Python/{hyperliquid_hip3.__version__}"


# ============================================================================
# SERIALIZATION / DESERIALIZATION
# ============================================================================


def decimal_as_str(obj: object) -> str:
    """Serialize Decimal objects to JSON strings.

    Converts Decimal to string to preserve precision in JSON serialization.
    """
    if isinstance(obj, Decimal):
        return str(obj)

    raise TypeError


def serialize_request(request: JsonValue) -> bytes:
    """Serialize a request object to compact JSON bytes.

    orjson emits no whitespace and keeps dict insertion order, so the output
    is the same byte string a JavaScript ``JSON.stringify`` would produce for
    strings, integers, booleans and null. The signer relies on this.

    Raises:
        SerializationError: If serialization fails

    """
    try:
        return orjson.dumps(request, default=decimal_as_str)
    except Exception as e:
        raise SerializationError(f"Failed to serialize {request=}") from e


def deserialize_response(
    response_body: bytes, url: str, status: int = 200
) -> JsonValue:
    """Deserialize a JSON response body.

    Error responses (non-2XX) are not always JSON; their body is returned as
    text instead so the status code can still be reported.

    Args:
        response_body: Response bytes to deserialize
        url: URL that was requested (for error messages)
        status: HTTP status code of the response

    Returns:
        Deserialized JSON value. Info endpoints may answer with arrays.

    Raises:
        DeserializationError: If a 2XX body cannot be deserialized

    """
    try:
        return orjson.loads(response_body)  # type: ignore
    except Exception as e:
        if not 200 <= status < 300:
            log.debug("Non-JSON body with status %d from %s", status, url)
            return response_body.decode("utf-8", errors="replace")
        raise DeserializationError(
            f"Failed to parse JSON response from {url}: {e}"
        ) from e


# ============================================================================
# TIME UTILITIES
# ============================================================================


def current_timestamp_ms() -> int:
    """Wall clock time in epoch milliseconds."""
    return time_ns() // 1_000_000
