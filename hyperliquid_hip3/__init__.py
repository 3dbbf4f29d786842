"""Signed-request client for Hyperliquid HIP3 (builder-deployed perpetual) markets."""

from importlib.metadata import PackageNotFoundError, version

from hyperliquid_hip3.client import BatchContext, HyperliquidHip3Client, NonceSource
from hyperliquid_hip3.errors import (
    ApiError,
    BaseError,
    ExchangeError,
    PriceUnavailableError,
    SigningError,
    TransportError,
    ValidationError,
)
from hyperliquid_hip3.executors import (
    HttpExecutor,
    HttpResponse,
    HttpxHttpExecutor,
    RequestsHttpExecutor,
)
from hyperliquid_hip3.keys import SigningIdentity
from hyperliquid_hip3.signer import SignedEnvelope, sign, sign_envelope
from hyperliquid_hip3.types import (
    AssetRef,
    Credentials,
    ItemResult,
    Network,
    Operation,
    OrderType,
    Side,
    Signature,
    TradeIntent,
)


def get_version() -> str:
    """Installed package version, or ``0.0.0+unknown`` when not installed."""
    try:
        return version("hyperliquid-hip3")
    except PackageNotFoundError:
        return "0.0.0+unknown"


__version__ = get_version()

__all__ = [
    "ApiError",
    "AssetRef",
    "BaseError",
    "BatchContext",
    "Credentials",
    "ExchangeError",
    "HttpExecutor",
    "HttpResponse",
    "HttpxHttpExecutor",
    "HyperliquidHip3Client",
    "ItemResult",
    "Network",
    "NonceSource",
    "Operation",
    "OrderType",
    "PriceUnavailableError",
    "RequestsHttpExecutor",
    "Side",
    "Signature",
    "SignedEnvelope",
    "SigningError",
    "SigningIdentity",
    "TradeIntent",
    "TransportError",
    "ValidationError",
    "get_version",
    "sign",
    "sign_envelope",
]
