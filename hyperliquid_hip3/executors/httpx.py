"""httpx transport, the client's default executor."""

from typing import override

import httpx

from hyperliquid_hip3.errors import (
    BaseError,
    HttpConnectionError,
    TransportError,
    TransportTimeoutError,
)
from hyperliquid_hip3.executors.interface import HttpExecutor, HttpResponse
from hyperliquid_hip3.helpers import (
    deserialize_response,
    get_client_id,
    serialize_request,
)
from hyperliquid_hip3.types import JsonValue


class HttpxHttpExecutor(HttpExecutor):
    """Posts JSON to the Hyperliquid API over one pooled ``httpx.Client``."""

    def __init__(self, client: httpx.Client | None = None):
        """Create the executor.

        Args:
            client: A configured ``httpx.Client`` (proxy, timeout, transport).
                It stays owned by the caller and is not closed by ``close()``.
                A private client is created when omitted.

        """
        self._owns_client = client is None
        self.client = client if client is not None else httpx.Client()

    @override
    def post(self, url: str, json: JsonValue) -> HttpResponse:
        """POST ``json`` to ``url`` and decode the reply.

        The body is encoded once with orjson and sent as raw content, so the
        bytes on the wire are exactly what ``serialize_request`` produced.

        Raises:
            SerializationError: If ``json`` cannot be encoded
            DeserializationError: If a 2XX reply is not JSON
            TransportTimeoutError: On any httpx timeout
            HttpConnectionError: On connect or network failures
            TransportError: On any other httpx failure

        """
        request_body = serialize_request(json)
        try:
            response = self.client.post(
                url,
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    "User-Agent": get_client_id(),
                },
                content=request_body,
            )
        except BaseError:
            raise
        except httpx.TimeoutException as e:
            raise TransportTimeoutError(
                f"POST {url} timed out", timeout_seconds=None
            ) from e
        except httpx.ConnectError as e:
            raise HttpConnectionError(f"Failed to connect to {url}", url=url) from e
        except httpx.NetworkError as e:
            raise HttpConnectionError(
                f"Network error during POST {url}", url=url
            ) from e
        except Exception as e:
            raise TransportError(f"POST {url} failed: {e}") from e

        return HttpResponse(
            status=response.status_code,
            body=deserialize_response(response.content, url, response.status_code),
            headers=dict(response.headers),
        )

    def close(self) -> None:
        """Close the underlying client if this executor created it."""
        if self._owns_client:
            self.client.close()

    def __del__(self) -> None:
        client = getattr(self, "client", None)
        if client is not None and getattr(self, "_owns_client", False):
            client.close()
