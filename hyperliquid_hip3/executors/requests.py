from typing import override

import requests

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


class RequestsHttpExecutor(HttpExecutor):
    def __init__(self, session: requests.Session | None = None):
        self.session = session if session is not None else requests.Session()

    @override
    def post(self, url: str, json: JsonValue) -> HttpResponse:
        request_body = serialize_request(json)
        try:
            headers = {
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": get_client_id(),
            }

            response = self.session.post(url, headers=headers, data=request_body)
        except BaseError:
            raise
        except requests.Timeout as e:
            raise TransportTimeoutError(
                f"POST request to {url} timed out", timeout_seconds=None
            ) from e
        except requests.ConnectionError as e:
            raise HttpConnectionError(f"Failed to connect to {url}", url=url) from e
        except Exception as e:
            raise TransportError(f"POST request to {url} failed: {e}") from e
        return HttpResponse(
            status=response.status_code,
            body=deserialize_response(response.content, url, response.status_code),
            headers=dict(response.headers),
        )
