"""Transport seam between the client and an HTTP library.

Hyperliquid only needs JSON POSTs to ``/info`` and ``/exchange``, so an
executor implements a single ``post``. Tests swap in a mock executor here.
"""

from abc import ABC, abstractmethod

from hyperliquid_hip3.types import JsonValue


class HttpResponse:
    """Status, decoded body and headers of one API reply.

    ``body`` is whatever the endpoint returned: an object, an array for most
    account queries, or plain text for a non-JSON error page.
    """

    status: int
    body: JsonValue
    headers: dict[str, str] | None

    __slots__ = ("status", "body", "headers")

    def __init__(
        self,
        *,
        status: int,
        body: JsonValue = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status = status
        self.body = body
        self.headers = headers


class HttpExecutor(ABC):
    """Sends one JSON POST and returns the reply.

    Implementations never retry. Non-2XX replies are returned for the
    dispatcher to map; only failures to get a reply at all are raised, as
    TransportError subclasses.
    """

    @abstractmethod
    def post(
        self,
        url: str,
        json: JsonValue,
    ) -> HttpResponse:
        """POST ``json`` to the absolute ``url``."""
        ...
