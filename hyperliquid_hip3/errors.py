"""Errors raised by the Hyperliquid HIP3 client.

Every error derives from BaseError. The branch tells the caller where the
failure happened:

    BaseError
    ├── ExchangeError          Hyperliquid answered, with a rejection or bad status
    │   ├── ApiError               ``{"status": "err"}`` from /exchange
    │   ├── PriceUnavailableError  allMids has no usable price for the asset
    │   └── BadHttpStatus          non-2XX, one subclass per common status
    ├── TransportError         nothing usable came back over the wire
    ├── SigningError           the action could not be hashed or signed locally
    └── ValidationError        the intent is malformed, nothing was sent
"""


class BaseError(Exception):
    """Root of every error raised by ``hyperliquid_hip3``.

    A batch run with ``continue_on_fail=True`` turns these, and only these,
    into per-item error results.
    """

    pass


# ============================================================================
# EXCHANGE ERROR
# ============================================================================


class ExchangeError(BaseError):
    """The request reached Hyperliquid and the reply reports a failure."""


class ApiError(ExchangeError):
    """Hyperliquid rejected a signed action.

    ``response`` holds the reply's ``response`` field unchanged, usually a
    human readable reason such as an unknown wallet or insufficient margin.
    """

    def __init__(self, response: object):
        self.response = response
        self.message = response if isinstance(response, str) else repr(response)
        super().__init__(self.message)


class PriceUnavailableError(ExchangeError):
    """A market order needs a mid price and allMids did not publish one."""

    def __init__(self, asset: str):
        self.asset = asset
        self.message = f"Could not find mid price for {asset}"
        super().__init__(self.message)


class BadHttpStatus(ExchangeError):
    """The info or exchange endpoint answered with a non-2XX status.

    Attributes:
        status_code: HTTP status of the reply
        message: Reason, including the reply body when there was one

    """

    status_code: int
    message: str

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


## 4xx


class BadRequest(BadHttpStatus):
    """400, typically a malformed action."""


class Unauthorized(BadHttpStatus):
    """401."""


class Forbidden(BadHttpStatus):
    """403."""


class NotFound(BadHttpStatus):
    """404, usually a wrong base URL."""


class UnprocessableEntity(BadHttpStatus):
    """422, the body was JSON but could not be deserialized into a request."""


class RateLimited(BadHttpStatus):
    """429, the address or IP exceeded its request weight."""


## 5xx


class InternalServerError(BadHttpStatus):
    """500, and any 5XX without a dedicated class."""


class BadGateway(BadHttpStatus):
    """502."""


class ServiceUnavailable(BadHttpStatus):
    """503, often an API node under maintenance."""


class GatewayTimeout(BadHttpStatus):
    """504."""


# ============================================================================
# TRANSPORT ERROR
# ============================================================================


class TransportError(BaseError):
    """No valid reply was exchanged with the API node.

    Covers refused or dropped connections, timeouts, TLS failures and bodies
    that cannot be encoded or decoded. Executors raise these with the
    underlying httpx / requests exception chained as ``__cause__``.
    """

    pass


class HttpConnectionError(TransportError):
    """The API node could not be reached, or the connection dropped."""

    def __init__(self, message: str, url: str | None = None):
        self.message = message
        self.url = url
        super().__init__(f"{message} (url: {url})" if url else message)


class TransportTimeoutError(TransportError):
    """The request did not complete within the executor's timeout."""

    def __init__(self, message: str, timeout_seconds: float | None = None):
        self.message = message
        self.timeout_seconds = timeout_seconds
        if timeout_seconds:
            message = f"{message} (timeout: {timeout_seconds}s)"
        super().__init__(message)


class DeserializationError(TransportError):
    """A 2XX reply body was not valid JSON."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class SerializationError(TransportError):
    """A request body could not be encoded as JSON."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# ============================================================================
# SIGNING ERROR
# ============================================================================


class SigningError(BaseError):
    """The private key is malformed, or hashing / signing an action failed.

    Messages never include key material.
    """

    pass


# ============================================================================
# VALIDATION ERROR
# ============================================================================


class ValidationError(BaseError):
    """A trade intent or credential failed local checks before any request.

    Examples: a HIP3 asset without exactly one ``:``, a limit order without a
    price, an order id that is not an integer, an unknown network name.
    """

    pass


class MissingCredentialsError(ValidationError):
    """No private key was configured."""

    def __init__(self, credential_type: str = "Private key"):
        self.credential_type = credential_type
        super().__init__(f"{credential_type} is not set")
