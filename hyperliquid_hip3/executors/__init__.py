from hyperliquid_hip3.executors.defaults import DEFAULT_HTTP_EXECUTOR
from hyperliquid_hip3.executors.httpx import HttpxHttpExecutor
from hyperliquid_hip3.executors.interface import HttpExecutor, HttpResponse
from hyperliquid_hip3.executors.requests import RequestsHttpExecutor

__all__ = [
    "HttpExecutor",
    "HttpResponse",
    "HttpxHttpExecutor",
    "RequestsHttpExecutor",
    "DEFAULT_HTTP_EXECUTOR",
]
