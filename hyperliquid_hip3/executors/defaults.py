from typing import Type

from hyperliquid_hip3.executors.httpx import HttpxHttpExecutor
from hyperliquid_hip3.executors.interface import HttpExecutor

# used by HyperliquidHip3Client when no executor is passed
DEFAULT_HTTP_EXECUTOR: Type[HttpExecutor] = HttpxHttpExecutor
