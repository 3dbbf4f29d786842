"""Per-item result normalization for batch execution."""

import logging
from typing import Callable, ParamSpec

from hyperliquid_hip3.errors import BaseError
from hyperliquid_hip3.types import Failure, ItemResult, JsonValue, Outcome, Success

log = logging.getLogger(__name__)

P = ParamSpec("P")


def capture(
    func: Callable[P, JsonValue], *args: P.args, **kwargs: P.kwargs
) -> Outcome:
    """Run ``func`` and return its value or library error as an Outcome.

    Only BaseError is captured; anything else is a bug and propagates.
    """
    try:
        return Success(func(*args, **kwargs))
    except BaseError as e:
        return Failure(e)


def normalize(
    index: int, outcome: Outcome, continue_on_fail: bool = False
) -> ItemResult:
    """Convert an item's outcome into its result.

    Args:
        index: Position of the item in the input batch
        outcome: Success or Failure of the item
        continue_on_fail: Per-item error isolation. When False a Failure is
            re-raised, which aborts the rest of the batch.

    Raises:
        BaseError: The captured error, when isolation is disabled

    """
    if isinstance(outcome, Success):
        return ItemResult(index=index, data=outcome.value)
    if not continue_on_fail:
        raise outcome.error
    log.warning("Item %d failed: %s", index, outcome.error)
    return ItemResult(index=index, error=str(outcome.error))
