"""Join helpers for the parallel upstream calls made within one request.

Two policies are exposed:

1. **best_effort** -- await one call; on failure log a warning and return a
   caller-supplied default.  Used for optional data (avatar, username
   history, counts on the terminated-account path) whose absence must not
   abort the surrounding request.

2. **gather_all** -- a fail-together join: run awaitables concurrently,
   wait for every one of them, and raise the first failure if any failed.
   Siblings are never left running un-awaited.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, TypeVar

import structlog

from rbxlookup.utils.logging import get_logger

_T = TypeVar("_T")

_logger: structlog.BoundLogger = get_logger(__name__)


async def best_effort(
    awaitable: Awaitable[_T],
    default: _T,
    *,
    event: str,
    logger: structlog.BoundLogger | None = None,
    **context: Any,
) -> _T:
    """Await *awaitable*, substituting *default* if it raises.

    Parameters
    ----------
    awaitable:
        The call to attempt.
    default:
        Value returned when the call fails.
    event:
        Log event name for the warning emitted on failure.
    logger:
        Optional structured logger; defaults to this module's logger.
    context:
        Extra key/value pairs bound onto the warning.

    Returns
    -------
    _T
        The awaited result, or *default*.
    """
    if logger is None:
        logger = _logger

    try:
        return await awaitable
    except Exception as exc:
        logger.warning(event, error=str(exc), error_type=type(exc).__name__, **context)
        return default


async def gather_all(*awaitables: Awaitable[Any]) -> list[Any]:
    """Run *awaitables* concurrently; raise the first failure after all finish.

    Returns
    -------
    list
        Results in input order when every awaitable succeeded.
    """
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)
