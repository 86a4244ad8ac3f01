"""Running work that must outlive the request that started it."""

import asyncio
from collections.abc import Coroutine
from functools import partial
from typing import Any, TypeVar

from ai_gateway.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# Strong references to tasks whose caller went away, until they finish
_detached: set[asyncio.Task] = set()


async def run_shielded(coro: Coroutine[Any, Any, T], tier: str) -> T:
    """Await ``coro`` so that cancelling the caller does not cancel it.

    If the caller is cancelled (client disconnect), the work keeps running in
    the background and its outcome is logged, so a late failure is reported
    instead of surfacing as "Task exception was never retrieved".

    Args:
        coro: The provider call plus its cache and audit writes
        tier: Cache tier name, used only in log events

    Returns:
        Whatever ``coro`` returns
    """
    task = asyncio.ensure_future(coro)
    try:
        return await asyncio.shield(task)
    except asyncio.CancelledError:
        _detached.add(task)
        task.add_done_callback(partial(_log_detached_outcome, tier=tier))
        logger.info("caller_cancelled", tier=tier)
        raise


def _log_detached_outcome(task: asyncio.Task, tier: str) -> None:
    _detached.discard(task)
    if task.cancelled():
        logger.warning("detached_task_cancelled", tier=tier)
        return
    error = task.exception()
    if error is not None:
        logger.error(
            "detached_task_failed",
            tier=tier,
            error_type=type(error).__name__,
            error=str(error),
        )
    else:
        logger.info("detached_task_completed", tier=tier)
