"""Deadline — runs a handler coroutine under a caller-supplied time budget.

Invariants:
    - Expiry cancels the in-flight coroutine (and its repository call) and raises
      OperationTimeoutError; it never hangs
    - timeout_seconds=None means no deadline; outer task cancellation still propagates
"""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from costing_master.core.errors import OperationTimeoutError

T = TypeVar("T")


async def run_with_deadline(
    operation: str, awaitable: Awaitable[T], timeout_seconds: float | None,
) -> T:
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout_seconds)
    except asyncio.TimeoutError:
        raise OperationTimeoutError(operation, timeout_seconds) from None
