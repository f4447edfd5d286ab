"""Deadline — expiry cancels the operation and raises OperationTimeoutError."""

import asyncio

import pytest

from costing_master.core.errors import OperationTimeoutError
from costing_master.services.deadline import run_with_deadline


async def test_returns_result_within_deadline():
    async def quick():
        return 42

    assert await run_with_deadline("Quick", quick(), 1.0) == 42


async def test_expiry_raises_and_cancels():
    cancelled = asyncio.Event()

    async def slow():
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    with pytest.raises(OperationTimeoutError) as exc_info:
        await run_with_deadline("GetUOM", slow(), 0.01)
    assert exc_info.value.operation == "GetUOM"
    assert cancelled.is_set()


async def test_none_means_no_deadline():
    async def quick():
        await asyncio.sleep(0)
        return "ok"

    assert await run_with_deadline("Quick", quick(), None) == "ok"


async def test_handler_errors_pass_through():
    async def failing():
        raise ValueError("boom")

    with pytest.raises(ValueError):
        await run_with_deadline("Failing", failing(), 1.0)
