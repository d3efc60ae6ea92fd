"""
Tests for InvocationDispatcher with a mocked invoker.

Tests cover:
- All invocations succeed: results captured in request order
- Partial failure: one invocation raises, the others are intact
- Concurrent execution (timing verification)
- Programming errors are re-raised rather than folded into outcomes

Run with: pytest tests/test_dispatcher.py -v
"""

import asyncio
import time
from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import make_response
from lambda_invoker.dispatcher import DispatchResult, InvocationDispatcher
from lambda_invoker.errors import RemoteStatusError, TransportError
from lambda_invoker.models import InvocationRequest, InvocationResult


def _requests(n: int) -> list[InvocationRequest]:
    return [
        InvocationRequest.of("producer", {"op": "SET", "key": f"k{i}", "value": str(i)})
        for i in range(n)
    ]


def _result(value) -> InvocationResult:
    return InvocationResult(payload=value, status_code=200)


def _mock_invoker(side_effect) -> MagicMock:
    invoker = MagicMock()
    invoker.invoke_async = AsyncMock(side_effect=side_effect)
    return invoker


class TestDispatch:
    @pytest.mark.asyncio
    async def test_all_succeed(self):
        invoker = _mock_invoker([_result({"ok": True}), _result({"ok": True})])
        requests = _requests(2)

        result = await InvocationDispatcher(invoker).dispatch(requests)

        assert isinstance(result, DispatchResult)
        assert result.summary.all_succeeded is True
        assert len(result.results) == 2
        assert result.errors == []
        assert result.dispatch_time_ms is not None

    @pytest.mark.asyncio
    async def test_partial_failure_isolated(self):
        failure = TransportError("reset")
        invoker = _mock_invoker([_result({"ok": True}), failure, _result({"ok": True})])
        requests = _requests(3)

        result = await InvocationDispatcher(invoker).dispatch(requests)

        assert result.outcomes[1] is failure
        assert isinstance(result.outcomes[0], InvocationResult)
        assert isinstance(result.outcomes[2], InvocationResult)
        assert result.summary.partial_success is True
        assert result.summary.failed[0].item_id == requests[1].request_id
        assert result.to_dict()["failure_count"] == 1

    @pytest.mark.asyncio
    async def test_outcomes_follow_request_order(self):
        async def respond(function_name, payload, timeout=None):
            # Later requests finish first
            index = int(payload.value["value"])
            await asyncio.sleep(0.03 * (3 - index))
            return _result(index)

        invoker = _mock_invoker(respond)

        result = await InvocationDispatcher(invoker).dispatch(_requests(3))

        assert [o.payload for o in result.outcomes] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_runs_concurrently(self):
        async def slow(function_name, payload, timeout=None):
            await asyncio.sleep(0.1)
            return _result({"ok": True})

        invoker = _mock_invoker(slow)

        start = time.perf_counter()
        await InvocationDispatcher(invoker).dispatch(_requests(5))
        elapsed = time.perf_counter() - start

        assert elapsed < 0.4

    @pytest.mark.asyncio
    async def test_timeout_forwarded(self):
        invoker = _mock_invoker([_result(None)])
        requests = _requests(1)

        await InvocationDispatcher(invoker).dispatch(requests, timeout=2.5)

        invoker.invoke_async.assert_awaited_once_with(
            "producer", requests[0].payload, timeout=2.5
        )

    @pytest.mark.asyncio
    async def test_programming_error_reraised(self):
        invoker = _mock_invoker([KeyError("bug")])

        with pytest.raises(KeyError):
            await InvocationDispatcher(invoker).dispatch(_requests(1))

    @pytest.mark.asyncio
    async def test_with_real_invoker(self, invoker, lambda_client):
        lambda_client.invoke.side_effect = [
            make_response(200, b'{"ok":true}'),
            make_response(500, b'error'),
        ]

        result = await InvocationDispatcher(invoker).dispatch(_requests(2))

        assert result.summary.success_count + result.summary.failure_count == 2
        assert any(isinstance(e, RemoteStatusError) for e in result.errors)
