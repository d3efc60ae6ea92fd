"""
Concurrent fan-out of Lambda invocations.

Issues every request at once using asyncio.gather(return_exceptions=True).
Fault isolation guarantee: one invocation failing never stops another.
Each slot of the DispatchResult holds either the InvocationResult or the
InvocationError for the request at the same position.
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, Sequence

from .clients.lambda_client import LambdaInvoker
from .errors import InvocationError, PartialSuccessResult
from .logging import get_logger, logging_context
from .models import InvocationRequest, InvocationResult

logger = get_logger(__name__)


@dataclass
class DispatchResult:
    """Per-request outcomes, in request order, plus a summary."""

    requests: list[InvocationRequest]
    outcomes: list[InvocationResult | InvocationError]
    summary: PartialSuccessResult = field(default_factory=PartialSuccessResult)
    dispatch_time_ms: int | None = None

    @property
    def results(self) -> list[InvocationResult]:
        return [o for o in self.outcomes if isinstance(o, InvocationResult)]

    @property
    def errors(self) -> list[InvocationError]:
        return [o for o in self.outcomes if isinstance(o, InvocationError)]

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging."""
        return {
            **self.summary.to_dict(),
            'dispatch_time_ms': self.dispatch_time_ms,
        }


class InvocationDispatcher:
    """Runs many invocations concurrently against one shared invoker."""

    def __init__(self, invoker: LambdaInvoker):
        self.invoker = invoker

    async def dispatch(
        self,
        requests: Sequence[InvocationRequest],
        timeout: float | None = None,
    ) -> DispatchResult:
        """
        Invoke every request concurrently.

        Args:
            requests: Requests to issue; order is preserved in the result
            timeout: Optional per-invocation timeout in seconds

        Returns:
            DispatchResult with one outcome per request

        Raises:
            Any exception that is not an InvocationError (programming errors
            are not folded into the outcomes).
        """
        requests = list(requests)
        start = time.perf_counter()

        raw = await asyncio.gather(
            *(self._invoke_one(request, timeout) for request in requests),
            return_exceptions=True,
        )

        result = DispatchResult(requests=requests, outcomes=[])
        for request, outcome in zip(requests, raw):
            if isinstance(outcome, InvocationResult):
                result.summary.add_success(
                    item_id=request.request_id,
                    data={'function_name': request.function_name},
                )
            elif isinstance(outcome, InvocationError):
                result.summary.add_failure(
                    outcome,
                    item_id=request.request_id,
                    data={'function_name': request.function_name},
                )
            else:
                raise outcome
            result.outcomes.append(outcome)

        result.dispatch_time_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            'dispatch.complete',
            success_count=result.summary.success_count,
            failure_count=result.summary.failure_count,
            dispatch_time_ms=result.dispatch_time_ms,
        )
        return result

    async def _invoke_one(
        self,
        request: InvocationRequest,
        timeout: float | None,
    ) -> InvocationResult:
        with logging_context(request_id=request.request_id):
            return await self.invoker.invoke_async(
                request.function_name,
                request.payload,
                timeout=timeout,
            )
