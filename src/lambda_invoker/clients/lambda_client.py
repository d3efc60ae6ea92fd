"""
Synchronous Lambda invocation client.

Handles:
- Payload marshalling (raw wire text passes through, values become JSON)
- RequestResponse invocation through a shared boto3 client
- Status-code validation, function-error detection and JSON decoding
- Translation of botocore failures into the invocation error hierarchy
"""

import asyncio
import base64
import binascii
import json
import time
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError as BotoClientError

from ..config import InvokerConfig, get_invoker_config
from ..errors import (
    InvocationValidationError,
    RemoteError,
    RemoteStatusError,
    TransportError,
    wrap_botocore_error,
)
from ..logging import get_logger, logging_context
from ..models import InvocationResult
from ..payload import Payload, StructuredPayload, as_payload, decode_payload, marshal_payload
from .boto import build_lambda_client

logger = get_logger(__name__)

ACCEPTED_STATUS_CODES = frozenset({200, 201})


class LambdaInvoker:
    """
    Invokes named Lambda functions and returns their decoded responses.

    The boto3 client is created once (or injected) and reused read-only
    across calls; no other state is kept between invocations. Nothing is
    retried: each failure is raised to the caller as an InvocationError.
    """

    def __init__(
        self,
        client: Any | None = None,
        config: InvokerConfig | None = None,
    ):
        """
        Initialize the invoker.

        Args:
            client: boto3 Lambda client (built from config when omitted)
            config: Invoker settings (defaults to get_invoker_config())
        """
        self.config = config or get_invoker_config()
        self._client = client if client is not None else build_lambda_client(self.config)
        self.log_type = self.config.INVOKE_LOG_TYPE
        self.qualifier = self.config.INVOKE_QUALIFIER

    def invoke(self, function_name: str, payload: Payload | Any) -> InvocationResult:
        """
        Invoke a function in RequestResponse mode and decode its result.

        Args:
            function_name: Function name, ARN or partial ARN
            payload: RawPayload, StructuredPayload, or a plain value
                     (tagged with as_payload: strings are sent raw)

        Returns:
            InvocationResult with the JSON-decoded response payload

        Raises:
            InvocationValidationError: blank function name or rejected parameters
            PayloadEncodeError: payload is not JSON-serializable
            TransportError: the endpoint could not be reached or timed out
            RemoteStatusError: status code outside {200, 201}
            RemoteError: the function raised (FunctionError set)
            DecodeError: response payload is not valid JSON
        """
        if not isinstance(function_name, str) or not function_name.strip():
            raise InvocationValidationError(
                'function_name must be a non-empty string',
                context={'function_name': function_name},
            )

        wire = marshal_payload(as_payload(payload))
        params: dict[str, Any] = {
            'FunctionName': function_name,
            'InvocationType': 'RequestResponse',
            'LogType': self.log_type,
            'Payload': wire,
        }
        if self.qualifier:
            params['Qualifier'] = self.qualifier

        with logging_context(function_name=function_name):
            logger.info('invoke.start', payload_bytes=len(wire.encode('utf-8')))
            started = time.perf_counter()

            try:
                response = self._client.invoke(**params)
                body = _read_body(response)
            except (BotoCoreError, BotoClientError, OSError) as e:
                error = wrap_botocore_error(e, context={'function_name': function_name})
                logger.warning(
                    'invoke.failed',
                    error_type=type(error).__name__,
                    cause=type(e).__name__,
                )
                raise error from e

            duration_ms = round((time.perf_counter() - started) * 1000, 2)
            status_code = response.get('StatusCode')
            log_tail = _decode_log_tail(response.get('LogResult'))
            if log_tail:
                logger.debug('invoke.log_tail', log_tail=log_tail)

            if status_code not in ACCEPTED_STATUS_CODES:
                logger.warning(
                    'invoke.bad_status',
                    status_code=status_code,
                    duration_ms=duration_ms,
                )
                raise RemoteStatusError(
                    f"Lambda returned status {status_code}",
                    status_code=status_code,
                    body=body.decode('utf-8', errors='replace'),
                    context={'function_name': function_name},
                )

            function_error = response.get('FunctionError')
            if function_error:
                error_payload = _parse_error_payload(body)
                logger.warning(
                    'invoke.function_error',
                    function_error=function_error,
                    status_code=status_code,
                    duration_ms=duration_ms,
                )
                message = (
                    error_payload.get('errorMessage')
                    if isinstance(error_payload, dict)
                    else None
                ) or function_error
                raise RemoteError(
                    f"Function {function_name} failed: {message}",
                    error_payload=error_payload,
                    function_error=function_error,
                    context={'function_name': function_name},
                )

            result_payload = decode_payload(body)
            logger.info(
                'invoke.success',
                status_code=status_code,
                response_bytes=len(body),
                duration_ms=duration_ms,
            )

        return InvocationResult(
            payload=result_payload,
            status_code=status_code,
            executed_version=response.get('ExecutedVersion'),
            log_tail=log_tail,
        )

    async def invoke_async(
        self,
        function_name: str,
        payload: Payload | Any,
        timeout: float | None = None,
    ) -> InvocationResult:
        """
        Invoke from a coroutine without blocking the event loop.

        The blocking call runs in a worker thread. With a timeout, the await
        is abandoned after `timeout` seconds and TransportError is raised;
        the request already sent finishes in its thread and is discarded.
        Cancelling the awaiting task behaves the same way.
        """
        call = asyncio.to_thread(self.invoke, function_name, payload)
        if timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout)
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Invocation of {function_name} timed out after {timeout}s",
                cause=e,
                context={'function_name': function_name, 'timeout_seconds': timeout},
            ) from e

    def trigger(self, function_name: str, payload: Any) -> Any:
        """Invoke with a structured payload and return only the decoded result."""
        return self.invoke(function_name, StructuredPayload(payload)).payload


def _read_body(response: dict[str, Any]) -> bytes:
    """Drain the response payload stream."""
    stream = response.get('Payload')
    if stream is None:
        return b''
    data = stream.read()
    if isinstance(data, str):
        return data.encode('utf-8')
    return data


def _parse_error_payload(body: bytes) -> Any:
    """Error payloads are usually JSON; fall back to the raw text."""
    text = body.decode('utf-8', errors='replace')
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _decode_log_tail(log_result: str | None) -> str | None:
    if not log_result:
        return None
    try:
        return base64.b64decode(log_result).decode('utf-8', errors='replace')
    except (binascii.Error, ValueError):
        return None
