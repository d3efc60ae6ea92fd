"""
Custom exceptions and error handling for Lambda invocations.

Provides:
- Typed exception hierarchy for the ways a synchronous invocation can fail
- Error context preservation for debugging
- Partial success handling for fan-out invocations
"""

from dataclasses import dataclass, field
from typing import Any

from botocore.exceptions import (
    BotoCoreError,
    ClientError as BotoClientError,
    ConnectionError as BotoConnectionError,
    HTTPClientError,
    ParamValidationError,
)


class InvocationError(Exception):
    """Base exception for all invocation errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


# =============================================================================
# Client-side Errors
# =============================================================================


class ClientSideError(InvocationError):
    """The call failed before a response was received."""

    pass


class InvocationValidationError(ClientSideError):
    """Request parameters were rejected before sending."""

    pass


class PayloadEncodeError(ClientSideError):
    """Payload could not be serialized to JSON."""

    pass


class TransportError(ClientSideError):
    """Network failure, timeout, or unreachable endpoint."""

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.cause = cause


# =============================================================================
# Remote Failures
# =============================================================================


class RemoteFailure(InvocationError):
    """The remote call completed but did not succeed."""

    pass


class RemoteStatusError(RemoteFailure):
    """Remote call returned a status code outside the accepted set."""

    def __init__(
        self,
        message: str,
        status_code: int | None,
        body: str = '',
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.status_code = status_code
        self.body = body
        self.error_code = error_code


class RemoteError(RemoteFailure):
    """Remote function raised; the response carries its error payload."""

    def __init__(
        self,
        message: str,
        error_payload: Any,
        function_error: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.error_payload = error_payload
        self.function_error = function_error

    @property
    def error_type(self) -> str | None:
        if isinstance(self.error_payload, dict):
            return self.error_payload.get('errorType')
        return None

    @property
    def error_message(self) -> str | None:
        if isinstance(self.error_payload, dict):
            return self.error_payload.get('errorMessage')
        return None


class DecodeError(RemoteFailure):
    """Successful response payload was not valid JSON."""

    def __init__(
        self,
        message: str,
        raw: str,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.raw = raw


# =============================================================================
# Partial Success Handling
# =============================================================================


@dataclass
class ItemResult:
    """Result for a single invocation in a fan-out."""

    item_id: str | None
    success: bool
    error: InvocationError | None = None
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class PartialSuccessResult:
    """
    Outcome summary of a fan-out that may partially succeed.

    Failed invocations never stop the others; each failure keeps its
    error context for debugging.
    """

    succeeded: list[ItemResult] = field(default_factory=list)
    failed: list[ItemResult] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    @property
    def total_count(self) -> int:
        return self.success_count + self.failure_count

    @property
    def all_succeeded(self) -> bool:
        return self.failure_count == 0

    @property
    def all_failed(self) -> bool:
        return self.success_count == 0

    @property
    def partial_success(self) -> bool:
        return self.success_count > 0 and self.failure_count > 0

    def add_success(
        self,
        item_id: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        """Record a successful invocation."""
        self.succeeded.append(
            ItemResult(item_id=item_id, success=True, data=data or {})
        )

    def add_failure(
        self,
        error: InvocationError,
        item_id: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        """Record a failed invocation."""
        self.failed.append(
            ItemResult(item_id=item_id, success=False, error=error, data=data or {})
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'success_count': self.success_count,
            'failure_count': self.failure_count,
            'total_count': self.total_count,
            'all_succeeded': self.all_succeeded,
            'succeeded_ids': [r.item_id for r in self.succeeded if r.item_id],
            'failed_ids': [r.item_id for r in self.failed if r.item_id],
            'errors': [
                {'item_id': r.item_id, 'error': str(r.error)}
                for r in self.failed
                if r.error
            ],
        }


# =============================================================================
# Error Handling Utilities
# =============================================================================


def wrap_botocore_error(
    exc: Exception, context: dict[str, Any] | None = None
) -> InvocationError:
    """
    Wrap a botocore exception raised by ``Lambda.invoke`` in our hierarchy.

    Args:
        exc: The original exception
        context: Additional context for debugging

    Returns:
        - RemoteStatusError for service-side rejections (ClientError),
          carrying the HTTP status and AWS error code
        - InvocationValidationError for ParamValidationError
        - TransportError for connection, timeout and other botocore failures
    """
    ctx = context or {}
    ctx['original_error'] = str(exc)
    ctx['error_type'] = type(exc).__name__

    if isinstance(exc, BotoClientError):
        error = exc.response.get('Error', {})
        metadata = exc.response.get('ResponseMetadata', {})
        error_code = error.get('Code')
        ctx['error_code'] = error_code
        return RemoteStatusError(
            f"Lambda API rejected invocation: {error_code}",
            status_code=metadata.get('HTTPStatusCode'),
            body=error.get('Message', ''),
            error_code=error_code,
            context=ctx,
        )
    elif isinstance(exc, ParamValidationError):
        return InvocationValidationError(
            f"Invalid invocation parameters: {exc}",
            context=ctx,
        )
    elif isinstance(exc, (BotoConnectionError, HTTPClientError)):
        return TransportError(
            f"Could not reach Lambda endpoint: {exc}",
            cause=exc,
            context=ctx,
        )
    elif isinstance(exc, BotoCoreError):
        return TransportError(
            f"Lambda invocation failed before a response: {exc}",
            cause=exc,
            context=ctx,
        )
    else:
        return TransportError(
            f"Unexpected transport failure: {exc}",
            cause=exc,
            context=ctx,
        )
