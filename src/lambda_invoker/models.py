"""Request and result types for Lambda invocations."""

from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from .payload import Payload, as_payload


@dataclass(frozen=True)
class InvocationRequest:
    """One synchronous call to a named function."""

    function_name: str
    payload: Payload
    request_id: str = field(default_factory=lambda: uuid4().hex)

    @classmethod
    def of(cls, function_name: str, value: Any) -> 'InvocationRequest':
        """Build a request from a plain value (strings pass through raw)."""
        return cls(function_name=function_name, payload=as_payload(value))


@dataclass(frozen=True)
class InvocationResult:
    """Decoded result of a successful invocation."""

    payload: Any
    status_code: int
    executed_version: str | None = None
    log_tail: str | None = None
