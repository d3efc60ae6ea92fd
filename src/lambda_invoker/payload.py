"""
Payload marshalling for Lambda invocations.

A payload is either raw wire text, forwarded as-is, or a structured value
serialized to compact JSON. Raw text is never re-serialized, so an event
that is already JSON is not double-encoded.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Union

from .errors import DecodeError, PayloadEncodeError


@dataclass(frozen=True)
class RawPayload:
    """Pre-serialized wire text."""

    text: str


@dataclass(frozen=True)
class StructuredPayload:
    """A JSON-serializable value."""

    value: Any


Payload = Union[RawPayload, StructuredPayload]


def as_payload(value: Any) -> Payload:
    """
    Tag a plain value at the call-site boundary.

    Strings are taken as already-serialized wire text; payload instances are
    returned unchanged; everything else is structured.
    """
    if isinstance(value, (RawPayload, StructuredPayload)):
        return value
    if isinstance(value, str):
        return RawPayload(value)
    return StructuredPayload(value)


def marshal_payload(payload: Payload) -> str:
    """
    Render a payload as wire text.

    Wire text must encode to UTF-8. Raw text that does not (lone surrogates)
    is rejected; in structured values lone surrogates are written as \\uXXXX
    escapes, as JSON.stringify does.
    """
    if isinstance(payload, RawPayload):
        try:
            payload.text.encode('utf-8')
        except UnicodeEncodeError as e:
            raise PayloadEncodeError(
                f"Raw payload is not valid UTF-8 text: {e}",
                context={'position': e.start},
            ) from e
        return payload.text

    try:
        value = _normalize_numbers(payload.value)
        wire = json.dumps(
            value,
            separators=(',', ':'),
            ensure_ascii=False,
            allow_nan=False,
        )
        return _LONE_SURROGATE.sub(lambda m: f"\\u{ord(m.group()):04x}", wire)
    except (TypeError, ValueError) as e:
        raise PayloadEncodeError(
            f"Payload is not JSON-serializable: {e}",
            context={'value_type': type(payload.value).__name__},
        ) from e


# Only reachable inside JSON string literals, where \uXXXX is a valid escape
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")

# JSON.stringify switches to exponent notation from 1e21 upward
_MAX_INTEGRAL_FLOAT = 1e21


def _normalize_numbers(value: Any) -> Any:
    """Render integral floats as integers (1.0 -> 1), matching JSON.stringify."""
    if isinstance(value, float):
        if value.is_integer() and abs(value) < _MAX_INTEGRAL_FLOAT:
            return int(value)
        return value
    if isinstance(value, dict):
        return {k: _normalize_numbers(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_numbers(v) for v in value]
    return value


def decode_payload(raw: bytes | str) -> Any:
    """Decode a JSON response payload, raising DecodeError on bad input."""
    if isinstance(raw, bytes):
        try:
            text = raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise DecodeError(
                f"Response payload is not valid UTF-8: {e}",
                raw=raw.decode('utf-8', errors='replace'),
            ) from e
    else:
        text = raw

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(
            f"Invalid JSON in response payload: {e}",
            raw=text,
            context={'size_bytes': len(text)},
        ) from e
