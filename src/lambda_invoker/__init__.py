"""
Lambda Invoker

Typed, synchronous Lambda invocation client with JSON payload marshalling,
plus the forwarder and Redis RBAC producer functions it is used with.
"""

__version__ = '0.1.0'

# Re-export key classes for convenience
from .clients import LambdaInvoker, build_lambda_client
from .config import InvokerConfig, get_invoker_config
from .dispatcher import DispatchResult, InvocationDispatcher
from .models import InvocationRequest, InvocationResult
from .payload import (
    Payload,
    RawPayload,
    StructuredPayload,
    as_payload,
    decode_payload,
    marshal_payload,
)
from .logging import (
    configure_logging,
    get_logger,
    logging_context,
)
from .errors import (
    InvocationError,
    ClientSideError,
    InvocationValidationError,
    PayloadEncodeError,
    TransportError,
    RemoteFailure,
    RemoteStatusError,
    RemoteError,
    DecodeError,
    PartialSuccessResult,
)

__all__ = [
    # Version
    '__version__',
    # Client
    'LambdaInvoker',
    'build_lambda_client',
    'InvocationDispatcher',
    'DispatchResult',
    # Config
    'InvokerConfig',
    'get_invoker_config',
    # Models
    'InvocationRequest',
    'InvocationResult',
    'Payload',
    'RawPayload',
    'StructuredPayload',
    'as_payload',
    'decode_payload',
    'marshal_payload',
    # Logging
    'configure_logging',
    'get_logger',
    'logging_context',
    # Errors
    'InvocationError',
    'ClientSideError',
    'InvocationValidationError',
    'PayloadEncodeError',
    'TransportError',
    'RemoteFailure',
    'RemoteStatusError',
    'RemoteError',
    'DecodeError',
    'PartialSuccessResult',
]
