"""
Pytest configuration and shared fixtures.

Key fixtures:
- lambda_client: MagicMock standing in for the boto3 Lambda client
- invoker: LambdaInvoker wired to lambda_client with default settings
- lambda_context: minimal Lambda context for Powertools-decorated handlers

No AWS credentials or network access are needed; every boto3 call is
answered by the stub.
"""

import io
import sys
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from lambda_invoker.clients.lambda_client import LambdaInvoker
from lambda_invoker.config import InvokerConfig


def make_response(
    status_code: int = 200,
    body: bytes | str = b'{"ok":true}',
    **extra: Any,
) -> dict[str, Any]:
    """Build a Lambda.invoke response with a readable Payload stream."""
    if isinstance(body, str):
        body = body.encode('utf-8')
    return {
        'StatusCode': status_code,
        'Payload': io.BytesIO(body),
        'ResponseMetadata': {'HTTPStatusCode': status_code},
        **extra,
    }


@pytest.fixture
def lambda_client() -> MagicMock:
    """boto3 Lambda client double returning a 200 `{"ok":true}` response."""
    client = MagicMock()
    client.invoke.return_value = make_response()
    return client


@pytest.fixture
def invoker_config() -> InvokerConfig:
    """Default settings, independent of the test environment."""
    return InvokerConfig(
        AWS_REGION='us-east-1',
        INVOKE_LOG_TYPE='None',
        INVOKE_QUALIFIER=None,
    )


@pytest.fixture
def invoker(lambda_client: MagicMock, invoker_config: InvokerConfig) -> LambdaInvoker:
    """LambdaInvoker using the stub client."""
    return LambdaInvoker(client=lambda_client, config=invoker_config)


@pytest.fixture
def lambda_context() -> MagicMock:
    """Minimal Lambda context object."""
    context = MagicMock()
    context.function_name = 'test'
    context.memory_limit_in_mb = 256
    context.invoked_function_arn = 'arn:aws:lambda:us-east-1:123:function:test'
    context.aws_request_id = 'req-0001'
    return context
