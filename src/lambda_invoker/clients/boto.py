"""boto3 Lambda client construction."""

from typing import Any

import boto3
from botocore.config import Config

from ..config import InvokerConfig


def build_lambda_client(config: InvokerConfig) -> Any:
    """
    Create a boto3 Lambda client from settings.

    Retries are disabled by default (MAX_ATTEMPTS=1): each invoke() call
    maps to exactly one request. The client holds no per-call state and
    is safe to share across threads.
    """
    botocore_config = Config(
        connect_timeout=config.CONNECT_TIMEOUT_SECONDS,
        read_timeout=config.READ_TIMEOUT_SECONDS,
        retries={'total_max_attempts': config.MAX_ATTEMPTS, 'mode': 'standard'},
    )
    return boto3.client(
        'lambda',
        region_name=config.AWS_REGION,
        config=botocore_config,
    )
