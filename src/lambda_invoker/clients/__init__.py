"""
AWS clients for the Lambda invoker.
"""

from .boto import build_lambda_client
from .lambda_client import ACCEPTED_STATUS_CODES, LambdaInvoker

__all__ = [
    'ACCEPTED_STATUS_CODES',
    'LambdaInvoker',
    'build_lambda_client',
]
