"""Lambda entry point: forward the incoming event to the producer function.

Uses AWS Lambda Powertools for structured logging and tracing.
"""

from typing import Any

from aws_lambda_powertools import Logger, Tracer

from ..clients.lambda_client import LambdaInvoker
from ..config import InvokerConfig
from ..payload import as_payload

# Module-level singletons — survive across warm Lambda invocations
logger = Logger(service="redis-rbac-forwarder", log_uncaught_exceptions=True)
tracer = Tracer(service="redis-rbac-forwarder")

_config: InvokerConfig | None = None
_invoker: LambdaInvoker | None = None


def _get_config() -> InvokerConfig:
    """Lazy-init config singleton."""
    global _config
    if _config is None:
        _config = InvokerConfig()
    return _config


def _get_invoker() -> LambdaInvoker:
    """Lazy-init invoker; the boto3 client is reused across invocations."""
    global _invoker
    if _invoker is None:
        _invoker = LambdaInvoker(config=_get_config())
    return _invoker


@tracer.capture_method
def forward_event(event: Any) -> Any:
    """Invoke the producer with the event; string events are sent unmodified."""
    config = _get_config()
    function_name = config.PRODUCER_FUNCTION_NAME

    logger.info("forward.start", extra={"target_function": function_name})
    result = _get_invoker().invoke(function_name, as_payload(event))
    logger.info(
        "forward.success",
        extra={
            "target_function": function_name,
            "status_code": result.status_code,
            "executed_version": result.executed_version,
        },
    )
    return result.payload


@logger.inject_lambda_context(log_event=False)
@tracer.capture_lambda_handler
def lambda_handler(event: Any, context) -> Any:
    """Lambda entry point — returns the producer's decoded response."""
    return forward_event(event)
