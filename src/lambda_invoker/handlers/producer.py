"""Lambda entry point: run one Redis command as the function's RBAC user.

The RBAC user's credentials live in Secrets Manager as a JSON secret
({"username": ..., "password": ...}). The replication group enforces
transit encryption, so the connection always uses TLS.
"""

from typing import Any, Literal

from aws_lambda_powertools import Logger, Tracer
from aws_lambda_powertools.utilities import parameters
from pydantic import BaseModel, Field, field_validator, model_validator
from redis import Redis

from ..config import ProducerConfig

# Module-level singletons — survive across warm Lambda invocations
logger = Logger(service="redis-rbac-producer", log_uncaught_exceptions=True)
tracer = Tracer(service="redis-rbac-producer")

_config: ProducerConfig | None = None
_redis: Redis | None = None
_credentials: dict[str, Any] | None = None


class RedisCommand(BaseModel):
    """Command carried in the invocation event."""

    op: Literal['SET', 'GET']
    key: str = Field(min_length=1)
    value: str | None = None

    @field_validator('op', mode='before')
    @classmethod
    def normalize_op(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator('value', mode='before')
    @classmethod
    def stringify_number(cls, v: Any) -> Any:
        # Redis stores strings; bools stay invalid
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @model_validator(mode='after')
    def require_value_for_set(self) -> 'RedisCommand':
        if self.op == 'SET' and self.value is None:
            raise ValueError('SET requires a value')
        return self


def _get_config() -> ProducerConfig:
    """Lazy-init config singleton."""
    global _config
    if _config is None:
        _config = ProducerConfig()
    return _config


def _get_redis() -> Redis:
    """
    Return a Redis connection authenticated as the RBAC user.

    The secret is read on every call (Powertools caches it for
    SECRET_MAX_AGE_SECONDS); the connection is rebuilt when the credentials
    change, so a rotated password is picked up once the cache expires.
    """
    global _redis, _credentials
    config = _get_config()
    credentials: dict[str, Any] = parameters.get_secret(
        config.SECRET_ARN,
        transform="json",
        max_age=config.SECRET_MAX_AGE_SECONDS,
    )
    if _redis is None or credentials != _credentials:
        if _redis is not None:
            _redis.close()
            logger.info("redis.credentials_rotated", extra={"user": credentials["username"]})
        _redis = Redis(
            host=config.REDIS_ENDPOINT,
            port=config.REDIS_PORT,
            username=credentials["username"],
            password=credentials["password"],
            ssl=True,
            decode_responses=True,
            socket_timeout=config.REDIS_SOCKET_TIMEOUT_SECONDS,
        )
        _credentials = credentials
        logger.info(
            "redis.connected",
            extra={"endpoint": config.REDIS_ENDPOINT, "user": credentials["username"]},
        )
    return _redis


@tracer.capture_method
def execute(command: RedisCommand) -> dict[str, Any]:
    """Run the command; Redis errors (e.g. NOPERM) propagate."""
    client = _get_redis()

    if command.op == 'SET':
        ok = client.set(command.key, command.value)
        return {"ok": bool(ok)}

    return {"ok": True, "value": client.get(command.key)}


@logger.inject_lambda_context(log_event=False)
@tracer.capture_lambda_handler
def lambda_handler(event: dict, context) -> dict:
    """Lambda entry point — parse the command and execute it."""
    command = RedisCommand.model_validate(event)
    logger.info("command.received", extra={"op": command.op})
    return execute(command)
