"""
Configuration for the Lambda invoker and its handlers.

Settings are read from environment variables; a `.env` file in the project
root is loaded first when present.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env file from project root
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / '.env'
if _env_file.exists():
    load_dotenv(_env_file)


class InvokerConfig(BaseSettings):
    """Invocation client settings."""

    AWS_REGION: str | None = None
    PRODUCER_FUNCTION_NAME: str = 'PRODUCER_LAMBDA'

    # 'Tail' returns the last 4 KB of the function's log with each response
    INVOKE_LOG_TYPE: Literal['None', 'Tail'] = 'None'
    INVOKE_QUALIFIER: str | None = None

    CONNECT_TIMEOUT_SECONDS: int = Field(default=10, ge=1, le=60)
    READ_TIMEOUT_SECONDS: int = Field(default=60, ge=1, le=900)
    MAX_ATTEMPTS: int = Field(default=1, ge=1, le=10)

    LOG_LEVEL: str = 'INFO'
    LOG_JSON: bool = False


class ProducerConfig(BaseSettings):
    """Producer function settings; env names match the deployed stack."""

    REDIS_ENDPOINT: str
    REDIS_PORT: int = 6379
    SECRET_ARN: str
    REDIS_SOCKET_TIMEOUT_SECONDS: float = Field(default=5.0, gt=0)
    SECRET_MAX_AGE_SECONDS: int = Field(default=300, ge=0)


@lru_cache
def get_invoker_config() -> InvokerConfig:
    """Cached config singleton."""
    return InvokerConfig()


@lru_cache
def get_producer_config() -> ProducerConfig:
    """Cached config singleton."""
    return ProducerConfig()
