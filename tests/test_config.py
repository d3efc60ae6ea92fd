"""Tests for invoker and producer configuration."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from lambda_invoker.config import InvokerConfig, ProducerConfig


class TestInvokerConfig:
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = InvokerConfig()
            assert config.AWS_REGION is None
            assert config.PRODUCER_FUNCTION_NAME == "PRODUCER_LAMBDA"
            assert config.INVOKE_LOG_TYPE == "None"
            assert config.CONNECT_TIMEOUT_SECONDS == 10
            assert config.READ_TIMEOUT_SECONDS == 60
            assert config.MAX_ATTEMPTS == 1

    def test_config_loads_from_env(self):
        env = {
            "AWS_REGION": "eu-west-1",
            "PRODUCER_FUNCTION_NAME": "RedisRbacStack-producerFn",
            "INVOKE_LOG_TYPE": "Tail",
            "READ_TIMEOUT_SECONDS": "120",
        }
        with patch.dict(os.environ, env, clear=True):
            config = InvokerConfig()
            assert config.AWS_REGION == "eu-west-1"
            assert config.PRODUCER_FUNCTION_NAME == "RedisRbacStack-producerFn"
            assert config.INVOKE_LOG_TYPE == "Tail"
            assert config.READ_TIMEOUT_SECONDS == 120

    def test_invalid_log_type_rejected(self):
        with patch.dict(os.environ, {"INVOKE_LOG_TYPE": "Verbose"}, clear=True):
            with pytest.raises(ValidationError):
                InvokerConfig()

    def test_timeout_bounds(self):
        with patch.dict(os.environ, {"READ_TIMEOUT_SECONDS": "0"}, clear=True):
            with pytest.raises(ValidationError):
                InvokerConfig()


class TestProducerConfig:
    def test_reads_stack_env_names(self):
        env = {
            "redis_endpoint": "master.redisreplicationgroup.abc.use1.cache.amazonaws.com",
            "redis_port": "6380",
            "secret_arn": "arn:aws:secretsmanager:us-east-1:123:secret:producer",
        }
        with patch.dict(os.environ, env, clear=True):
            config = ProducerConfig()
            assert config.REDIS_ENDPOINT.startswith("master.")
            assert config.REDIS_PORT == 6380
            assert config.SECRET_ARN.endswith(":producer")

    def test_missing_endpoint_rejected(self):
        with patch.dict(os.environ, {"secret_arn": "arn"}, clear=True):
            with pytest.raises(ValidationError):
                ProducerConfig()
