"""
Tests for the logging module.
"""

from lambda_invoker.logging import (
    add_context_info,
    get_function_name,
    get_request_id,
    logging_context,
)


class TestLoggingContext:
    """Test logging context management."""

    def test_logging_context_sets_values(self):
        with logging_context(request_id="req_123", function_name="producer"):
            assert get_request_id() == "req_123"
            assert get_function_name() == "producer"

    def test_logging_context_restores_values(self):
        with logging_context(request_id="outer"):
            assert get_request_id() == "outer"

            with logging_context(request_id="inner"):
                assert get_request_id() == "inner"

            assert get_request_id() == "outer"

        assert get_request_id() is None

    def test_logging_context_partial_values(self):
        with logging_context(function_name="producer"):
            assert get_function_name() == "producer"
            assert get_request_id() is None


class TestAddContextInfo:
    def test_adds_context_to_event(self):
        with logging_context(request_id="req_1", function_name="producer"):
            event = add_context_info(None, "info", {"event": "invoke.start"})

        assert event["request_id"] == "req_1"
        assert event["function_name"] == "producer"

    def test_no_context_leaves_event_unchanged(self):
        event = add_context_info(None, "info", {"event": "invoke.start"})

        assert event == {"event": "invoke.start"}
