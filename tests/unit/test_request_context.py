"""Tests for request context propagation and context-aware logging."""

import io
import json
import logging

import pytest

from storefront_mcp.core.context import (
    generate_correlation_id,
    get_client_id,
    get_correlation_id,
    request_context,
    sync_request_context,
)
from storefront_mcp.core.logging_config import configure_logging


class TestRequestContext:
    def test_correlation_id_format(self):
        corr_id = generate_correlation_id("cli")
        assert corr_id.startswith("cli_")
        assert len(corr_id) == len("cli_") + 12

    def test_sync_context_sets_and_resets(self):
        assert get_correlation_id() == ""
        with sync_request_context(client_id="tester") as ctx:
            assert get_correlation_id() == ctx.correlation_id
            assert get_client_id() == "tester"
        assert get_correlation_id() == ""
        assert get_client_id() == "anonymous"

    @pytest.mark.asyncio
    async def test_async_context(self):
        async with request_context(correlation_id="req_fixed") as ctx:
            assert ctx.correlation_id == "req_fixed"
            assert get_correlation_id() == "req_fixed"
        assert get_correlation_id() == ""

    def test_context_to_dict(self):
        with sync_request_context() as ctx:
            payload = ctx.to_dict()
        assert payload["client_id"] == "anonymous"
        assert payload["elapsed_ms"] >= 0


class TestLogging:
    def test_structured_output_includes_context(self):
        stream = io.StringIO()
        configure_logging(level=logging.INFO, format="structured", stream=stream)

        with sync_request_context(correlation_id="req_log"):
            logging.getLogger("storefront_mcp.test").info(
                "Rendered %d artifacts", 2, extra={"strategy": "logical"}
            )

        entry = json.loads(stream.getvalue().strip())
        assert entry["message"] == "Rendered 2 artifacts"
        assert entry["correlation_id"] == "req_log"
        assert entry["extra"] == {"strategy": "logical"}

    def test_human_output(self):
        stream = io.StringIO()
        configure_logging(level=logging.DEBUG, format="human", stream=stream)

        with sync_request_context(correlation_id="req_h"):
            logging.getLogger("storefront_mcp.core.artifacts").warning("Preview fallback")

        line = stream.getvalue().strip()
        assert "[WARNING] [req_h] core.artifacts: Preview fallback" in line

    def test_reconfiguring_replaces_handlers(self):
        configure_logging(stream=io.StringIO())
        logger = configure_logging(stream=io.StringIO())
        assert len(logger.handlers) == 1
