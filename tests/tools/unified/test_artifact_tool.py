"""Tests for the unified artifact tool.

Exercises dispatch, validation errors and response envelopes for the
analyze, plan and render actions through the registered MCP tool.
"""

from unittest.mock import AsyncMock, patch

import pytest
from mcp.server.fastmcp import FastMCP

from storefront_mcp.config import ArtifactConfig, ServerConfig
from storefront_mcp.core.artifacts import ArtifactProgressiveRenderer
from storefront_mcp.core.context import request_context
from storefront_mcp.tools.unified.artifact import (
    _dispatch_artifact_action,
    register_unified_artifact_tool,
)
from tests.conftest import RESPONSE_CONTRACT_VERSION, component_template, extract_response_dict


@pytest.fixture
def artifact_tool():
    mcp = FastMCP(name="artifact-test")
    config = ServerConfig(log_level="WARNING", artifacts=ArtifactConfig(artifact_max_size=1000))
    register_unified_artifact_tool(mcp, config)
    return mcp._tool_manager._tools["artifact"].fn


async def _call(tool, **kwargs):
    return extract_response_dict(await tool(**kwargs))


class TestAnalyzeAction:
    @pytest.mark.asyncio
    async def test_returns_profile(self, artifact_tool, sectioned_template):
        response = await _call(artifact_tool, action="analyze", template=sectioned_template)

        assert response["success"] is True
        assert response["meta"]["version"] == RESPONSE_CONTRACT_VERSION
        assert response["meta"]["request_id"].startswith("req_")
        profile = response["data"]["profile"]
        assert profile["size"] == len(sectioned_template)
        assert profile["division_points"] == ["header", "main", "footer"]

    @pytest.mark.asyncio
    async def test_missing_template(self, artifact_tool):
        response = await _call(artifact_tool, action="analyze")

        assert response["success"] is False
        assert response["data"]["error_code"] == "MISSING_REQUIRED"
        assert response["data"]["details"] == {"field": "template"}


class TestPlanAction:
    @pytest.mark.asyncio
    async def test_uses_configured_defaults(self, artifact_tool, sectioned_template):
        response = await _call(artifact_tool, action="plan", template=sectioned_template * 10)

        data = response["data"]
        assert data["options"]["artifact_max_size"] == 1000
        assert data["plan"] == {"strategy": "logical", "points": ["header", "main", "footer"]}
        assert data["estimated_artifact_count"] >= 2

    @pytest.mark.asyncio
    async def test_alias(self, artifact_tool, simple_template):
        response = await _call(artifact_tool, action="split-plan", template=simple_template)

        assert response["data"]["plan"] == {"strategy": "none"}
        assert response["data"]["estimated_artifact_count"] == 1

    @pytest.mark.asyncio
    async def test_invalid_option(self, artifact_tool, simple_template):
        response = await _call(
            artifact_tool, action="plan", template=simple_template, options={"priority_levels": 0}
        )

        assert response["success"] is False
        assert response["data"]["error_code"] == "VALIDATION_ERROR"
        assert response["data"]["details"]["field"] == "options.priority_levels"

    @pytest.mark.asyncio
    async def test_non_integer_option(self, artifact_tool, simple_template):
        response = await _call(
            artifact_tool, action="plan", template=simple_template, options={"split_threshold": "many"}
        )

        assert response["success"] is False
        assert response["data"]["details"]["field"] == "options.split_threshold"


class TestRenderAction:
    @pytest.mark.asyncio
    async def test_single_artifact(self, artifact_tool, simple_template):
        response = await _call(
            artifact_tool, action="render", template=simple_template, data={"greeting": "Hi"}
        )

        assert response["success"] is True
        data = response["data"]
        assert data["count"] == 1
        assert data["strategy"] == "none"
        assert "<p>Hi</p>" in data["artifacts"][0]["content"]
        assert "duration_ms" in response["meta"]["telemetry"]
        assert "warnings" not in response["meta"]

    @pytest.mark.asyncio
    async def test_split_without_content(self, artifact_tool):
        response = await _call(
            artifact_tool,
            action="render_to_artifacts",
            template=component_template(12),
            options={"split_threshold": 5},
            include_content=False,
        )

        data = response["data"]
        assert data["strategy"] == "automatic"
        assert data["count"] >= 1
        assert all("content" not in item for item in data["artifacts"])
        assert all(item["size"] > 0 for item in data["artifacts"])

    @pytest.mark.asyncio
    async def test_fallback_is_reported_as_warning(self, artifact_tool):
        response = await _call(
            artifact_tool, action="render", template="<html><body>{% if %}</body></html>"
        )

        assert response["success"] is True
        assert response["data"]["fallback_used"] is True
        assert response["data"]["count"] == 1
        assert len(response["meta"]["warnings"]) == 1

    @pytest.mark.asyncio
    async def test_data_must_be_object(self, artifact_tool, simple_template):
        response = await _call(artifact_tool, action="render", template=simple_template, data=["x"])

        assert response["data"]["error_code"] == "VALIDATION_ERROR"
        assert response["data"]["details"] == {"field": "data"}


class TestDispatch:
    @pytest.mark.asyncio
    async def test_unsupported_action(self, artifact_tool):
        response = await _call(artifact_tool, action="publish", template="<p></p>")

        assert response["success"] is False
        assert response["data"]["error_code"] == "VALIDATION_ERROR"
        assert response["data"]["details"]["allowed_actions"] == ["analyze", "plan", "render"]

    @pytest.mark.asyncio
    async def test_unexpected_error_is_sanitized(self):
        renderer = ArtifactProgressiveRenderer()
        with patch.object(renderer, "render", AsyncMock(side_effect=RuntimeError("/srv/secret"))):
            async with request_context(correlation_id="req_failed"):
                response = await _dispatch_artifact_action(
                    "render", renderer=renderer, payload={"template": "<p></p>"}
                )

        assert response["success"] is False
        assert response["error"] == "An internal error occurred"
        assert response["data"]["error_code"] == "INTERNAL_ERROR"
        assert response["data"]["remediation"].endswith("Reference: req_failed")
        assert response["meta"]["request_id"] == "req_failed"
        assert "/srv/secret" not in str(response)

