"""
Tests for response helper functions and the response-v2 envelope.
"""

import json
from dataclasses import asdict

import pytest

from storefront_mcp.core.context import sync_request_context
from storefront_mcp.core.responses import (
    RESPONSE_VERSION,
    ErrorCode,
    ErrorType,
    ToolResponse,
    error_response,
    internal_error,
    not_found_error,
    sanitize_error_message,
    success_response,
    validation_error,
)


class TestToolResponse:
    def test_defaults(self):
        response = ToolResponse(success=True)
        assert response.data == {}
        assert response.error is None
        assert response.meta == {"version": RESPONSE_VERSION}

    def test_serializes_to_plain_dict(self):
        payload = asdict(success_response(count=2))
        assert set(payload) == {"success", "data", "error", "meta"}
        json.dumps(payload)


class TestSuccessResponse:
    def test_data_and_fields_merge(self):
        response = success_response({"artifacts": []}, count=0)
        assert response.success is True
        assert response.data == {"artifacts": [], "count": 0}

    def test_meta_carries_warnings_and_telemetry(self):
        response = success_response(
            warnings=["fallback used"], telemetry={"duration_ms": 1.5}
        )
        assert response.meta["version"] == "response-v2"
        assert response.meta["warnings"] == ["fallback used"]
        assert response.meta["telemetry"] == {"duration_ms": 1.5}

    def test_empty_warnings_are_omitted(self):
        assert "warnings" not in success_response(warnings=[]).meta

    def test_request_id_comes_from_context(self):
        with sync_request_context(correlation_id="req_abc123"):
            response = success_response()
        assert response.meta["request_id"] == "req_abc123"

    def test_explicit_request_id_wins(self):
        with sync_request_context(correlation_id="req_abc123"):
            response = success_response(request_id="explicit")
        assert response.meta["request_id"] == "explicit"


class TestErrorResponse:
    def test_defaults_to_internal(self):
        response = error_response("boom")
        assert response.success is False
        assert response.error == "boom"
        assert response.data["error_code"] == "INTERNAL_ERROR"
        assert response.data["error_type"] == "internal"

    def test_string_codes_pass_through(self):
        response = error_response("x", error_code="CUSTOM", error_type="validation")
        assert response.data["error_code"] == "CUSTOM"

    def test_remediation_and_details(self):
        response = error_response(
            "bad",
            error_code=ErrorCode.MISSING_REQUIRED,
            error_type=ErrorType.VALIDATION,
            remediation="Provide a template",
            details={"field": "template"},
        )
        assert response.data["remediation"] == "Provide a template"
        assert response.data["details"] == {"field": "template"}


class TestSpecializedErrors:
    def test_validation_error_field(self):
        response = validation_error("too small", field="options.artifact_max_size")
        assert response.data["error_code"] == "VALIDATION_ERROR"
        assert response.data["details"] == {"field": "options.artifact_max_size"}

    def test_not_found_error(self):
        response = not_found_error("Template", "home.html")
        assert response.error == "Template 'home.html' not found"
        assert response.data["resource_id"] == "home.html"
        assert response.data["error_type"] == "not_found"

    def test_internal_error_reference(self):
        response = internal_error(request_id="req_1")
        assert "Reference: req_1" in response.data["remediation"]


class TestSanitizeErrorMessage:
    @pytest.mark.parametrize(
        "exc,expected",
        [
            (FileNotFoundError("/secret/path"), "Required file or resource not found"),
            (PermissionError("/etc"), "Permission denied for requested operation"),
            (ValueError("x"), "Invalid value provided"),
            (KeyError("k"), "Required configuration key not found"),
            (RuntimeError("internal"), "An internal error occurred"),
        ],
    )
    def test_hides_internal_details(self, exc, expected):
        assert sanitize_error_message(exc) == expected

    def test_json_errors(self):
        with pytest.raises(json.JSONDecodeError) as info:
            json.loads("{")
        assert sanitize_error_message(info.value) == "Invalid JSON format"

    def test_include_type(self):
        message = sanitize_error_message(RuntimeError("x"), include_type=True)
        assert message == "An internal error occurred (RuntimeError)"
