"""Tests for tools/base.py utilities."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from gmail_gpt.auth.gate import AuthGate
from gmail_gpt.gmail.client import GmailClient
from gmail_gpt.tools.base import (
    ResponseKeys,
    ServiceContext,
    build_error_response,
    build_success_response,
    error_response_for,
    execute_operation,
)
from gmail_gpt.utils.errors import (
    AdmissionError,
    ConfigurationError,
    UpstreamError,
    ValidationError,
)


class TestServiceContext:
    """Tests for ServiceContext wiring."""

    def test_components_share_one_store(self, oauth_manager) -> None:
        ctx = ServiceContext(oauth_manager=oauth_manager)

        assert isinstance(ctx.gate, AuthGate)
        assert isinstance(ctx.gmail_client, GmailClient)
        assert ctx.gate._store is ctx.token_store

    def test_contexts_do_not_share_state(self, oauth_manager, credential_set) -> None:
        first = ServiceContext(oauth_manager=oauth_manager)
        second = ServiceContext(oauth_manager=oauth_manager)

        first.token_store.set(credential_set)

        assert second.token_store.get() is None


class TestBuildSuccessResponse:
    """Tests for build_success_response."""

    def test_basic_response(self):
        """Test basic success response with data."""
        result = build_success_response(data={"key": "value"})
        assert result[ResponseKeys.STATUS] == "success"
        assert result[ResponseKeys.DATA] == {"key": "value"}
        assert ResponseKeys.MESSAGE not in result

    def test_response_with_message_and_count(self):
        result = build_success_response(data={"messages": []}, message="Done", count=0)
        assert result[ResponseKeys.MESSAGE] == "Done"
        assert result[ResponseKeys.COUNT] == 0


class TestBuildErrorResponse:
    """Tests for build_error_response."""

    def test_basic_error(self):
        result = build_error_response(error="Something went wrong")
        assert result[ResponseKeys.STATUS] == "error"
        assert result[ResponseKeys.ERROR] == "Something went wrong"
        assert ResponseKeys.ERROR_CODE not in result

    def test_error_with_code_and_hint(self):
        result = build_error_response(
            error="Not authenticated.",
            error_code="ADMISSION_ERROR",
            hint="Open /auth",
        )
        assert result[ResponseKeys.ERROR_CODE] == "ADMISSION_ERROR"
        assert result["hint"] == "Open /auth"


class TestErrorResponseFor:
    """Tests for mapping errors to responses."""

    def test_upstream_detail_is_hidden(self):
        """Provider messages never reach the caller."""
        error = UpstreamError("invalid_grant: token revoked", cause=ValueError("x"))

        result = error_response_for(error, "Failed to send email")

        assert result[ResponseKeys.ERROR] == "Failed to send email"
        assert result[ResponseKeys.ERROR_CODE] == "UPSTREAM_ERROR"
        assert "invalid_grant" not in str(result)

    def test_admission_includes_hint(self):
        result = error_response_for(AdmissionError(), "unused")

        assert result[ResponseKeys.ERROR_CODE] == "ADMISSION_ERROR"
        assert "/auth" in result["hint"]

    def test_validation_keeps_message(self):
        result = error_response_for(ValidationError("Missing id query parameter"), "unused")

        assert result[ResponseKeys.ERROR] == "Missing id query parameter"
        assert result[ResponseKeys.ERROR_CODE] == "VALIDATION_ERROR"

    def test_configuration_error_code(self):
        result = error_response_for(ConfigurationError("OAuth not configured"), "unused")

        assert result[ResponseKeys.ERROR_CODE] == "CONFIGURATION_ERROR"


class TestExecuteOperation:
    """Tests for execute_operation wrapper."""

    @pytest.mark.asyncio
    async def test_successful_execution(self):
        """Result is returned and one success entry is audited."""
        with patch("gmail_gpt.tools.base.audit_logger") as mock_audit:
            result = await execute_operation(
                name="test_op",
                params={"key": "value"},
                operation=lambda: {"result": "ok"},
            )

        assert result == {"result": "ok"}
        kwargs = mock_audit.log_operation.call_args.kwargs
        assert kwargs["operation"] == "test_op"
        assert kwargs["result_status"] == "success"
        assert kwargs["error_code"] is None

    @pytest.mark.asyncio
    async def test_project_error_is_propagated_and_audited(self):
        def _fail():
            raise AdmissionError()

        with patch("gmail_gpt.tools.base.audit_logger") as mock_audit:
            with pytest.raises(AdmissionError):
                await execute_operation(name="test_op", params={}, operation=_fail)

        kwargs = mock_audit.log_operation.call_args.kwargs
        assert kwargs["result_status"] == "error"
        assert kwargs["error_code"] == "ADMISSION_ERROR"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_propagated(self):
        def _fail():
            raise RuntimeError("boom")

        with patch("gmail_gpt.tools.base.audit_logger") as mock_audit:
            with pytest.raises(RuntimeError):
                await execute_operation(name="test_op", params={}, operation=_fail)

        assert mock_audit.log_operation.call_args.kwargs["error_code"] == "INTERNAL_ERROR"
