"""Base utilities for Gmail GPT operations.

This module provides shared utilities used by all operations including:
- The service context (token store, auth gate, OAuth manager, Gmail client)
- Standardized response builders
- The audit-logging execution wrapper
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from starlette.concurrency import run_in_threadpool

from gmail_gpt.auth.gate import AuthGate
from gmail_gpt.auth.oauth import OAuthManager
from gmail_gpt.auth.storage import TokenStore
from gmail_gpt.gmail.client import GmailClient
from gmail_gpt.middleware.audit_logger import audit_logger
from gmail_gpt.utils.errors import AdmissionError, ErrorKind, GmailGPTError

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# Service Context
# =============================================================================


@dataclass
class ServiceContext:
    """Everything an operation needs, owned by one server instance.

    Attributes:
        oauth_manager: Consent URL builder and code exchanger.
        token_store: Single-slot credential holder.
        gate: Admission check over token_store.
        gmail_client: Gmail API service factory.
    """

    oauth_manager: OAuthManager
    token_store: TokenStore = field(default_factory=TokenStore)
    gate: AuthGate = field(init=False)
    gmail_client: GmailClient = field(init=False)

    def __post_init__(self) -> None:
        self.gate = AuthGate(self.token_store)
        self.gmail_client = GmailClient(self.oauth_manager, self.token_store)

    @classmethod
    def from_env(cls) -> ServiceContext:
        """Build a context with OAuth settings from the environment."""
        return cls(oauth_manager=OAuthManager())


# =============================================================================
# Response Envelope
# =============================================================================


class ResponseKeys:
    """Keys of the JSON envelope shared by routes and MCP tools."""

    STATUS = "status"
    DATA = "data"
    MESSAGE = "message"
    COUNT = "count"
    ERROR = "error"
    ERROR_CODE = "error_code"
    HINT = "hint"


def build_success_response(
    data: Any,
    message: str | None = None,
    count: int | None = None,
) -> dict[str, Any]:
    """Wrap an operation result: ``{"status": "success", "data": ...}``.

    ``message`` and ``count`` are only included when given.
    """
    envelope: dict[str, Any] = {ResponseKeys.STATUS: "success", ResponseKeys.DATA: data}
    if message:
        envelope[ResponseKeys.MESSAGE] = message
    if count is not None:
        envelope[ResponseKeys.COUNT] = count
    return envelope


def build_error_response(
    error: str,
    error_code: str | None = None,
    hint: str | None = None,
) -> dict[str, Any]:
    """Describe a failure: ``{"status": "error", "error": ..., "error_code": ...}``."""
    envelope: dict[str, Any] = {ResponseKeys.STATUS: "error", ResponseKeys.ERROR: error}
    if error_code:
        envelope[ResponseKeys.ERROR_CODE] = error_code
    if hint:
        envelope[ResponseKeys.HINT] = hint
    return envelope


def error_response_for(error: GmailGPTError, failure_message: str) -> dict[str, Any]:
    """Map a project error to a caller-visible error response.

    Upstream failures are reported with the generic ``failure_message`` only;
    provider detail stays in the server log.
    """
    if error.kind is ErrorKind.UPSTREAM:
        return build_error_response(failure_message, error_code=error.error_code)

    hint = error.hint if isinstance(error, AdmissionError) else None
    return build_error_response(error.message, error_code=error.error_code, hint=hint)


# =============================================================================
# Operation Execution Wrapper
# =============================================================================


async def execute_operation(
    name: str,
    params: dict[str, Any],
    operation: Callable[[], T],
) -> T:
    """Run a blocking operation in a worker thread with audit logging.

    Args:
        name: Name of the operation being executed.
        params: Operation parameters (for audit logging, redacted there).
        operation: The actual operation to execute (sync callable).

    Returns:
        Result of the operation.

    Raises:
        GmailGPTError: If the operation fails.
    """
    start_time = time.perf_counter()
    result_status = "success"
    error_code: str | None = None

    try:
        return await run_in_threadpool(operation)
    except GmailGPTError as e:
        result_status = "error"
        error_code = e.error_code
        raise
    except Exception:
        result_status = "error"
        error_code = "INTERNAL_ERROR"
        raise
    finally:
        duration_ms = (time.perf_counter() - start_time) * 1000
        audit_logger.log_operation(
            operation=name,
            parameters=params,
            result_status=result_status,
            error_code=error_code,
            duration_ms=duration_ms,
        )


__all__ = [
    "ServiceContext",
    "ResponseKeys",
    "build_success_response",
    "build_error_response",
    "error_response_for",
    "execute_operation",
]
