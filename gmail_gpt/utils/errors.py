"""Custom exception hierarchy for the Gmail GPT server.

Every failure an operation can report belongs to exactly one
:class:`ErrorKind`. Callers (the HTTP routes, the MCP tools and the tests)
discriminate on ``error.kind`` instead of matching message strings.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure kinds surfaced to callers."""

    ADMISSION = "ADMISSION_ERROR"
    VALIDATION = "VALIDATION_ERROR"
    UPSTREAM = "UPSTREAM_ERROR"
    CONFIGURATION = "CONFIGURATION_ERROR"


class GmailGPTError(Exception):
    """Base exception for all Gmail GPT server errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    kind: ErrorKind = ErrorKind.UPSTREAM

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def error_code(self) -> str:
        """Error code reported to callers."""
        return self.kind.value

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class AdmissionError(GmailGPTError):
    """Raised when an operation needs credentials and none are held.

    The user can fix this by running the authorization flow again, so the
    exception carries a remediation hint.
    """

    kind = ErrorKind.ADMISSION

    def __init__(
        self,
        message: str = "Not authenticated.",
        hint: str = "Open /auth in a browser and connect Gmail first.",
        details: dict[str, object] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.hint = hint


class ValidationError(GmailGPTError):
    """Exception raised for input validation errors.

    Raised before any upstream call is made.

    Attributes:
        field: The name of the field that failed validation, if applicable.
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, object] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field


class TokenError(ValidationError):
    """Raised when a credential set would be malformed (e.g. empty access token)."""


class UpstreamError(GmailGPTError):
    """Exception raised when the identity or mail provider call faults.

    Network faults, invalid authorization codes, revoked tokens and quota
    errors all collapse into this one kind.

    Attributes:
        cause: The original exception, if any.
        status_code: HTTP status code returned by the provider, if known.
    """

    kind = ErrorKind.UPSTREAM

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        status_code: int | None = None,
        details: dict[str, object] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.cause = cause
        self.status_code = status_code


class ConfigurationError(GmailGPTError):
    """Raised when OAuth client configuration is missing."""

    kind = ErrorKind.CONFIGURATION


__all__ = [
    "ErrorKind",
    "GmailGPTError",
    "AdmissionError",
    "ValidationError",
    "TokenError",
    "UpstreamError",
    "ConfigurationError",
]
