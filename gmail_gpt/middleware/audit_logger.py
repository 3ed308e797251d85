"""Audit trail for mailbox operations and credential lifecycle events.

Each record is one JSON object emitted on the ``gmail_gpt.audit`` logger, so
it follows whatever handlers ``configure_logging`` installed. Message
content, authorization codes and tokens are replaced with ``[REDACTED]``
before a record is built.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)
audit_log = logging.getLogger("gmail_gpt.audit")

REDACTED = "[REDACTED]"


class AuditEntry(BaseModel):
    """One audit record."""

    timestamp: str = Field(
        default_factory=lambda: datetime.now(UTC).isoformat(),
        description="ISO format timestamp (UTC)",
    )
    category: Literal["operation", "auth"] = Field(
        ..., description="Mailbox operation or credential lifecycle event"
    )
    name: str = Field(..., description="Operation or event name")
    parameters: dict[str, Any] = Field(
        default_factory=dict,
        description="Call parameters with sensitive values redacted",
    )
    outcome: Literal["success", "error"] = Field(default="success")
    error_code: str | None = Field(default=None, description="ErrorKind value on failure")
    duration_ms: float | None = Field(default=None)


class AuditLogger:
    """Writes audit entries, redacting anything that could leak mail or secrets."""

    SENSITIVE_KEYS = frozenset(
        {
            "body",
            "message",
            "raw",
            "code",
            "token",
            "access_token",
            "refresh_token",
            "client_secret",
            "secret",
            "authorization",
        }
    )

    def __init__(self, enabled: bool | None = None) -> None:
        if enabled is None:
            enabled = os.getenv("AUDIT_LOG", "true").lower() not in ("false", "0", "no")
        self._enabled = enabled

    def _redact(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                key: REDACTED if str(key).lower() in self.SENSITIVE_KEYS else self._redact(item)
                for key, item in value.items()
            }
        if isinstance(value, list):
            return [self._redact(item) for item in value]
        return value

    def write(self, entry: AuditEntry) -> None:
        """Emit ``entry`` as a single JSON line."""
        if not self._enabled:
            return
        try:
            audit_log.info(json.dumps({"audit": entry.model_dump()}, default=str))
        except (TypeError, ValueError) as e:
            logger.error("Failed to serialize audit entry %s: %s", entry.name, e)

    def log_operation(
        self,
        operation: str,
        parameters: dict[str, Any],
        result_status: str = "success",
        error_code: str | None = None,
        duration_ms: float | None = None,
    ) -> None:
        """Record one mailbox operation call.

        Args:
            operation: Operation name (send_email, list_unread, ...).
            parameters: Call parameters; redacted here.
            result_status: "success" or "error".
            error_code: ErrorKind value when the call failed.
            duration_ms: Wall time of the call.
        """
        self.write(
            AuditEntry(
                category="operation",
                name=operation,
                parameters=self._redact(parameters),
                outcome="error" if result_status == "error" else "success",
                error_code=error_code,
                duration_ms=round(duration_ms, 2) if duration_ms is not None else None,
            )
        )

    def log_auth_event(
        self,
        event: str,
        success: bool = True,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Record authorize, callback, refresh or logout."""
        self.write(
            AuditEntry(
                category="auth",
                name=event,
                parameters=self._redact(details or {}),
                outcome="success" if success else "error",
            )
        )


audit_logger = AuditLogger()


__all__ = [
    "AuditEntry",
    "AuditLogger",
    "audit_logger",
]
