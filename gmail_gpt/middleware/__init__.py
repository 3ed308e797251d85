"""Middleware module for the Gmail GPT server."""

from gmail_gpt.middleware.audit_logger import AuditEntry, AuditLogger, audit_logger
from gmail_gpt.middleware.validator import validate_message_id, validate_send_request

__all__ = [
    "AuditLogger",
    "AuditEntry",
    "audit_logger",
    "validate_send_request",
    "validate_message_id",
]
