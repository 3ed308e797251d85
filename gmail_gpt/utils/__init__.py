"""Utility functions and helpers for the Gmail GPT server.

This module provides the shared exception hierarchy.
"""

from gmail_gpt.utils.errors import (
    AdmissionError,
    ConfigurationError,
    ErrorKind,
    GmailGPTError,
    TokenError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "ErrorKind",
    "GmailGPTError",
    "AdmissionError",
    "ValidationError",
    "TokenError",
    "UpstreamError",
    "ConfigurationError",
]
