"""Pydantic schemas for Gmail GPT operations."""

from gmail_gpt.schemas.tools import (
    MAX_UNREAD_RESULTS,
    GetEmailParams,
    ListUnreadParams,
    SendEmailParams,
)

__all__ = [
    "MAX_UNREAD_RESULTS",
    "SendEmailParams",
    "ListUnreadParams",
    "GetEmailParams",
]
