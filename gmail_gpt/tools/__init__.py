"""Gmail GPT operations.

Operations are transport-independent: the HTTP routes and the MCP tools
both call them with a ServiceContext.

- Auth: consent URL, callback exchange, logout, status
- Read: list unread, get email
- Write: send email
"""

from gmail_gpt.tools.auth import (
    gmail_auth_url,
    gmail_complete_login,
    gmail_get_auth_status,
    gmail_logout,
)
from gmail_gpt.tools.base import (
    ServiceContext,
    build_error_response,
    build_success_response,
    error_response_for,
    execute_operation,
)
from gmail_gpt.tools.read import gmail_get_email, gmail_list_unread
from gmail_gpt.tools.write import gmail_send_email

__all__ = [
    # Base utilities
    "ServiceContext",
    "build_error_response",
    "build_success_response",
    "error_response_for",
    "execute_operation",
    # Auth
    "gmail_auth_url",
    "gmail_complete_login",
    "gmail_get_auth_status",
    "gmail_logout",
    # Read
    "gmail_list_unread",
    "gmail_get_email",
    # Write
    "gmail_send_email",
]
