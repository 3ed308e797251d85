"""Gmail login operations - consent redirect and authorization callback.

Flow:
1. The operator opens ``/auth`` (or an agent calls gmail_auth_url)
   → gets redirected to Google's consent page
2. Google redirects to ``/oauth2callback?code=...``
   → the code is exchanged for a credential set
   → the credential set replaces whatever the token store held

Nothing is remembered between the two steps. A failed exchange leaves the
token store exactly as it was.
"""

from __future__ import annotations

import logging
from typing import Any

from gmail_gpt.middleware.audit_logger import audit_logger
from gmail_gpt.tools.base import (
    ServiceContext,
    build_success_response,
    error_response_for,
    execute_operation,
)
from gmail_gpt.utils.errors import GmailGPTError, ValidationError

logger = logging.getLogger(__name__)


async def gmail_auth_url(ctx: ServiceContext, force_consent: bool = True) -> dict[str, Any]:
    """Build the Google consent URL for the operator to open.

    Args:
        ctx: Service context.
        force_consent: Re-prompt for consent instead of reusing a prior grant.

    Returns:
        Success: {status, data: {auth_url}, message}
        Error: {status, error, error_code}
    """
    try:
        auth_url = ctx.oauth_manager.create_auth_url(force_consent=force_consent)
    except GmailGPTError as e:
        logger.error("Cannot start authorization: %s", e)
        return error_response_for(e, "Failed to start authorization")

    audit_logger.log_auth_event("authorize", details={"force_consent": force_consent})
    return build_success_response(
        data={"auth_url": auth_url},
        message="Open the URL in a browser and approve access to Gmail.",
    )


async def gmail_complete_login(
    ctx: ServiceContext,
    code: str | None,
    error: str | None = None,
) -> dict[str, Any]:
    """Exchange the callback's authorization code and store the credentials.

    Args:
        ctx: Service context.
        code: Authorization code from the callback query string.
        error: OAuth error reported by Google instead of a code
            (e.g. "access_denied").

    Returns:
        Success: {status, data: {authenticated, scopes, expiry, ...}, message}
        Error: {status, error, error_code}
    """
    try:
        if error:
            raise ValidationError(f"Authorization denied: {error}", field="error")
        if not code:
            raise ValidationError("Missing code parameter", field="code")

        credentials = await execute_operation(
            "oauth_callback",
            {"code": code},
            lambda: ctx.oauth_manager.exchange_code(code),
        )
    except GmailGPTError as e:
        logger.error("OAuth callback error: %s", e)
        audit_logger.log_auth_event(
            "callback", success=False, details={"error_code": e.error_code}
        )
        return error_response_for(e, "OAuth error")

    ctx.token_store.set(credentials)
    audit_logger.log_auth_event("callback", details=credentials.describe())

    return build_success_response(
        data={"authenticated": True, **credentials.describe()},
        message="Gmail connected. You can close this tab.",
    )
