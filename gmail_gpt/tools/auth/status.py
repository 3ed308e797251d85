"""Gmail auth status operation - report the authentication state."""

from __future__ import annotations

from typing import Any

from gmail_gpt.auth.tokens import Authenticated
from gmail_gpt.tools.base import ServiceContext, build_success_response


async def gmail_get_auth_status(ctx: ServiceContext) -> dict[str, Any]:
    """Check whether a mailbox is connected.

    Never exposes token values.

    Returns:
        Success response with:
        - authenticated: True/False
        - configured: Whether OAuth client settings are present
        - scopes, expiry, has_refresh_token, expired (when authenticated)
    """
    state = ctx.token_store.state
    data: dict[str, Any] = {
        "authenticated": state.authenticated,
        "configured": ctx.oauth_manager.is_configured,
    }

    if isinstance(state, Authenticated):
        data.update(state.credentials.describe())
        data["expired"] = state.credentials.is_expired()
        return build_success_response(data=data, message="Gmail is connected.")

    return build_success_response(
        data=data,
        message="Not authenticated. Open /auth in a browser and connect Gmail first.",
    )
