"""Gmail logout operation - clear held credentials."""

from __future__ import annotations

import logging
from typing import Any

from gmail_gpt.middleware.audit_logger import audit_logger
from gmail_gpt.tools.base import ServiceContext, build_success_response

logger = logging.getLogger(__name__)


async def gmail_logout(ctx: ServiceContext) -> dict[str, Any]:
    """Disconnect Gmail by clearing the token store.

    Safe to call when already logged out.

    Returns:
        Success response with logout confirmation.
    """
    had_credentials = ctx.token_store.is_authenticated
    ctx.token_store.clear()
    audit_logger.log_auth_event("logout", details={"had_credentials": had_credentials})

    if had_credentials:
        logger.info("User logged out successfully")
        return build_success_response(
            data={"logged_out": True},
            message="Gmail disconnected.",
        )

    logger.debug("Logout called but no credentials were stored")
    return build_success_response(
        data={"logged_out": False},
        message="Gmail disconnected. No credentials were stored.",
    )
