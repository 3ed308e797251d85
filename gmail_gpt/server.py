"""FastMCP server for Gmail GPT.

One server instance exposes the same operations two ways:

- HTTP routes (custom routes): /, /healthz, /auth, /oauth2callback,
  /logout, /status, /sendEmail, /listUnread, /getEmail
- MCP tools (6): gmail_auth_url, gmail_auth_status, gmail_logout,
  gmail_send_email, gmail_list_unread, gmail_get_email

Both share one ServiceContext, so a login completed through the browser
callback is visible to MCP tool calls and the other way around.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from gmail_gpt.gmail.messages import MAX_UNREAD_RESULTS
from gmail_gpt.routes import build_routes
from gmail_gpt.tools import (
    ServiceContext,
    gmail_auth_url,
    gmail_get_auth_status,
    gmail_get_email,
    gmail_list_unread,
    gmail_logout,
    gmail_send_email,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "gmail-gpt-server"


# =============================================================================
# Lifespan Context Manager
# =============================================================================


@asynccontextmanager
async def server_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Log startup and shutdown. Credentials never outlive the process."""
    logger.info("Gmail GPT server starting up (no stored credentials)")
    yield {}
    logger.info("Gmail GPT server shutting down, discarding credentials")


# =============================================================================
# Auth Tool Wrappers
# =============================================================================


def _register_auth_tools(mcp: FastMCP, ctx: ServiceContext) -> None:
    """Register authentication tools with the FastMCP server."""

    @mcp.tool(
        name="gmail_auth_url",
        annotations=ToolAnnotations(
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
        ),
    )
    async def gmail_auth_url_tool(force_consent: bool = True) -> dict[str, Any]:
        """Get the Google consent URL to connect Gmail.

        The operator opens the URL in a browser; Google then redirects to
        this server's /oauth2callback route, which stores the credentials.

        Args:
            force_consent: Re-prompt for consent (default True).

        Returns:
            Success: {status, data: {auth_url}, message}
        """
        return await gmail_auth_url(ctx, force_consent=force_consent)

    @mcp.tool(
        name="gmail_auth_status",
        annotations=ToolAnnotations(
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
        ),
    )
    async def gmail_auth_status_tool() -> dict[str, Any]:
        """Check whether Gmail is connected.

        Returns:
            Success response with authenticated, configured and, when
            connected, scopes and expiry.
        """
        return await gmail_get_auth_status(ctx)

    @mcp.tool(
        name="gmail_logout",
        annotations=ToolAnnotations(
            readOnlyHint=False,
            destructiveHint=True,
            idempotentHint=True,
        ),
    )
    async def gmail_logout_tool() -> dict[str, Any]:
        """Disconnect Gmail by clearing the held credentials.

        Returns:
            Success response with logout confirmation.
        """
        return await gmail_logout(ctx)


# =============================================================================
# Mail Tool Wrappers
# =============================================================================


def _register_mail_tools(mcp: FastMCP, ctx: ServiceContext) -> None:
    """Register the send/list/get tools with the FastMCP server."""

    @mcp.tool(
        name="gmail_send_email",
        annotations=ToolAnnotations(
            readOnlyHint=False,
            destructiveHint=False,
            idempotentHint=False,
        ),
    )
    async def gmail_send_email_tool(to: str, subject: str, message: str) -> dict[str, Any]:
        """Send a plain-text email.

        Args:
            to: Recipient email address.
            subject: Email subject line.
            message: Email body (plain text).

        Returns:
            Sent message id, or an error (ADMISSION_ERROR when Gmail is
            not connected).
        """
        payload = {"to": to, "subject": subject, "message": message}
        return await gmail_send_email(ctx, payload)

    @mcp.tool(
        name="gmail_list_unread",
        annotations=ToolAnnotations(
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
        ),
    )
    async def gmail_list_unread_tool(max_results: int = MAX_UNREAD_RESULTS) -> dict[str, Any]:
        """List unread emails with sender, subject, date and snippet.

        Args:
            max_results: Maximum emails to return (1-10, default 10).

        Returns:
            Unread message summaries.
        """
        return await gmail_list_unread(ctx, max_results=max_results)

    @mcp.tool(
        name="gmail_get_email",
        annotations=ToolAnnotations(
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
        ),
    )
    async def gmail_get_email_tool(message_id: str) -> dict[str, Any]:
        """Get the full plain-text body of an email.

        Args:
            message_id: Gmail message ID (from gmail_list_unread).

        Returns:
            id, threadId, snippet and decoded body.
        """
        return await gmail_get_email(ctx, message_id)


def _register_http_routes(mcp: FastMCP, ctx: ServiceContext) -> None:
    """Expose the HTTP routes alongside the MCP transport endpoints."""
    for route in build_routes(ctx):
        methods = sorted((route.methods or {"GET"}) - {"HEAD"})
        mcp.custom_route(route.path, methods=methods, name=route.name)(route.endpoint)


# =============================================================================
# Server Factory
# =============================================================================


def create_server(ctx: ServiceContext | None = None) -> FastMCP:
    """Create and configure the FastMCP server instance.

    Args:
        ctx: Service context to share between routes and tools. A new one
            configured from the environment is built if omitted.

    Returns:
        Configured FastMCP server instance.
    """
    ctx = ctx or ServiceContext.from_env()

    server = FastMCP(
        name=SERVER_NAME,
        lifespan=server_lifespan,
    )

    _register_auth_tools(server, ctx)
    _register_mail_tools(server, ctx)
    _register_http_routes(server, ctx)

    logger.info("Gmail GPT server created with 6 tools registered")
    return server


# =============================================================================
# Global Server Instance
# =============================================================================

# Create the global server instance for use by __main__.py
mcp = create_server()
