"""HTTP routes for the Gmail GPT server.

Browser-facing routes (``/auth``, ``/oauth2callback``, ``/logout``) answer
with redirects or plain text; the API routes used by the agent answer with
the standard JSON envelope. Error kinds map to HTTP status codes:

- ADMISSION_ERROR → 401
- VALIDATION_ERROR → 400
- UPSTREAM_ERROR, CONFIGURATION_ERROR → 500
"""

from __future__ import annotations

import json
import logging
from typing import Any

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response
from starlette.routing import Route

from gmail_gpt.tools import (
    ServiceContext,
    gmail_auth_url,
    gmail_complete_login,
    gmail_get_auth_status,
    gmail_get_email,
    gmail_list_unread,
    gmail_logout,
    gmail_send_email,
)
from gmail_gpt.tools.base import ResponseKeys
from gmail_gpt.utils.errors import ErrorKind

logger = logging.getLogger(__name__)

STATUS_BY_ERROR_CODE = {
    ErrorKind.ADMISSION.value: 401,
    ErrorKind.VALIDATION.value: 400,
    ErrorKind.UPSTREAM.value: 500,
    ErrorKind.CONFIGURATION.value: 500,
}


def status_for(result: dict[str, Any]) -> int:
    """HTTP status code for an operation result."""
    if result.get(ResponseKeys.STATUS) != "error":
        return 200
    return STATUS_BY_ERROR_CODE.get(result.get(ResponseKeys.ERROR_CODE, ""), 500)


def json_response(result: dict[str, Any]) -> JSONResponse:
    return JSONResponse(result, status_code=status_for(result))


def text_response(result: dict[str, Any]) -> PlainTextResponse:
    if result.get(ResponseKeys.STATUS) == "error":
        return PlainTextResponse(result[ResponseKeys.ERROR], status_code=status_for(result))
    return PlainTextResponse(result.get(ResponseKeys.MESSAGE, "ok"))


def _flag(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.lower() not in ("false", "0", "no")


def build_routes(ctx: ServiceContext) -> list[Route]:
    """Build the route table bound to one service context.

    Args:
        ctx: Service context shared by every route.

    Returns:
        Starlette routes, in registration order.
    """

    async def root(request: Request) -> Response:
        return PlainTextResponse("Gmail GPT backend running")

    async def healthz(request: Request) -> Response:
        return PlainTextResponse("ok")

    async def auth(request: Request) -> Response:
        force_consent = _flag(request.query_params.get("force_consent"), True)
        result = await gmail_auth_url(ctx, force_consent=force_consent)
        if result[ResponseKeys.STATUS] == "error":
            return json_response(result)
        return RedirectResponse(result[ResponseKeys.DATA]["auth_url"], status_code=302)

    async def oauth2callback(request: Request) -> Response:
        result = await gmail_complete_login(
            ctx,
            code=request.query_params.get("code"),
            error=request.query_params.get("error"),
        )
        return text_response(result)

    async def logout(request: Request) -> Response:
        return text_response(await gmail_logout(ctx))

    async def status(request: Request) -> Response:
        return json_response(await gmail_get_auth_status(ctx))

    async def send_email(request: Request) -> Response:
        try:
            payload: Any = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.debug("sendEmail body is not valid JSON")
            payload = None
        return json_response(await gmail_send_email(ctx, payload))

    async def list_unread(request: Request) -> Response:
        return json_response(await gmail_list_unread(ctx))

    async def get_email(request: Request) -> Response:
        return json_response(await gmail_get_email(ctx, request.query_params.get("id")))

    return [
        Route("/", root, methods=["GET"]),
        Route("/healthz", healthz, methods=["GET"]),
        Route("/auth", auth, methods=["GET"]),
        Route("/oauth2callback", oauth2callback, methods=["GET"]),
        Route("/logout", logout, methods=["GET"]),
        Route("/status", status, methods=["GET"]),
        Route("/sendEmail", send_email, methods=["POST"]),
        Route("/listUnread", list_unread, methods=["GET"]),
        Route("/getEmail", get_email, methods=["GET"]),
    ]


def create_app(ctx: ServiceContext) -> Starlette:
    """Create a Starlette app serving only the HTTP routes."""
    return Starlette(routes=build_routes(ctx))


__all__ = [
    "STATUS_BY_ERROR_CODE",
    "build_routes",
    "create_app",
    "status_for",
]
