"""Gmail get email operation - full plain-text body of one message."""

from __future__ import annotations

import logging
from typing import Any

from gmail_gpt.gmail.messages import extract_body, get_message
from gmail_gpt.middleware.validator import validate_message_id
from gmail_gpt.tools.base import (
    ServiceContext,
    build_success_response,
    error_response_for,
    execute_operation,
)
from gmail_gpt.utils.errors import GmailGPTError

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to fetch email"


async def gmail_get_email(ctx: ServiceContext, message_id: str | None) -> dict[str, Any]:
    """Fetch a message and decode its plain-text body.

    The body comes from the first ``text/plain`` part in the MIME tree, or
    from the root payload if there is none.

    Args:
        ctx: Service context.
        message_id: Gmail message ID.

    Returns:
        Success: {status, data: {id, threadId, snippet, body}}
        Error: {status, error, error_code}
    """

    def _get_operation() -> dict[str, Any]:
        credentials = ctx.gate.admit()
        validated_id = validate_message_id(message_id)
        with ctx.gmail_client.session(credentials) as service:
            message = get_message(service, validated_id, format="full")
        return {
            "id": message.get("id"),
            "threadId": message.get("threadId"),
            "snippet": message.get("snippet") or "",
            "body": extract_body(message),
        }

    try:
        result = await execute_operation("get_email", {"id": message_id}, _get_operation)
    except GmailGPTError as e:
        logger.error("getEmail error: %s", e)
        return error_response_for(e, FAILURE_MESSAGE)

    return build_success_response(data=result)
