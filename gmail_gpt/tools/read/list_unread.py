"""Gmail list unread operation."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from gmail_gpt.gmail.messages import MAX_UNREAD_RESULTS, list_unread
from gmail_gpt.schemas.tools import ListUnreadParams
from gmail_gpt.tools.base import (
    ServiceContext,
    build_success_response,
    error_response_for,
    execute_operation,
)
from gmail_gpt.utils.errors import GmailGPTError, ValidationError

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to list unread emails"


async def gmail_list_unread(
    ctx: ServiceContext, max_results: int = MAX_UNREAD_RESULTS
) -> dict[str, Any]:
    """List up to ten unread messages, newest first as Gmail orders them.

    Each summary holds id, from, subject, date and snippet. If fetching any
    message's details fails, the whole call fails.

    Args:
        ctx: Service context.
        max_results: Maximum summaries to return (1-10).

    Returns:
        Success: {status, data: {messages: [...]}, count}
        Error: {status, error, error_code}
    """

    def _list_operation() -> list[dict[str, str]]:
        credentials = ctx.gate.admit()
        try:
            params = ListUnreadParams(max_results=max_results)
        except PydanticValidationError as e:
            raise ValidationError(
                f"max_results must be between 1 and {MAX_UNREAD_RESULTS}",
                field="max_results",
            ) from e
        with ctx.gmail_client.session(credentials) as service:
            return list_unread(service, max_results=params.max_results)

    try:
        messages = await execute_operation(
            "list_unread", {"max_results": max_results}, _list_operation
        )
    except GmailGPTError as e:
        logger.error("listUnread error: %s", e)
        return error_response_for(e, FAILURE_MESSAGE)

    return build_success_response(data={"messages": messages}, count=len(messages))
