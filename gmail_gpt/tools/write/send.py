"""Gmail send email operation."""

from __future__ import annotations

import logging
from typing import Any

from gmail_gpt.gmail.messages import build_raw_message, send_message
from gmail_gpt.middleware.validator import validate_send_request
from gmail_gpt.tools.base import (
    ServiceContext,
    build_success_response,
    error_response_for,
    execute_operation,
)
from gmail_gpt.utils.errors import GmailGPTError

logger = logging.getLogger(__name__)

OPERATION_NAME = "send_email"
FAILURE_MESSAGE = "Failed to send email"


async def gmail_send_email(ctx: ServiceContext, payload: Any) -> dict[str, Any]:
    """Send a plain-text email from the connected mailbox.

    Order of checks:
        1. Admission: credentials must be held
        2. Validation: ``to``, ``subject`` and ``message`` (or ``body``)
           must be present and non-empty
        3. Gmail API send

    Args:
        ctx: Service context.
        payload: Decoded request body.

    Returns:
        dict with either:
            - Success response: status, data with id and thread_id
            - Error response: status, error, error_code
    """
    audit_params = payload if isinstance(payload, dict) else {}

    def _send_operation() -> dict[str, Any]:
        credentials = ctx.gate.admit()
        params = validate_send_request(payload)
        raw = build_raw_message(params.to, params.subject, params.message)
        with ctx.gmail_client.session(credentials) as service:
            sent = send_message(service, raw)
        return {"id": sent.get("id"), "thread_id": sent.get("threadId")}

    try:
        result = await execute_operation(OPERATION_NAME, audit_params, _send_operation)
    except GmailGPTError as e:
        logger.error("sendEmail error: %s", e)
        return error_response_for(e, FAILURE_MESSAGE)

    logger.info("Email sent successfully: %s", result.get("id"))
    return build_success_response(data=result, message="Email sent successfully")
